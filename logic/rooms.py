import logging

from flask import Blueprint, current_app, jsonify, request

from config.bd import MissingReference, UniqueViolation
from logic.decorators import login_required
from logic.errors import ConflictError, NotFoundError
from logic.floors import find_floor
from logic.mappers import room_from_row, room_to_row
from logic.outlets import resolve_outlet
from logic.validation import parse_bulk_status, parse_level, parse_room_create, parse_room_update

logger = logging.getLogger(__name__)

rooms_bp = Blueprint("rooms", __name__)


def find_room(outlet, code):
    room = current_app.store.get_room(outlet["id"], code)
    if not room:
        raise NotFoundError(f"Room {code} not found in outlet {outlet['slug']}.")
    return room


@rooms_bp.route("/floors/<level>/rooms", methods=["POST"], defaults={"slug": None})
@rooms_bp.route("/outlets/<slug>/floors/<level>/rooms", methods=["POST"])
@login_required
def create_room(slug, level):
    level = parse_level(level)
    payload = parse_room_create(request.get_json(silent=True))
    outlet = resolve_outlet(slug)
    floor = find_floor(outlet, level)

    if current_app.store.get_room(outlet["id"], payload.code):
        raise ConflictError(f"Room {payload.code} already exists in outlet {outlet['slug']}.")

    try:
        row = current_app.store.insert_room(room_to_row({
            "id": payload.code,
            "outletId": outlet["id"],
            "floorId": floor["id"],
            "x": payload.x,
            "y": payload.y,
            "width": payload.width,
            "height": payload.height,
            "status": payload.status,
            "tenantName": payload.tenant_name,
        }))
    except UniqueViolation:
        raise ConflictError(f"Room {payload.code} already exists in outlet {outlet['slug']}.")

    logger.info("Room %s created on floor %s of %s", payload.code, level, outlet["slug"])
    return jsonify(room_from_row(row)), 201


@rooms_bp.route("/rooms/bulk-status", methods=["PATCH"], defaults={"slug": None})
@rooms_bp.route("/outlets/<slug>/rooms/bulk-status", methods=["PATCH"])
@login_required
def bulk_update_status(slug):
    payload = parse_bulk_status(request.get_json(silent=True))
    outlet = resolve_outlet(slug)

    rows = current_app.store.bulk_update_status(outlet["id"], payload.codes, payload.status)
    if not rows:
        raise NotFoundError(f"No rooms to update in outlet {outlet['slug']}.")

    logger.info("Set %d room(s) in %s to %s", len(rows), outlet["slug"], payload.status)
    return jsonify({"updated": [room_from_row(r) for r in rows]})


@rooms_bp.route("/rooms/<room_code>", methods=["PUT"], defaults={"slug": None})
@rooms_bp.route("/outlets/<slug>/rooms/<room_code>", methods=["PUT"])
@login_required
def update_room(slug, room_code):
    payload = parse_room_update(request.get_json(silent=True))
    outlet = resolve_outlet(slug)
    room = find_room(outlet, room_code)

    changes = {}
    for field in ("x", "y", "width", "height", "status"):
        value = getattr(payload, field)
        if value is not None:
            changes[field] = value
    if payload.tenant_name is not None:
        changes["tenant_name"] = payload.tenant_name or None
    if payload.code is not None and payload.code != room["room_code"]:
        if current_app.store.get_room(outlet["id"], payload.code):
            raise ConflictError(f"Room {payload.code} already exists in outlet {outlet['slug']}.")
        changes["room_code"] = payload.code
    if payload.floor_level is not None:
        changes["floor_id"] = find_floor(outlet, payload.floor_level)["id"]

    try:
        row = current_app.store.update_room(room["id"], changes)
    except UniqueViolation:
        raise ConflictError(f"Room {payload.code} already exists in outlet {outlet['slug']}.")
    except MissingReference:
        raise NotFoundError(f"Floor {payload.floor_level} not found in outlet {outlet['slug']}.")

    return jsonify(room_from_row(row))


@rooms_bp.route("/rooms/<room_code>", methods=["DELETE"], defaults={"slug": None})
@rooms_bp.route("/outlets/<slug>/rooms/<room_code>", methods=["DELETE"])
@login_required
def delete_room(slug, room_code):
    outlet = resolve_outlet(slug)
    row = current_app.store.delete_room(outlet["id"], room_code)
    if not row:
        raise NotFoundError(f"Room {room_code} not found in outlet {outlet['slug']}.")

    logger.info("Room %s deleted from %s", room_code, outlet["slug"])
    return jsonify(room_from_row(row))
