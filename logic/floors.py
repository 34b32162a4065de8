import logging

from flask import Blueprint, current_app, jsonify, request

from config.bd import UniqueViolation
from logic.decorators import admin_required, login_required
from logic.errors import ConflictError, NotFoundError, ValidationError
from logic.mappers import floor_from_row, floor_to_row, floors_from_rows
from logic.outlets import resolve_outlet
from logic.uploads import delete_local_image, public_url, remove_upload, save_image
from logic.validation import parse_floor_create, parse_floor_update, parse_level

logger = logging.getLogger(__name__)

floors_bp = Blueprint("floors", __name__)


def request_payload():
    """Form fields for multipart requests, the JSON body otherwise."""
    if request.mimetype in ("multipart/form-data", "application/x-www-form-urlencoded"):
        return request.form
    return request.get_json(silent=True) or {}


def uploaded_image():
    upload = request.files.get("image")
    if upload is None or not upload.filename:
        return None
    return upload


def find_floor(outlet, level):
    floor = current_app.store.get_floor(outlet["id"], level)
    if not floor:
        raise NotFoundError(f"Floor {level} not found in outlet {outlet['slug']}.")
    return floor


def floor_with_rooms(outlet, floor):
    rooms = current_app.store.list_rooms(outlet["id"], floor_id=floor["id"])
    return floor_from_row(floor, rooms, outlet["slug"])


@floors_bp.route("/floors", methods=["GET"], defaults={"slug": None})
@floors_bp.route("/outlets/<slug>/floors", methods=["GET"])
def list_floors(slug):
    outlet = resolve_outlet(slug)
    floors = current_app.store.list_floors(outlet["id"])
    rooms = current_app.store.list_rooms(outlet["id"])
    return jsonify(floors_from_rows(floors, rooms, outlet["slug"]))


@floors_bp.route("/floors/<level>", methods=["GET"], defaults={"slug": None})
@floors_bp.route("/outlets/<slug>/floors/<level>", methods=["GET"])
def get_floor(slug, level):
    level = parse_level(level)
    outlet = resolve_outlet(slug)
    return jsonify(floor_with_rooms(outlet, find_floor(outlet, level)))


@floors_bp.route("/floors", methods=["POST"], defaults={"slug": None})
@floors_bp.route("/outlets/<slug>/floors", methods=["POST"])
@login_required
def create_floor(slug):
    upload = uploaded_image()
    filename = None
    if upload is not None:
        outlet_slug = slug or current_app.config["DEFAULT_OUTLET_SLUG"]
        filename = save_image(upload, outlet_slug, request.form.get("level", "new"))

    try:
        payload = parse_floor_create(request_payload())
        outlet = resolve_outlet(slug)

        if current_app.store.get_floor(outlet["id"], payload.level):
            raise ConflictError(f"Floor {payload.level} already exists in outlet {outlet['slug']}.")

        image_url = public_url(filename) if filename else (payload.image_url or "")
        try:
            row = current_app.store.insert_floor(**floor_to_row({
                "outletId": outlet["id"],
                "level": payload.level,
                "name": payload.name,
                "viewBox": payload.view_box,
                "imageUrl": image_url,
            }))
        except UniqueViolation:
            raise ConflictError(f"Floor {payload.level} already exists in outlet {outlet['slug']}.")
    except Exception:
        remove_upload(filename)
        raise

    logger.info("Floor %s created in outlet %s", row["level"], outlet["slug"])
    return jsonify(floor_from_row(row, [], outlet["slug"])), 201


@floors_bp.route("/floors/<level>", methods=["PUT"], defaults={"slug": None})
@floors_bp.route("/outlets/<slug>/floors/<level>", methods=["PUT"])
@login_required
def update_floor(slug, level):
    level = parse_level(level)
    upload = uploaded_image()
    filename = None
    if upload is not None:
        filename = save_image(upload, slug or current_app.config["DEFAULT_OUTLET_SLUG"], level)

    try:
        payload = parse_floor_update(request_payload(), has_image=filename is not None)
        outlet = resolve_outlet(slug)
        floor = find_floor(outlet, level)

        changes = {}
        if payload.name is not None:
            changes["name"] = payload.name
        if payload.view_box is not None:
            changes["view_box"] = payload.view_box
        if filename:
            changes["image_url"] = public_url(filename)
        elif payload.image_url is not None:
            changes["image_url"] = payload.image_url
        if payload.level is not None and payload.level != floor["level"]:
            if current_app.store.get_floor(outlet["id"], payload.level):
                raise ConflictError(f"Floor {payload.level} already exists in outlet {outlet['slug']}.")
            changes["level"] = payload.level

        try:
            row = current_app.store.update_floor(floor["id"], changes)
        except UniqueViolation:
            raise ConflictError(f"Floor {payload.level} already exists in outlet {outlet['slug']}.")
    except Exception:
        remove_upload(filename)
        raise

    if "image_url" in changes and changes["image_url"] != floor["image_url"]:
        delete_local_image(floor["image_url"])

    return jsonify(floor_with_rooms(outlet, row))


@floors_bp.route("/floors/<level>", methods=["DELETE"], defaults={"slug": None})
@floors_bp.route("/outlets/<slug>/floors/<level>", methods=["DELETE"])
@admin_required
def delete_floor(slug, level):
    level = parse_level(level)
    outlet = resolve_outlet(slug)
    floor = find_floor(outlet, level)

    deleted = current_app.store.delete_floor(floor["id"])
    if not deleted:
        raise NotFoundError(f"Floor {level} not found in outlet {outlet['slug']}.")

    delete_local_image(deleted["image_url"])
    logger.info("Floor %s deleted from outlet %s", level, outlet["slug"])
    return jsonify({"message": f"Floor {level} deleted.", "level": level})


@floors_bp.route("/floors/<level>/image", methods=["POST"], defaults={"slug": None})
@floors_bp.route("/outlets/<slug>/floors/<level>/image", methods=["POST"])
@login_required
def upload_floor_image(slug, level):
    level = parse_level(level)
    upload = uploaded_image()
    if upload is None:
        raise ValidationError(
            "Image file not found in field `image`.", fields={"image": "is required"}
        )

    filename = save_image(upload, slug or current_app.config["DEFAULT_OUTLET_SLUG"], level)
    try:
        outlet = resolve_outlet(slug)
        floor = find_floor(outlet, level)
        image_url = public_url(filename)
        previous = current_app.store.set_floor_image(floor["id"], image_url)
    except Exception:
        remove_upload(filename)
        raise

    delete_local_image(previous)
    return jsonify({"imageUrl": image_url})
