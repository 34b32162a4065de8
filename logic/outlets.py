import logging

from flask import Blueprint, current_app, jsonify, request

from config.bd import UniqueViolation
from logic.decorators import admin_required
from logic.errors import ConflictError, NotFoundError
from logic.mappers import outlet_from_row, outlet_to_row
from logic.uploads import delete_local_image
from logic.validation import parse_outlet_create, parse_outlet_update, slugify

logger = logging.getLogger(__name__)

outlets_bp = Blueprint("outlets", __name__)


def resolve_outlet(slug=None):
    """Outlet row for ``slug``; legacy routes pass None and get the default outlet."""
    slug = slug or current_app.config["DEFAULT_OUTLET_SLUG"]
    outlet = current_app.store.get_outlet_by_slug(slug)
    if not outlet:
        raise NotFoundError(f"Outlet {slug} not found.")
    return outlet


def available_slug(base):
    candidate = base
    suffix = 2
    while current_app.store.get_outlet_by_slug(candidate):
        candidate = f"{base}-{suffix}"
        suffix += 1
    return candidate


@outlets_bp.route("/outlets", methods=["GET"])
def list_outlets():
    return jsonify([outlet_from_row(r) for r in current_app.store.list_outlets()])


@outlets_bp.route("/outlets/<slug>", methods=["GET"])
def get_outlet(slug):
    return jsonify(outlet_from_row(resolve_outlet(slug)))


@outlets_bp.route("/outlets", methods=["POST"])
@admin_required
def create_outlet():
    payload = parse_outlet_create(request.get_json(silent=True))

    if payload.slug:
        slug = payload.slug
        if current_app.store.get_outlet_by_slug(slug):
            raise ConflictError(f"Outlet {slug} already exists.")
    else:
        slug = available_slug(slugify(payload.name))

    company_name = payload.company_name or current_app.config["DEFAULT_COMPANY_NAME"]
    try:
        row = current_app.store.insert_outlet(**outlet_to_row({
            "slug": slug, "name": payload.name, "companyName": company_name,
        }))
    except UniqueViolation:
        raise ConflictError(f"Outlet {slug} already exists.")

    logger.info("Outlet %s created", slug)
    return jsonify(outlet_from_row(row)), 201


@outlets_bp.route("/outlets/<slug>", methods=["PUT"])
@admin_required
def update_outlet(slug):
    payload = parse_outlet_update(request.get_json(silent=True))
    outlet = resolve_outlet(slug)

    changes = {}
    if payload.name is not None:
        changes["name"] = payload.name
    if payload.company_name is not None:
        changes["company_name"] = payload.company_name
    if payload.slug is not None and payload.slug != outlet["slug"]:
        if current_app.store.get_outlet_by_slug(payload.slug):
            raise ConflictError(f"Outlet {payload.slug} already exists.")
        changes["slug"] = payload.slug

    try:
        row = current_app.store.update_outlet(outlet["id"], changes)
    except UniqueViolation:
        raise ConflictError(f"Outlet {payload.slug} already exists.")
    return jsonify(outlet_from_row(row))


@outlets_bp.route("/outlets/<slug>", methods=["DELETE"])
@admin_required
def delete_outlet(slug):
    outlet = resolve_outlet(slug)

    images = current_app.store.delete_outlet(outlet["id"])
    if images is None:
        raise NotFoundError(f"Outlet {slug} not found.")

    for image_url in images:
        delete_local_image(image_url)

    logger.info("Outlet %s deleted with its floors and rooms", slug)
    return jsonify({"message": f"Outlet {slug} deleted.", "slug": slug})
