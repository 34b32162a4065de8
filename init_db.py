# init_db.py
import logging

from config.bd import UniqueViolation
from config.seed_floors import OSIX_FLOORS
from logic.auth import hash_password
from logic.mappers import floor_to_row, outlet_to_row, room_to_row

logger = logging.getLogger(__name__)


def initialize_database(app):
    logger.info("--- Starting database initialization ---")

    # 1. Wait for the database to accept connections
    if not app.db.wait_until_ready():
        raise RuntimeError("Could not connect to the database. Aborting.")

    # 2. Create the schema (every table, idempotent)
    app.db.init_schema()

    # 3. Seed initial data (default outlet, its floor plan, admin)
    with app.app_context():
        seed_default_outlet(app.store, app.config)
        seed_admin(app.store, app.config)

    logger.info("Database initialized and seeded.")


def seed_default_outlet(store, config, floors=OSIX_FLOORS):
    """Insert the default outlet and its floor plan where absent.

    Another worker may seed concurrently; a row that appears between the
    lookup and the insert is re-read instead of failing startup.
    """
    slug = config["DEFAULT_OUTLET_SLUG"]
    outlet = store.get_outlet_by_slug(slug)
    if not outlet:
        try:
            outlet = store.insert_outlet(**outlet_to_row({
                "slug": slug,
                "name": config["DEFAULT_OUTLET_NAME"],
                "companyName": config["DEFAULT_COMPANY_NAME"],
            }))
            logger.info("  -> Outlet '%s' created.", slug)
        except UniqueViolation:
            outlet = store.get_outlet_by_slug(slug)

    created_rooms = 0
    for floor in floors:
        row = store.get_floor(outlet["id"], floor["level"])
        if not row:
            try:
                row = store.insert_floor(**floor_to_row(dict(floor, outletId=outlet["id"])))
                logger.info("  -> Floor %s of '%s' created.", floor["level"], slug)
            except UniqueViolation:
                row = store.get_floor(outlet["id"], floor["level"])

        for room in floor["rooms"]:
            if store.get_room(outlet["id"], room["id"]):
                continue
            try:
                store.insert_room(room_to_row(dict(room, outletId=outlet["id"], floorId=row["id"])))
            except UniqueViolation:
                # Seeded by another worker
                continue
            created_rooms += 1

    if created_rooms:
        logger.info("  -> %d room(s) created in '%s'.", created_rooms, slug)
    return outlet


def seed_admin(store, config):
    email = (config.get("ADMIN_EMAIL") or "").strip().lower()
    password = config.get("ADMIN_PASSWORD")
    if not email or not password:
        logger.info("ADMIN_EMAIL/ADMIN_PASSWORD not set, no admin account seeded.")
        return None

    existing = store.get_user_by_email(email)
    if existing:
        return existing

    try:
        user = store.insert_user(
            email=email,
            full_name=config.get("ADMIN_NAME") or "Administrator",
            password_hash=hash_password(password, config.get("BCRYPT_ROUNDS")),
            role="admin",
        )
    except UniqueViolation:
        # Another worker seeded it first
        logger.info("Admin account %s already existed.", email)
        return store.get_user_by_email(email)

    logger.info("  -> Admin user '%s' created.", email)
    return user
