# logic/mappers.py
"""Row <-> public shape translation for outlets, floors, rooms and users.

Rows are the plain dicts returned by the persistence adapter (snake_case
columns); public shapes are the camelCase documents the API returns.
"""


def outlet_from_row(row):
    return {
        "id": row["id"],
        "slug": row["slug"],
        "name": row["name"],
        "companyName": row["company_name"],
    }


def outlet_to_row(outlet):
    return {
        "slug": outlet.get("slug"),
        "name": outlet.get("name"),
        "company_name": outlet.get("companyName"),
    }


def room_from_row(row):
    room = {
        "id": row["room_code"],
        "outletId": row["outlet_id"],
        "floorId": row["floor_id"],
        "x": row["x"],
        "y": row["y"],
        "width": row["width"],
        "height": row["height"],
        "status": row["status"],
    }
    if row.get("tenant_name"):
        room["tenantName"] = row["tenant_name"]
    return room


def room_to_row(room):
    return {
        "room_code": room["id"],
        "outlet_id": room.get("outletId"),
        "floor_id": room.get("floorId"),
        "x": room["x"],
        "y": room["y"],
        "width": room["width"],
        "height": room["height"],
        "status": room["status"],
        "tenant_name": room.get("tenantName") or None,
    }


def floor_from_row(row, rooms=(), outlet_slug=None):
    """``rooms`` are room rows already filtered to this floor."""
    return {
        "id": row["id"],
        "outletId": row["outlet_id"],
        "outletSlug": outlet_slug if outlet_slug is not None else row.get("outlet_slug"),
        "level": row["level"],
        "name": row["name"],
        "imageUrl": row.get("image_url") or "",
        "viewBox": row["view_box"],
        "rooms": [room_from_row(r) for r in rooms],
    }


def floor_to_row(floor):
    return {
        "outlet_id": floor.get("outletId"),
        "level": floor["level"],
        "name": floor["name"],
        "image_url": floor.get("imageUrl") or "",
        "view_box": floor["viewBox"],
    }


def floors_from_rows(floor_rows, room_rows, outlet_slug=None):
    by_floor = {}
    for room in room_rows:
        by_floor.setdefault(room["floor_id"], []).append(room)
    return [floor_from_row(f, by_floor.get(f["id"], []), outlet_slug) for f in floor_rows]


def user_from_row(row):
    return {
        "id": row["id"],
        "email": row["email"],
        "fullName": row["full_name"],
        "role": row["role"],
    }
