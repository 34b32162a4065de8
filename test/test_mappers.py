from logic.mappers import (
    floor_to_row,
    floors_from_rows,
    outlet_from_row,
    outlet_to_row,
    room_from_row,
    room_to_row,
    user_from_row,
)

ROOM_ROW = {
    "id": 7,
    "outlet_id": 1,
    "floor_id": 2,
    "room_code": "B-101",
    "x": 400.0,
    "y": 2150.0,
    "width": 150.0,
    "height": 350.0,
    "status": "Booked",
    "tenant_name": None,
}


def test_room_code_becomes_public_id_and_null_tenant_is_absent():
    room = room_from_row(ROOM_ROW)
    assert room["id"] == "B-101"
    assert room["outletId"] == 1
    assert room["floorId"] == 2
    assert "tenantName" not in room


def test_room_to_row_maps_back_and_blank_tenant_to_null():
    room = dict(room_from_row(dict(ROOM_ROW, tenant_name="Budi")))
    row = room_to_row(room)
    assert row["room_code"] == "B-101"
    assert row["tenant_name"] == "Budi"

    room["tenantName"] = ""
    assert room_to_row(room)["tenant_name"] is None


def test_floors_group_their_rooms():
    floors = [
        {"id": 2, "outlet_id": 1, "level": 1, "name": "Floor 1", "image_url": None, "view_box": "0 0 1 1"},
        {"id": 3, "outlet_id": 1, "level": 2, "name": "Floor 2", "image_url": "x.png", "view_box": "0 0 1 1"},
    ]
    result = floors_from_rows(floors, [ROOM_ROW], outlet_slug="osix")

    assert [f["level"] for f in result] == [1, 2]
    assert result[0]["imageUrl"] == ""
    assert result[0]["outletSlug"] == "osix"
    assert [r["id"] for r in result[0]["rooms"]] == ["B-101"]
    assert result[1]["rooms"] == []


def test_outlet_and_user_rows():
    assert outlet_from_row({"id": 1, "slug": "a", "name": "A", "company_name": "Co"}) == {
        "id": 1, "slug": "a", "name": "A", "companyName": "Co",
    }
    user = user_from_row({"id": 3, "email": "a@b.co", "full_name": "A", "role": "admin", "password_hash": "h"})
    assert "password_hash" not in user and "passwordHash" not in user
    assert user["fullName"] == "A"


def test_outlet_and_floor_documents_map_to_insert_columns():
    assert outlet_to_row({"slug": "a", "name": "A", "companyName": "Co", "id": 9}) == {
        "slug": "a", "name": "A", "company_name": "Co",
    }
    row = floor_to_row({"outletId": 1, "level": 2, "name": "F2", "viewBox": "0 0 1 1", "rooms": []})
    assert row == {"outlet_id": 1, "level": 2, "name": "F2", "image_url": "", "view_box": "0 0 1 1"}
