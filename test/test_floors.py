import io
import os

from config.seed_floors import OSIX_FLOORS


def png(name="plan.png"):
    return (io.BytesIO(b"\x89PNG\r\n\x1a\n fake image"), name, "image/png")


def uploads(app):
    return sorted(os.listdir(app.config["UPLOADS_DIR"]))


def test_list_floors_is_public_and_legacy_alias_matches(client):
    r = client.get("/api/outlets/bhaskara-osix/floors")
    assert r.status_code == 200
    floors = r.get_json()
    assert [f["level"] for f in floors] == [1, 2, 3, 4]
    assert sum(len(f["rooms"]) for f in floors) == sum(len(f["rooms"]) for f in OSIX_FLOORS) == 77
    assert all(f["outletSlug"] == "bhaskara-osix" for f in floors)

    assert client.get("/api/floors").get_json() == floors


def test_get_single_floor(client):
    floor = client.get("/api/floors/1").get_json()
    assert floor["name"] == "Floor 1"
    assert floor["viewBox"] == "0 0 1500 3000"
    codes = {room["id"] for room in floor["rooms"]}
    assert {"C-120", "B-101"} <= codes

    assert client.get("/api/floors/99").status_code == 404
    assert client.get("/api/floors/abc").status_code == 400
    assert client.get("/api/outlets/nowhere/floors/1").status_code == 404


def test_create_floor_with_json(client, editor_headers):
    r = client.post("/api/floors", headers=editor_headers, json={
        "level": 5, "name": "Rooftop Annex", "viewBox": "0 0 800 600",
    })
    assert r.status_code == 201
    body = r.get_json()
    assert body["level"] == 5
    assert body["imageUrl"] == ""
    assert body["rooms"] == []


def test_create_floor_requires_login(client):
    r = client.post("/api/floors", json={"level": 5, "name": "X", "viewBox": "0 0 1 1"})
    assert r.status_code == 401


def test_duplicate_level_is_409_and_existing_floor_is_kept(app, client, editor_headers):
    before = client.get("/api/floors/2").get_json()

    r = client.post(
        "/api/floors",
        headers=editor_headers,
        data={"level": "2", "name": "Impostor", "viewBox": "0 0 1 1", "image": png()},
        content_type="multipart/form-data",
    )
    assert r.status_code == 409
    assert client.get("/api/floors/2").get_json() == before
    assert uploads(app) == []


def test_create_floor_with_multipart_image(app, client, editor_headers):
    r = client.post(
        "/api/outlets/bhaskara-osix/floors",
        headers=editor_headers,
        data={"level": "6", "name": "Annex", "viewBox": "0 0 10 10", "image": png("Plan 6.JPG")},
        content_type="multipart/form-data",
    )
    assert r.status_code == 201, r.get_json()
    image_url = r.get_json()["imageUrl"]
    assert image_url.startswith("http://testserver/uploads/bhaskara-osix-floor-6-")
    assert image_url.endswith(".jpg")

    filename = image_url.rsplit("/", 1)[1]
    assert uploads(app) == [filename]
    served = client.get(f"/uploads/{filename}")
    assert served.status_code == 200
    assert served.data.startswith(b"\x89PNG")


def test_invalid_multipart_create_removes_stored_file(app, client, editor_headers):
    r = client.post(
        "/api/floors",
        headers=editor_headers,
        data={"level": "7", "image": png()},
        content_type="multipart/form-data",
    )
    assert r.status_code == 400
    assert set(r.get_json()["fields"]) == {"name", "viewBox"}
    assert uploads(app) == []


def test_update_floor(client, editor_headers):
    r = client.put("/api/floors/3", headers=editor_headers, json={"name": "Third", "viewBox": "0 0 5 5"})
    assert r.status_code == 200
    assert r.get_json()["name"] == "Third"
    assert r.get_json()["viewBox"] == "0 0 5 5"
    assert len(r.get_json()["rooms"]) > 0

    r = client.put("/api/floors/3", headers=editor_headers, json={"level": 2})
    assert r.status_code == 409

    r = client.put("/api/floors/3", headers=editor_headers, json={"level": 8})
    assert r.status_code == 200
    assert r.get_json()["level"] == 8
    assert client.get("/api/floors/3").status_code == 404

    assert client.put("/api/floors/3", headers=editor_headers, json={"name": "x"}).status_code == 404
    assert client.put("/api/floors/8", headers=editor_headers, json={}).status_code == 400


def test_upload_image_replaces_previous_local_file(app, client, editor_headers):
    r = client.post(
        "/api/floors/1/image",
        headers=editor_headers,
        data={"image": png("first.png")},
        content_type="multipart/form-data",
    )
    assert r.status_code == 200
    first = r.get_json()["imageUrl"].rsplit("/", 1)[1]
    assert uploads(app) == [first]
    assert client.get("/api/floors/1").get_json()["imageUrl"].endswith(first)

    r = client.post(
        "/api/floors/1/image",
        headers=editor_headers,
        data={"image": png("second.webp")},
        content_type="multipart/form-data",
    )
    assert r.status_code == 200
    second = r.get_json()["imageUrl"].rsplit("/", 1)[1]
    assert second.endswith(".webp")
    assert uploads(app) == [second]


def test_upload_rejects_non_image_without_writing(app, client, editor_headers):
    before = client.get("/api/floors/2").get_json()["imageUrl"]

    r = client.post(
        "/api/floors/2/image",
        headers=editor_headers,
        data={"image": (io.BytesIO(b"%PDF-1.4"), "plan.pdf", "application/pdf")},
        content_type="multipart/form-data",
    )
    assert r.status_code == 400
    assert uploads(app) == []
    assert client.get("/api/floors/2").get_json()["imageUrl"] == before


def test_upload_without_file_or_for_unknown_floor(app, client, editor_headers):
    r = client.post("/api/floors/1/image", headers=editor_headers, data={}, content_type="multipart/form-data")
    assert r.status_code == 400

    r = client.post(
        "/api/floors/42/image",
        headers=editor_headers,
        data={"image": png()},
        content_type="multipart/form-data",
    )
    assert r.status_code == 404
    assert uploads(app) == []


def test_delete_floor_removes_its_rooms(app, client, admin_headers):
    r = client.delete("/api/floors/4", headers=admin_headers)
    assert r.status_code == 200
    assert r.get_json()["level"] == 4

    assert client.get("/api/floors/4").status_code == 404
    floors = client.get("/api/floors").get_json()
    assert [f["level"] for f in floors] == [1, 2, 3]
    with app.app_context():
        outlet = app.store.get_outlet_by_slug("bhaskara-osix")
        assert len(app.store.list_rooms(outlet["id"])) == sum(len(f["rooms"]) for f in floors)

    assert client.delete("/api/floors/4", headers=admin_headers).status_code == 404


def test_update_floor_with_multipart_image(app, client, editor_headers):
    r = client.put(
        "/api/floors/2",
        headers=editor_headers,
        data={"image": png("new.png")},
        content_type="multipart/form-data",
    )
    assert r.status_code == 200, r.get_json()
    filename = r.get_json()["imageUrl"].rsplit("/", 1)[1]
    assert uploads(app) == [filename]

    r = client.put(
        "/api/floors/2",
        headers=editor_headers,
        data={"level": "1", "image": png("clash.gif")},
        content_type="multipart/form-data",
    )
    assert r.status_code == 409
    assert uploads(app) == [filename]

    r = client.put("/api/floors/2", headers=editor_headers, json={"imageUrl": "https://cdn.example.com/p.png"})
    assert r.status_code == 200
    assert uploads(app) == []


def test_oversized_level_is_rejected_as_bad_request(client, editor_headers):
    assert client.get("/api/floors/99999999999999999999").status_code == 400

    r = client.post("/api/floors", headers=editor_headers, json={
        "level": 2 ** 63, "name": "Too High", "viewBox": "0 0 1 1",
    })
    assert r.status_code == 400
    assert r.get_json()["fields"] == {"level": "is out of range"}

    r = client.put("/api/rooms/B-101", headers=editor_headers, json={"floorLevel": 2 ** 31})
    assert r.status_code == 400
