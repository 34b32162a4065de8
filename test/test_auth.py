from flask_jwt_extended import decode_token

from conftest import ADMIN_EMAIL, ADMIN_PASSWORD, EDITOR_PASSWORD, bearer, login


def test_login_issues_token_with_identity_claims(app, client):
    r = client.post("/api/auth/login", json={"email": "ADMIN@example.com ", "password": ADMIN_PASSWORD})
    assert r.status_code == 200
    body = r.get_json()
    assert body["user"]["email"] == ADMIN_EMAIL
    assert body["user"]["role"] == "admin"
    assert "passwordHash" not in body["user"]

    with app.app_context():
        claims = decode_token(body["token"])
    assert claims["sub"] == str(body["user"]["id"])
    assert claims["email"] == ADMIN_EMAIL
    assert claims["role"] == "admin"
    assert claims["name"] == body["user"]["fullName"]
    assert claims["exp"] - claims["iat"] == 7 * 24 * 3600


def test_login_rejects_bad_credentials(client):
    r = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": "wrong-password"})
    assert r.status_code == 401
    r = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "whatever"})
    assert r.status_code == 401
    r = client.post("/api/auth/login", json={"email": ADMIN_EMAIL})
    assert r.status_code == 400


def test_me_returns_current_user(client, editor, editor_headers):
    r = client.get("/api/auth/me", headers=editor_headers)
    assert r.status_code == 200
    assert r.get_json() == editor


def test_missing_or_malformed_token_is_401(client):
    assert client.get("/api/auth/me").status_code == 401
    assert client.get("/api/auth/me", headers=bearer("not-a-token")).status_code == 401
    assert client.get("/api/users", headers={"Authorization": "Token abc"}).status_code == 401


def test_admin_route_rejects_editor_with_403(client, editor_headers):
    assert client.get("/api/users", headers=editor_headers).status_code == 403
    r = client.post("/api/outlets", headers=editor_headers, json={"name": "New Outlet"})
    assert r.status_code == 403
    assert client.delete("/api/floors/1", headers=editor_headers).status_code == 403


def test_admin_route_without_token_is_401(client):
    assert client.post("/api/outlets", json={"name": "New Outlet"}).status_code == 401
    assert client.delete("/api/outlets/bhaskara-osix").status_code == 401


def test_deleted_user_token_is_rejected(client, admin_headers, editor, editor_headers):
    assert client.get("/api/auth/me", headers=editor_headers).status_code == 200

    r = client.delete(f"/api/users/{editor['id']}", headers=admin_headers)
    assert r.status_code == 200

    assert client.get("/api/auth/me", headers=editor_headers).status_code == 401
    r = client.put("/api/rooms/B-101", headers=editor_headers, json={"status": "Booked"})
    assert r.status_code == 401


def test_user_management(client, admin_headers, editor):
    assert editor["email"] == "editor@example.com"
    assert editor["role"] == "editor"

    listed = client.get("/api/users", headers=admin_headers).get_json()
    assert {u["email"] for u in listed} == {ADMIN_EMAIL, "editor@example.com"}

    r = client.post("/api/users", headers=admin_headers, json={
        "email": "EDITOR@example.com", "fullName": "Dup", "password": EDITOR_PASSWORD,
    })
    assert r.status_code == 409

    r = client.post("/api/users", headers=admin_headers, json={"email": "x@example.com"})
    assert r.status_code == 400
    assert set(r.get_json()["fields"]) == {"fullName", "password"}

    assert client.delete("/api/users/9999", headers=admin_headers).status_code == 404


def test_admin_cannot_delete_own_account(client, admin_headers):
    me = client.get("/api/auth/me", headers=admin_headers).get_json()
    r = client.delete(f"/api/users/{me['id']}", headers=admin_headers)
    assert r.status_code == 400


def test_new_user_can_log_in(client, editor):
    token = login(client, "EDITOR@example.com", EDITOR_PASSWORD)
    assert client.get("/api/auth/me", headers=bearer(token)).get_json()["id"] == editor["id"]
