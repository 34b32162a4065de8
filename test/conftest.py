import pytest

from app import create_app

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "admin-password"
EDITOR_PASSWORD = "editor-password"


@pytest.fixture
def app(tmp_path):
    app = create_app({
        "DATABASE_URL": f"sqlite:///{tmp_path / 'rooms.db'}",
        "JWT_SECRET_KEY": "test-secret-key-that-is-long-enough-for-hs256",
        "UPLOADS_DIR": str(tmp_path / "uploads"),
        "BACKEND_PUBLIC_URL": "http://testserver",
        "ADMIN_EMAIL": ADMIN_EMAIL,
        "ADMIN_PASSWORD": ADMIN_PASSWORD,
        "BCRYPT_ROUNDS": 4,
        "RUN_INIT_DB": True,
        "TESTING": True,
    })
    yield app
    app.db.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


def login(client, email, password):
    r = client.post("/api/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.get_json()
    return r.get_json()["token"]


@pytest.fixture
def admin_headers(client):
    return bearer(login(client, ADMIN_EMAIL, ADMIN_PASSWORD))


@pytest.fixture
def editor(client, admin_headers):
    r = client.post("/api/users", headers=admin_headers, json={
        "email": "Editor@Example.com",
        "fullName": "Floor Editor",
        "password": EDITOR_PASSWORD,
        "role": "editor",
    })
    assert r.status_code == 201, r.get_json()
    return r.get_json()


@pytest.fixture
def editor_headers(client, editor):
    return bearer(login(client, editor["email"], EDITOR_PASSWORD))
