import pytest
from fastapi.testclient import TestClient

from rfid_dashboard.config import Config
from rfid_dashboard.main import create_app

DEFAULT_REG_NUMBER = "6216922"
DEFAULT_PASSWORD = "password123"


@pytest.fixture
def settings(tmp_path):
    return Config(
        APP_ENV="test",
        DB_URL=f"sqlite:///{tmp_path / 'rfid_dashboard_test.db'}",
        JWT_SECRET="test-secret",
        PASSWORD_HASH_ROUNDS=1000,
        LIVE_REQUIRE_AUTH=False,
        SEED_DEFAULT_USER=True,
        DEFAULT_USER_REG_NUMBER=DEFAULT_REG_NUMBER,
        DEFAULT_USER_PASSWORD=DEFAULT_PASSWORD,
        DEFAULT_USER_EMAIL="user@example.com",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    # entering the context runs the startup hook: schema + seeded user
    with TestClient(app) as c:
        yield c


@pytest.fixture
def token(client):
    response = client.post(
        "/api/login", json={"regNumber": DEFAULT_REG_NUMBER, "password": DEFAULT_PASSWORD}
    )
    assert response.status_code == 200
    return response.json()["token"]


@pytest.fixture
def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def post_event(client):
    def _post(user="Alice", uid="CARD1", action="entry", status="granted"):
        response = client.post(
            "/api/rfid-log",
            json={"user": user, "uid": uid, "action": action, "status": status},
        )
        assert response.status_code == 200, response.text
        return response.json()["log"]

    return _post
