import threading
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from rfid_dashboard.config import Config
from rfid_dashboard.main import create_app
from rfid_dashboard.utils.exceptions import (
    ConfigurationError, DuplicateIdentity, ExpiredToken, InvalidToken, ValidationError,
)

from .conftest import DEFAULT_PASSWORD, DEFAULT_REG_NUMBER


def _register(client, reg="1001", name="Jane Doe", email="jane@example.com", password="s3cret!"):
    return client.post(
        "/api/register",
        json={"regNumber": reg, "name": name, "email": email, "password": password},
    )


# ---------- registration ----------

def test_register_then_login(client):
    response = _register(client)
    assert response.status_code == 201
    assert response.json() == {"message": "User registered successfully"}

    response = client.post("/api/login", json={"regNumber": "1001", "password": "s3cret!"})
    assert response.status_code == 200
    body = response.json()
    assert body["token"]
    assert body["user"]["regNumber"] == "1001"
    assert body["user"]["name"] == "Jane Doe"
    assert body["user"]["email"] == "jane@example.com"
    assert "password" not in body["user"]


def test_register_duplicate_registration_number(client, app):
    assert _register(client).status_code == 201

    response = _register(client, email="other@example.com")
    assert response.status_code == 400
    assert response.json() == {"error": "User already exists"}

    count = app.state.db.fetch_one(
        "SELECT COUNT(*) AS n FROM users WHERE reg_number = :reg", {"reg": "1001"}
    )
    assert count["n"] == 1


def test_register_duplicate_email(client):
    assert _register(client).status_code == 201
    response = _register(client, reg="1002")
    assert response.status_code == 400


def test_register_missing_fields(client):
    response = client.post("/api/register", json={"regNumber": "1003", "name": "No Email"})
    assert response.status_code == 400
    assert "email" in response.json()["error"]


def test_register_rejects_bad_email(client):
    response = _register(client, email="not-an-email")
    assert response.status_code == 400


def test_register_rejects_malformed_email(client, app):
    response = _register(client, email="a b@@ c")
    assert response.status_code == 400
    assert "error" in response.json()

    row = app.state.db.fetch_one("SELECT COUNT(*) AS n FROM users WHERE reg_number = '1001'")
    assert row["n"] == 0


def test_service_register_rejects_malformed_email(app):
    with pytest.raises(ValidationError):
        app.state.auth_service.register("1001", "Jane Doe", "jane@@example", "s3cret!")


def test_login_strips_registration_number(client):
    assert _register(client, reg=" 7001 ", email="pad@example.com").status_code == 201

    response = client.post("/api/login", json={"regNumber": " 7001 ", "password": "s3cret!"})
    assert response.status_code == 200
    assert response.json()["user"]["regNumber"] == "7001"


def test_password_is_stored_hashed(client, app):
    _register(client)
    row = app.state.db.fetch_one("SELECT password FROM users WHERE reg_number = '1001'")
    assert row["password"] != "s3cret!"
    assert row["password"].startswith("$pbkdf2-sha256$")


def test_concurrent_registrations_yield_one_identity(client, app):
    auth_service = app.state.auth_service
    barrier = threading.Barrier(2)
    outcomes = []

    def attempt(email):
        barrier.wait()
        try:
            auth_service.register("2001", "Racer", email, "pw")
            outcomes.append("ok")
        except DuplicateIdentity:
            outcomes.append("duplicate")

    threads = [
        threading.Thread(target=attempt, args=("a@example.com",)),
        threading.Thread(target=attempt, args=("b@example.com",)),
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(outcomes) == ["duplicate", "ok"]
    count = app.state.db.fetch_one("SELECT COUNT(*) AS n FROM users WHERE reg_number = '2001'")
    assert count["n"] == 1


# ---------- login ----------

def test_login_seeded_default_user(client):
    response = client.post(
        "/api/login", json={"regNumber": DEFAULT_REG_NUMBER, "password": DEFAULT_PASSWORD}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["user"]["regNumber"] == DEFAULT_REG_NUMBER
    assert body["user"]["name"] == "Default User"


def test_login_wrong_password_and_unknown_user_look_identical(client):
    wrong_password = client.post(
        "/api/login", json={"regNumber": DEFAULT_REG_NUMBER, "password": "nope"}
    )
    unknown_user = client.post(
        "/api/login", json={"regNumber": "0000000", "password": DEFAULT_PASSWORD}
    )

    assert wrong_password.status_code == 400
    assert unknown_user.status_code == 400
    assert wrong_password.json() == unknown_user.json() == {"error": "Invalid credentials"}


def test_login_missing_password(client):
    response = client.post("/api/login", json={"regNumber": DEFAULT_REG_NUMBER})
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid credentials"}


def test_seeding_is_idempotent(settings):
    for _ in range(2):
        app = create_app(settings)
        with TestClient(app):
            pass
    count = app.state.db.fetch_one(
        "SELECT COUNT(*) AS n FROM users WHERE reg_number = :reg", {"reg": DEFAULT_REG_NUMBER}
    )
    assert count["n"] == 1


# ---------- tokens ----------

def test_issued_token_verifies(client, app, token):
    claim = app.state.auth_service.verify(token)
    assert claim.regNumber == DEFAULT_REG_NUMBER
    remaining = claim.exp - datetime.now(timezone.utc)
    assert timedelta(hours=23) < remaining <= timedelta(hours=24)


def test_token_with_wrong_signature_fails(client, app):
    forged = jwt.encode(
        {
            "userId": 1,
            "regNumber": DEFAULT_REG_NUMBER,
            "exp": datetime.now(timezone.utc) + timedelta(hours=1),
        },
        "some-other-secret",
        algorithm="HS256",
    )
    with pytest.raises(InvalidToken):
        app.state.auth_service.verify(forged)


def test_expired_token_fails(client, app):
    auth_service = app.state.auth_service
    identity = app.state.credential_store.find(DEFAULT_REG_NUMBER)
    stale = auth_service.issue_token(
        identity, now=datetime.now(timezone.utc) - timedelta(hours=25)
    )
    with pytest.raises(ExpiredToken):
        auth_service.verify(stale)


def test_token_missing_claims_is_invalid(client, app):
    token = jwt.encode(
        {"exp": datetime.now(timezone.utc) + timedelta(hours=1)}, "test-secret", algorithm="HS256"
    )
    with pytest.raises(InvalidToken):
        app.state.auth_service.verify(token)


# ---------- configuration ----------

def test_production_requires_signing_secret(tmp_path):
    settings = Config(
        APP_ENV="production",
        JWT_SECRET=None,
        DB_URL=f"sqlite:///{tmp_path / 'prod.db'}",
    )
    with pytest.raises(ConfigurationError):
        create_app(settings)


def test_unknown_config_option_rejected():
    with pytest.raises(AttributeError):
        Config(NOT_A_SETTING=1)
