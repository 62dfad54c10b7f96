from datetime import timedelta

from tests.helpers.utils import ACCOUNT_PASSWORD, FROZEN_AT, bearer


class TestRegister:
    def test_register_returns_201_without_password(self, client):
        resp = client.post(
            "/api/v1/auth/register", json={"email": "fresh@example.com", "password": "S3cretPass"}
        )

        assert resp.status_code == 201
        body = resp.get_json()["data"]
        assert body["email"] == "fresh@example.com"
        assert isinstance(body["id"], int)
        assert "password" not in body and "password_hash" not in body

    def test_duplicate_email_is_409(self, client, account):
        resp = client.post(
            "/api/v1/auth/register", json={"email": account.email, "password": "S3cretPass"}
        )

        assert resp.status_code == 409
        assert resp.mimetype == "application/problem+json"
        assert resp.get_json()["code"] == "conflict"

    def test_invalid_payload_is_422(self, client):
        resp = client.post("/api/v1/auth/register", json={"email": "not-an-email", "password": "x"})

        assert resp.status_code == 422
        errors = resp.get_json()["details"]["errors"]
        assert set(errors) == {"email", "password"}


class TestLogin:
    def test_login_returns_session(self, client, account):
        resp = client.post("/api/v1/auth/login", json={"email": account.email, "password": ACCOUNT_PASSWORD})

        assert resp.status_code == 200
        data = resp.get_json()["data"]
        assert data["token_type"] == "bearer"
        assert data["token"].count(".") == 2

    def test_wrong_password_and_unknown_email_look_the_same(self, client, account):
        wrong = client.post("/api/v1/auth/login", json={"email": account.email, "password": "nope"})
        unknown = client.post(
            "/api/v1/auth/login", json={"email": "ghost@example.com", "password": ACCOUNT_PASSWORD}
        )

        assert wrong.status_code == unknown.status_code == 401
        assert wrong.get_json()["detail"] == unknown.get_json()["detail"]


class TestWhoAmI:
    def test_whoami_with_session(self, client, account, session_headers):
        resp = client.get("/api/v1/auth/whoami", headers=session_headers)

        assert resp.status_code == 200
        assert resp.get_json()["data"] == {"id": account.id, "email": account.email}

    def test_missing_header_is_401(self, client):
        assert client.get("/api/v1/auth/whoami").status_code == 401

    def test_garbage_session_is_401(self, client):
        assert client.get("/api/v1/auth/whoami", headers=bearer("garbage")).status_code == 401

    def test_expired_session_is_401(self, client, clock, app, session_headers):
        clock.set(FROZEN_AT + app.config["SESSION_TTL"] + timedelta(seconds=1))

        resp = client.get("/api/v1/auth/whoami", headers=session_headers)
        assert resp.status_code == 401

    def test_access_token_is_not_a_session(self, client, token_headers):
        assert client.get("/api/v1/auth/whoami", headers=token_headers).status_code == 401
