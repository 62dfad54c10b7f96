from datetime import timedelta

from tests.helpers.utils import FROZEN_AT, bearer


class TestRecordView:
    def test_record_with_access_token(self, client, token_headers, session_headers):
        resp = client.post("/api/v1/views", json={"url": "/landing"}, headers=token_headers)

        assert resp.status_code == 201
        assert resp.get_json()["data"] == {"url": "/landing"}

        count = client.get("/api/v1/views?url=/landing", headers=session_headers)
        assert count.get_json()["data"] == {"url": "/landing", "count": 1}

    def test_record_without_token_is_401(self, client):
        resp = client.post("/api/v1/views", json={"url": "/landing"})
        assert resp.status_code == 401

    def test_record_with_session_instead_of_token_is_401(self, client, session_headers):
        resp = client.post("/api/v1/views", json={"url": "/landing"}, headers=session_headers)
        assert resp.status_code == 401

    def test_record_with_expired_token_is_401(self, client, clock, app, token_headers):
        clock.set(FROZEN_AT + app.config["ACCESS_TOKEN_TTL"])

        resp = client.post("/api/v1/views", json={"url": "/landing"}, headers=token_headers)
        assert resp.status_code == 401

    def test_record_with_unknown_token_is_401(self, client):
        resp = client.post("/api/v1/views", json={"url": "/x"}, headers=bearer("unknown-token"))
        assert resp.status_code == 401

    def test_missing_url_is_422(self, client, token_headers):
        resp = client.post("/api/v1/views", json={}, headers=token_headers)
        assert resp.status_code == 422

    def test_blank_url_is_400(self, client, token_headers):
        resp = client.post("/api/v1/views", json={"url": "   "}, headers=token_headers)
        assert resp.status_code == 400

    def test_ingest_allows_any_origin(self, client, token_headers):
        resp = client.post(
            "/api/v1/views",
            json={"url": "/cors"},
            headers={**token_headers, "Origin": "https://customer-site.example"},
        )
        assert resp.headers.get("Access-Control-Allow-Origin") in ("*", "https://customer-site.example")


class TestReadViews:
    def test_unknown_url_counts_zero(self, client, session_headers):
        resp = client.get("/api/v1/views?url=/nothing", headers=session_headers)
        assert resp.get_json()["data"]["count"] == 0

    def test_count_requires_url(self, client, session_headers):
        assert client.get("/api/v1/views", headers=session_headers).status_code == 422

    def test_all_counts(self, client, token_headers, session_headers):
        for url in ("/a", "/a", "/b"):
            client.post("/api/v1/views", json={"url": url}, headers=token_headers)

        resp = client.get("/api/v1/views/all", headers=session_headers)
        counts = {row["url"]: row["count"] for row in resp.get_json()["data"]}
        assert counts == {"/a": 2, "/b": 1}

    def test_range(self, client, clock, token_headers, session_headers):
        for minutes in (0, 10, 20):
            clock.set(FROZEN_AT + timedelta(minutes=minutes))
            client.post("/api/v1/views", json={"url": "/r"}, headers=token_headers)

        resp = client.get(
            "/api/v1/views/range",
            query_string={
                "url": "/r",
                "start": "2024-03-01 12:05:00.000",
                "end": "2024-03-01 12:20:00.000",
            },
            headers=session_headers,
        )

        assert resp.status_code == 200
        stamps = [row["timestamp"] for row in resp.get_json()["data"]]
        assert len(stamps) == 2
        assert stamps[0].startswith("2024-03-01T12:10:00")

    def test_range_rejects_bad_format(self, client, session_headers):
        resp = client.get(
            "/api/v1/views/range",
            query_string={"url": "/r", "start": "yesterday"},
            headers=session_headers,
        )
        assert resp.status_code == 422

    def test_range_rejects_start_after_end(self, client, session_headers):
        resp = client.get(
            "/api/v1/views/range",
            query_string={
                "url": "/r",
                "start": "2024-03-02 00:00:00.000",
                "end": "2024-03-01 00:00:00.000",
            },
            headers=session_headers,
        )
        assert resp.status_code == 422

    def test_counts_are_per_account(self, client, app_ctx, services, token_headers):
        from insights.services.accounts.dto import AccountRegisterIn

        client.post("/api/v1/views", json={"url": "/mine"}, headers=token_headers)
        other = services.accounts.register_account(
            AccountRegisterIn(email="neighbour@example.com", password="Neighbour1")
        )
        other_session = bearer(services.sessions.issue_session(other.id, other.email).token)

        resp = client.get("/api/v1/views?url=/mine", headers=other_session)
        assert resp.get_json()["data"]["count"] == 0
