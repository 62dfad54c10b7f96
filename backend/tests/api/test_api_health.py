def test_health_reports_database(client):
    resp = client.get("/api/v1/health")

    assert resp.status_code == 200
    assert resp.get_json()["db"] == "ok"
    assert resp.headers.get("X-Request-ID")


def test_request_id_is_echoed(client):
    resp = client.get("/api/v1/health", headers={"X-Request-ID": "abc-123"})
    assert resp.headers["X-Request-ID"] == "abc-123"


def test_unknown_route_is_problem_json(client):
    resp = client.get("/api/v1/nope")

    assert resp.status_code == 404
    assert resp.mimetype == "application/problem+json"


def test_request_id_does_not_leak_into_next_request(client, app_ctx):
    first = client.get("/api/v1/health", headers={"X-Request-ID": "first-id"})
    second = client.get("/api/v1/health")
    third = client.get("/api/v1/health", headers={"X-Request-ID": "third-id"})

    assert first.headers["X-Request-ID"] == "first-id"
    assert second.headers["X-Request-ID"] not in ("first-id", "")
    assert third.headers["X-Request-ID"] == "third-id"
