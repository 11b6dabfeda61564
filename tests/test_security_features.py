"""Tests covering security and hardening features."""

from __future__ import annotations

from conftest import build_app


def test_cors_allows_configured_origin():
    app = build_app(CORS_ORIGINS=["https://client.example"])
    client = app.test_client()

    response = client.get(
        "/health", headers={"Origin": "https://client.example"}
    )

    assert response.status_code == 200
    assert response.headers.get("Access-Control-Allow-Origin") == "https://client.example"
    assert response.headers.get("X-Request-ID")


def test_request_id_is_echoed():
    client = build_app().test_client()

    response = client.get("/health", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"


def test_rate_limit_exceeded_returns_envelope():
    app = build_app(RATE_LIMIT="2 per minute")
    client = app.test_client()

    client.get("/health")
    client.get("/health")
    response = client.get("/health")

    assert response.status_code == 429
    payload = response.get_json()
    assert payload["success"] is False
    assert payload["code"] == "TOO_MANY_REQUESTS"


def test_json_error_shape_for_invalid_request():
    client = build_app().test_client()

    response = client.post(
        "/auth/register",
        data="not-json",
        content_type="text/plain",
    )

    assert response.status_code == 400
    payload = response.get_json()
    assert payload["success"] is False
    assert payload["code"] == "BAD_REQUEST"
    assert "Request content type" in payload["message"]


def test_unknown_route_uses_envelope():
    client = build_app().test_client()

    response = client.get("/does-not-exist")

    assert response.status_code == 404
    assert response.get_json()["code"] == "NOT_FOUND"


def test_unexpected_errors_are_not_leaked():
    app = build_app()

    @app.route("/boom")
    def boom():
        raise RuntimeError("database password is hunter2")

    response = app.test_client().get("/boom")

    assert response.status_code == 500
    payload = response.get_json()
    assert payload == {
        "success": False,
        "message": "Internal Server Error",
        "code": "INTERNAL_ERROR",
    }
