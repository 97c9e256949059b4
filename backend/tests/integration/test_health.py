"""Health endpoint."""

from __future__ import annotations

import fakeredis
import pytest
from app.core.extensions import set_redis


def test_health_reports_db_and_redis(client):
    resp = client.get("/api/v1/health")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["status"] == "ok"
    assert body["db"] == "ok"
    assert body["redis"] == "ok"


def test_responses_carry_request_id(client):
    resp = client.get("/api/v1/health", headers={"X-Request-ID": "req-123"})

    assert resp.headers["X-Request-ID"] == "req-123"


@pytest.fixture
def redis_down(app, redis_client):
    server = fakeredis.FakeServer()
    server.connected = False
    set_redis(app, fakeredis.FakeRedis(server=server))
    yield
    set_redis(app, redis_client)


def test_health_degrades_when_redis_is_down(client, redis_down):
    resp = client.get("/api/v1/health")

    assert resp.status_code == 503
    body = resp.get_json()
    assert body["status"] == "degraded"
    assert body["db"] == "ok"
    assert body["redis"] == "fail"


def test_redis_outage_is_a_generic_500(client, redis_down):
    resp = client.post("/api/v1/auth/reissue", json={"refreshToken": "x.y.z"})

    # Validation fails before Redis is touched for a junk token
    assert resp.status_code == 400

    resp = client.post(
        "/api/v1/auth/social-login", json={"provider": "google", "code": "abc"}
    )

    assert resp.status_code == 500
    body = resp.get_json()
    assert body["code"] == "internal_server_error"
    assert "redis" not in body["detail"].lower()
    assert resp.mimetype == "application/problem+json"


def test_request_id_is_not_reused_across_requests(client):
    first = client.get("/api/v1/health")
    second = client.get("/api/v1/health", headers={"X-Request-ID": "req-follow-up"})
    third = client.get("/api/v1/health")

    assert second.headers["X-Request-ID"] == "req-follow-up"
    assert third.headers["X-Request-ID"] not in {
        first.headers["X-Request-ID"],
        "req-follow-up",
    }
