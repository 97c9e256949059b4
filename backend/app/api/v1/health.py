"""Health check endpoint."""

from __future__ import annotations

from flask import Blueprint, current_app
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.api.deps import json_response, timing
from app.core.extensions import REDIS_EXTENSION_KEY, db

bp = Blueprint("health", __name__)


@bp.get("/health")
@timing
def healthcheck():
    """Return application, database and Redis health information."""

    db_status = "ok"
    try:
        db.session.execute(text("SELECT 1"))
    except SQLAlchemyError:  # pragma: no cover - depends on DB backend
        current_app.logger.exception("healthcheck.db_error")
        db_status = "fail"

    redis_status = "ok"
    client = current_app.extensions.get(REDIS_EXTENSION_KEY)
    try:
        if client is None or not client.ping():
            redis_status = "fail"
    except RedisError:
        current_app.logger.exception("healthcheck.redis_error")
        redis_status = "fail"

    version = current_app.config.get("APP_VERSION", "dev")
    commit = current_app.config.get("APP_COMMIT", "unknown")
    overall = "ok" if db_status == redis_status == "ok" else "degraded"
    payload = {
        "status": overall,
        "db": db_status,
        "redis": redis_status,
        "version": version,
        "commit": commit,
    }
    return json_response(payload, status=200 if overall == "ok" else 503)
