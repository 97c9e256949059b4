"""Global Flask extension instances and initialization helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING

import redis  # type: ignore[import-untyped]
from flask import Flask, current_app
from flask_jwt_extended import JWTManager
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import MetaData

if TYPE_CHECKING:
    from app.services._shared.ports import IdentityProviderRegistry

# Global naming convention for all constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)

# Global singletons (import-safe)
db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
migrate = Migrate(render_as_batch=True)
jwt = JWTManager()

REDIS_EXTENSION_KEY = "redis_client"
SOCIAL_PROVIDERS_KEY = "social_providers"


def init_app(app: Flask) -> None:
    """Initialize SQLAlchemy, migrations, JWT, the provider registry and Redis.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances. This call imports the
        :mod:`app.models` package to ensure SQLAlchemy metadata is ready for
        migrations.

    Notes
    -----
    When ``REDIS_URL`` is blank no client is created; callers (tests) are
    expected to install one with :func:`set_redis`.
    """
    db.init_app(app)

    # Ensure models are imported so Alembic sees metadata
    from app import models as _models  # noqa: F401

    migrate.init_app(app, db)
    jwt.init_app(app)

    from app.infra.social.registry import ProviderRegistry

    set_providers(app, ProviderRegistry.from_config(app.config))

    redis_url = app.config.get("REDIS_URL")
    if not redis_url:
        app.extensions.pop(REDIS_EXTENSION_KEY, None)
        return

    client = redis.Redis.from_url(redis_url)
    try:
        client.ping()
    except RedisError as exc:
        raise RuntimeError(f"Failed to connect to Redis at {redis_url!r}") from exc
    set_redis(app, client)


def set_redis(app: Flask, client: redis.Redis) -> None:
    """Attach a Redis client to ``app`` (used by the factory and by tests)."""
    app.extensions[REDIS_EXTENSION_KEY] = client


def get_redis() -> redis.Redis:
    """Return the Redis client bound to the current application."""
    client = current_app.extensions.get(REDIS_EXTENSION_KEY)
    if client is None:
        raise RuntimeError("Redis client is not initialized. Call init_app() first.")
    return client


def set_providers(app: Flask, registry: IdentityProviderRegistry) -> None:
    """Attach the social provider registry to ``app``."""
    app.extensions[SOCIAL_PROVIDERS_KEY] = registry


def get_providers() -> IdentityProviderRegistry:
    """Return the social provider registry bound to the current application."""
    registry = current_app.extensions.get(SOCIAL_PROVIDERS_KEY)
    if registry is None:
        raise RuntimeError("Provider registry is not initialized. Call init_app() first.")
    return registry
