"""HTTP surface: versioned blueprints plus the bearer token resolver."""

from __future__ import annotations

from collections.abc import Iterable

from flask import Blueprint, Flask


def register_blueprint_group(
    app: Flask,
    *,
    base_prefix: str,
    entries: Iterable[tuple[Blueprint, str]],
) -> None:
    """Mount ``(blueprint, relative_prefix)`` pairs under ``base_prefix``.

    An empty relative prefix mounts the blueprint at the version root
    (``/api/v1/health``); others extend it (``/api/v1/auth/...``).
    """
    root = base_prefix.rstrip("/")
    for bp, rel_prefix in entries:
        rel = rel_prefix.strip("/")
        prefix = f"{root}/{rel}" if rel else root
        app.register_blueprint(bp, url_prefix=prefix if prefix.startswith("/") else f"/{prefix}")


def init_app(app: Flask) -> None:
    """Register API v1 and resolve bearer tokens before every request."""

    from app.api import security
    from app.api.v1 import API_VERSION, REGISTRY

    api_base = app.config.get("API_BASE_PREFIX", "/api")
    register_blueprint_group(app, base_prefix=f"{api_base}/{API_VERSION}", entries=REGISTRY)
    security.init_app(app)


__all__ = ["init_app", "register_blueprint_group"]
