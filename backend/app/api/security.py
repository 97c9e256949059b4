"""Per-request bearer token resolution."""

from __future__ import annotations

import logging

from flask import Flask, g, request

from app.api.deps import AUTH_CONTEXT_ATTR, revocation_store, token_service
from app.core.logger import mask_token
from app.services._shared.errors import InvalidTokenError

log = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def bearer_token() -> str | None:
    """Token of the ``Authorization: Bearer <token>`` header, if present."""
    header = request.headers.get("Authorization", "")
    if not header.startswith(BEARER_PREFIX):
        return None
    token = header[len(BEARER_PREFIX) :].strip()
    return token or None


def resolve_authentication() -> None:
    """
    Attach an :class:`AuthenticationContext` to ``g`` for valid bearer tokens.

    Invalid, expired, revoked or refresh tokens leave the request
    unauthenticated; guarded endpoints then answer 401.
    """
    g.pop(AUTH_CONTEXT_ATTR, None)
    token = bearer_token()
    if token is None:
        return

    tokens = token_service()
    if not tokens.validate(token):
        return
    if revocation_store().is_revoked(token):
        log.warning("auth.revoked_token_used", extra={"token": mask_token(token)})
        return
    try:
        setattr(g, AUTH_CONTEXT_ATTR, tokens.authentication_context(token))
    except InvalidTokenError:
        log.warning("auth.bearer_rejected", extra={"token": mask_token(token)})


def init_app(app: Flask) -> None:
    """Resolve the caller on every API request."""
    app.before_request(resolve_authentication)
