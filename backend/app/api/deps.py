"""Shared API helpers: service wiring, auth guards and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, g, jsonify, request

from app.core.errors import Forbidden, Unauthorized
from app.core.extensions import get_providers, get_redis
from app.infra.jwt.flask_jwt_token_provider import JWTTokenProvider
from app.infra.mail.logging_mail_sender import LoggingMailSender
from app.infra.redis.redis_rate_limit_store import RedisRateLimitStore
from app.infra.redis.redis_revocation_store import RedisRevocationStore
from app.infra.redis.redis_session_store import RedisSessionStore
from app.services.auth.service import AuthService
from app.services.devices.service import PetDeviceDirectory
from app.services.identity.service import IdentityDirectory
from app.services.rate_limit.service import RateLimitPolicy, RateLimitService
from app.services.registration.service import RegistrationService
from app.services.tokens.dto import AuthenticationContext, TokenSettings
from app.services.tokens.service import TokenService
from app.services.withdrawal.service import WithdrawalService

F = TypeVar("F", bound=Callable[..., Any])

AUTH_CONTEXT_ATTR = "auth"


# --------------------------------------------------------------------------- #
# Service wiring
# --------------------------------------------------------------------------- #


def token_service() -> TokenService:
    """Token service configured from the current app."""
    return TokenService(
        token_provider=JWTTokenProvider(),
        settings=TokenSettings.from_config(current_app.config),
    )


def revocation_store() -> RedisRevocationStore:
    return RedisRevocationStore(get_redis())


def rate_limit_service() -> RateLimitService:
    return RateLimitService(
        store=RedisRateLimitStore(get_redis()),
        policy=RateLimitPolicy.from_config(current_app.config),
    )


def auth_service() -> AuthService:
    """Assemble the session orchestrator on top of Redis and the identity tables."""
    tokens = token_service()
    return AuthService(
        token_service=tokens,
        session_store=RedisSessionStore(get_redis(), tokens.settings.refresh_expires),
        revocation_store=revocation_store(),
        rate_limiter=rate_limit_service(),
        providers=get_providers(),
        users=IdentityDirectory(),
        devices=PetDeviceDirectory(),
    )


def registration_service() -> RegistrationService:
    return RegistrationService(users=IdentityDirectory(), auth=auth_service())


def withdrawal_service() -> WithdrawalService:
    return WithdrawalService(
        users=IdentityDirectory(),
        rate_limiter=rate_limit_service(),
        mailer=LoggingMailSender(),
    )


# --------------------------------------------------------------------------- #
# Request helpers
# --------------------------------------------------------------------------- #


def client_ip() -> str:
    """Caller address (already rewritten by ``ProxyFix`` when enabled)."""
    return request.remote_addr or "unknown"


def current_auth() -> AuthenticationContext | None:
    """Authentication context resolved for this request, if any."""
    return g.get(AUTH_CONTEXT_ATTR)


def require_auth(*roles: str) -> Callable[[F], F]:
    """
    Require an authenticated caller, optionally holding one of ``roles``.

    Missing, invalid or revoked bearer tokens answer 401; a role mismatch
    answers 403.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            ctx = current_auth()
            if ctx is None:
                raise Unauthorized("Authentication is required.")
            if roles and not ctx.has_any_role(*roles):
                raise Forbidden("Insufficient role.")
            return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
