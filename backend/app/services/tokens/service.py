# app/services/tokens/service.py
"""
TokenService
============

Issues, validates and inspects the signed session tokens:

- access tokens (``sub`` = principal, ``role`` claim),
- refresh tokens (``sub`` = principal, no role),
- registration tokens (``sub`` = ``register-process``, ``email`` and
  ``role=GUEST`` claims).
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta
from typing import Any

from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import (
    DecodeError,
    ExpiredSignatureError,
    InvalidAlgorithmError,
    InvalidSignatureError,
    PyJWTError,
)

from app.core.logger import mask_token
from app.services._shared.errors import InvalidTokenError
from app.services._shared.ports import TokenProvider
from app.services.tokens.dto import (
    REGISTRATION_SUBJECT,
    ROLE_GUEST,
    AuthenticationContext,
    TokenSettings,
)

log = logging.getLogger(__name__)

# Order matters: the more specific PyJWT errors come first.
_FAILURE_REASONS: tuple[tuple[type[Exception], str], ...] = (
    (ExpiredSignatureError, "expired"),
    (InvalidSignatureError, "bad_signature"),
    (InvalidAlgorithmError, "unsupported_algorithm"),
    (DecodeError, "malformed"),
    (PyJWTError, "invalid"),
    (JWTExtendedException, "invalid_claims"),
)


def _failure_reason(exc: Exception) -> str:
    for exc_type, reason in _FAILURE_REASONS:
        if isinstance(exc, exc_type):
            return reason
    return "invalid"


class TokenService:
    """
    Token issuance and inspection on top of a :class:`TokenProvider`.

    :param token_provider: Signing/decoding adapter.
    :param settings: Validity windows.
    """

    def __init__(self, *, token_provider: TokenProvider, settings: TokenSettings) -> None:
        self.tokens = token_provider
        self.settings = settings

    # ------------------------------------------------------------------ #
    # Issuance
    # ------------------------------------------------------------------ #

    def issue_access(self, principal_id: str, role: str) -> str:
        return self.tokens.create_access_token(
            identity=principal_id,
            additional_claims={"role": role},
            expires_delta=self.settings.access_expires,
        )

    def issue_refresh(self, principal_id: str) -> str:
        return self.tokens.create_refresh_token(
            identity=principal_id,
            expires_delta=self.settings.refresh_expires,
        )

    def issue_registration_token(self, email: str) -> str:
        """
        Issue the short-lived token that lets a new member finish signup.

        :param email: Email of the pending account, embedded as a claim.
        :returns: Signed token with subject ``register-process``.
        """
        return self.tokens.create_access_token(
            identity=REGISTRATION_SUBJECT,
            additional_claims={"email": email, "role": ROLE_GUEST},
            expires_delta=self.settings.registration_expires,
        )

    @property
    def access_expires_in(self) -> int:
        """Access token validity in seconds."""
        return int(self.settings.access_expires.total_seconds())

    @property
    def registration_expires_in(self) -> int:
        """Registration token validity in seconds."""
        return int(self.settings.registration_expires.total_seconds())

    # ------------------------------------------------------------------ #
    # Validation & claims
    # ------------------------------------------------------------------ #

    def validate(self, token: str | None) -> bool:
        """
        Check signature and expiry. Never raises.

        :param token: Encoded token (may be empty).
        :returns: ``True`` when the token decodes and is not expired.
        """
        if not token:
            return False
        try:
            self.tokens.decode(token)
        except (PyJWTError, JWTExtendedException) as exc:
            log.warning(
                "token.invalid reason=%s",
                _failure_reason(exc),
                extra={"token": mask_token(token)},
            )
            return False
        return True

    def _claims(self, token: str, *, allow_expired: bool = False) -> dict[str, Any]:
        try:
            return self.tokens.decode(token, allow_expired=allow_expired)
        except (PyJWTError, JWTExtendedException) as exc:
            raise InvalidTokenError() from exc

    def parse_principal(self, token: str) -> str:
        return str(self._claims(token)["sub"])

    def parse_role(self, token: str) -> str | None:
        role = self._claims(token).get("role")
        return str(role) if role is not None else None

    def parse_email(self, token: str) -> str | None:
        email = self._claims(token).get("email")
        return str(email) if email is not None else None

    def remaining_validity(self, token: str) -> timedelta:
        """
        Time left until ``exp``, clamped at zero.

        Expired tokens decode (signature still checked) and yield zero; tokens
        that do not decode at all also yield zero.
        """
        try:
            exp = int(self._claims(token, allow_expired=True)["exp"])
        except (InvalidTokenError, KeyError, TypeError, ValueError):
            return timedelta(0)
        remaining = datetime.fromtimestamp(exp, tz=UTC) - datetime.now(UTC)
        return max(remaining, timedelta(0))

    def authentication_context(self, token: str) -> AuthenticationContext:
        """
        Build the caller identity from a **validated** token.

        Registration tokens map to ``principal=email`` with the ``GUEST``
        role; every other token maps to ``principal=sub`` and its role claim.

        :raises InvalidTokenError: If the token does not decode or is a
            refresh token (refresh tokens are never bearer credentials).
        """
        claims = self._claims(token)
        if claims.get("type") == "refresh":
            raise InvalidTokenError("Refresh token used as bearer credential")
        subject = str(claims["sub"])
        role = claims.get("role")
        if subject == REGISTRATION_SUBJECT:
            return AuthenticationContext(
                principal=str(claims.get("email") or ""),
                roles=frozenset({ROLE_GUEST}),
                token=token,
            )
        return AuthenticationContext(
            principal=subject,
            roles=frozenset({str(role)}) if role else frozenset(),
            token=token,
        )
