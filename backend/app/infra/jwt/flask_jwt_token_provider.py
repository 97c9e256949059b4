# app/infra/jwt/flask_jwt_token_provider.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, cast

from app.services._shared.ports import TokenProvider


@dataclass(slots=True)
class JWTTokenProvider(TokenProvider):
    """
    Adapter for Flask-JWT-Extended.

    Every token carries a random ``jti`` (added by the library), so two tokens
    minted for the same principal within the same second still differ.

    .. note::
       Requires an active Flask app context with proper JWT settings
       (``JWT_SECRET_KEY``, ``JWT_ALGORITHM``).
    """

    def create_access_token(
        self,
        *,
        identity: str,
        additional_claims: dict[str, Any] | None = None,
        expires_delta: timedelta,
    ) -> str:
        from flask_jwt_extended import create_access_token as _create_access

        return cast(
            str,
            _create_access(
                identity=identity,
                additional_claims=additional_claims or {},
                expires_delta=expires_delta,
            ),
        )

    def create_refresh_token(
        self,
        *,
        identity: str,
        additional_claims: dict[str, Any] | None = None,
        expires_delta: timedelta,
    ) -> str:
        from flask_jwt_extended import create_refresh_token as _create_refresh

        return cast(
            str,
            _create_refresh(
                identity=identity,
                additional_claims=additional_claims or {},
                expires_delta=expires_delta,
            ),
        )

    def decode(self, token: str, *, allow_expired: bool = False) -> dict[str, Any]:
        # Raises jwt.PyJWTError subclasses (expired, bad signature, malformed,
        # disallowed algorithm) or flask_jwt_extended errors for missing claims.
        from flask_jwt_extended import decode_token

        return cast(dict[str, Any], decode_token(token, allow_expired=allow_expired))
