# app/services/tokens/dto.py
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

# Subject of tokens handed to users that still have to complete signup.
REGISTRATION_SUBJECT = "register-process"
ROLE_GUEST = "GUEST"
ROLE_DEVICE = "DEVICE"


@dataclass(frozen=True, slots=True)
class TokenSettings:
    """
    Token validity windows.

    :param access_expires: Access token lifetime.
    :type access_expires: timedelta
    :param refresh_expires: Refresh token lifetime (and stored-session TTL).
    :type refresh_expires: timedelta
    :param registration_expires: Registration token lifetime.
    :type registration_expires: timedelta
    """

    access_expires: timedelta = timedelta(hours=1)
    refresh_expires: timedelta = timedelta(days=14)
    registration_expires: timedelta = timedelta(minutes=30)

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> TokenSettings:
        return cls(
            access_expires=config["JWT_ACCESS_TOKEN_EXPIRES"],
            refresh_expires=config["JWT_REFRESH_TOKEN_EXPIRES"],
            registration_expires=config["REGISTRATION_TOKEN_EXPIRES"],
        )


@dataclass(frozen=True, slots=True)
class AuthenticationContext:
    """
    Authenticated caller derived from a validated access token.

    :param principal: Principal id, or the email for a pending registration.
    :type principal: str
    :param roles: Granted roles (empty when the token carries none).
    :type roles: frozenset[str]
    :param token: The raw bearer token (needed by logout).
    :type token: str
    """

    principal: str
    roles: frozenset[str]
    token: str

    def has_any_role(self, *roles: str) -> bool:
        return bool(self.roles.intersection(roles))
