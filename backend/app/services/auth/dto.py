# app/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class SocialLoginIn:
    """
    Input DTO for social login.

    :param provider: Provider name as sent by the client (e.g. ``"google"``).
    :type provider: str
    :param code: OAuth authorization code.
    :type code: str
    :param client_ip: Caller address used by the rate limiter.
    :type client_ip: str
    """

    provider: str
    code: str
    client_ip: str


@dataclass(frozen=True, slots=True)
class LogoutIn:
    """
    Input DTO for logout.

    :param refresh_token: Refresh token whose session is closed.
    :type refresh_token: str
    :param access_token: Bearer token of the request, revoked until it expires.
    :type access_token: str
    """

    refresh_token: str
    access_token: str


@dataclass(frozen=True, slots=True)
class ReissueIn:
    """
    Input DTO for refresh token rotation.

    :param refresh_token: Encoded refresh token.
    :type refresh_token: str
    """

    refresh_token: str


@dataclass(frozen=True, slots=True)
class DeviceLoginIn:
    """
    Input DTO for device login.

    :param device_id: Hardware identifier of the tracker.
    :type device_id: str
    """

    device_id: str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Output DTO with access and refresh tokens.

    :param access_token: Encoded access token.
    :type access_token: str
    :param refresh_token: Encoded refresh token.
    :type refresh_token: str
    :param access_token_expires_in: Access validity in seconds.
    :type access_token_expires_in: int
    """

    access_token: str
    refresh_token: str
    access_token_expires_in: int


@dataclass(frozen=True, slots=True)
class NewMember:
    """
    Login outcome for an account that still has to complete signup.

    :param email: Account email.
    :param name: Display name from the provider.
    :param registration_token: Token accepted by the signup endpoint.
    :param token_expires_in: Registration token validity in seconds.
    """

    email: str
    name: str | None
    registration_token: str
    token_expires_in: int


@dataclass(frozen=True, slots=True)
class ExistingMember:
    """
    Login outcome for an active account: a full session.

    :param principal_id: Account id.
    :param role: Role embedded in the access token.
    :param profile_url: Avatar URL.
    :param tokens: Issued token pair.
    """

    principal_id: str
    role: str
    profile_url: str | None
    tokens: TokenPairOut


LoginOutcome = NewMember | ExistingMember


@dataclass(frozen=True, slots=True)
class DeviceLoginOut:
    """
    Output DTO for device login.

    :param pet_id: Pet paired with the device.
    :param tokens: Issued token pair.
    """

    pet_id: int
    tokens: TokenPairOut
