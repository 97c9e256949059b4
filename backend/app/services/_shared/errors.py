"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and should never import or depend
on Flask or HTTP directly. They serve as stable contracts between
repositories, infrastructure adapters and application services.

The translation to HTTP responses (RFC 7807) is handled by
``app/core/errors.py`` via ``BaseService.translate_exceptions()``.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    constraint_name : str
        The name of the database constraint to match (e.g., 'uq_users_nickname').

    Returns
    -------
    bool
        True if the IntegrityError matches the given constraint.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    return constraint_name.lower() in message


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - They can be safely raised from repositories, adapters or domain logic.
    - ``BaseService.translate_exceptions`` later maps them to ``APIError``.
    """

    pass


# --------------------------------------------------------------------------- #
# Directory errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:  # pragma: no cover
        return f"Conflict on {self.entity}: {self.detail}"


@dataclass(slots=True)
class DeviceNotFoundError(ServiceError):
    """
    Raised when no pet is paired with the presented device id.

    :param device_id: Hardware identifier sent by the device.
    :type device_id: str
    """

    device_id: str

    def __str__(self) -> str:  # pragma: no cover
        return f"No pet paired with device {self.device_id}"


class InvalidRequestError(ServiceError):
    """Raised when a request is well-formed but not acceptable in the current state."""

    def __init__(self, message: str = "Invalid request") -> None:
        super().__init__(message)


# --------------------------------------------------------------------------- #
# Authentication errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class UnsupportedProviderError(ServiceError):
    """
    Raised when the requested social provider is unknown or not configured.

    :param provider: Provider name as sent by the client.
    :type provider: str
    """

    provider: str

    def __str__(self) -> str:  # pragma: no cover
        return f"Unsupported social provider: {self.provider}"


@dataclass(slots=True)
class UpstreamAuthError(ServiceError):
    """
    Raised when a social provider call fails, times out or returns junk.

    :param provider: Provider that failed.
    :type provider: str
    :param reason: Operator-facing cause; never sent to clients.
    :type reason: str
    """

    provider: str
    reason: str

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.provider} upstream failure: {self.reason}"


@dataclass(slots=True)
class AccountRestrictedError(ServiceError):
    """
    Raised when a suspended, dormant or deleted account tries to log in.

    :param status: Account status (kept for logs; not exposed to clients).
    :type status: str
    """

    status: str

    def __str__(self) -> str:  # pragma: no cover
        return f"Account restricted ({self.status})"


@dataclass(slots=True)
class RateLimitedError(ServiceError):
    """
    Raised when a client is banned or crosses the attempt threshold.

    :param key: Rate-limited subject (client IP or email).
    :type key: str
    """

    key: str

    def __str__(self) -> str:  # pragma: no cover
        return f"Rate limited: {self.key}"


class TokenNotFoundError(ServiceError):
    """Raised when a presented refresh token has no live session record."""

    def __init__(self, message: str = "Refresh token not found") -> None:
        super().__init__(message)


class ExpiredOrInvalidRefreshError(ServiceError):
    """Raised when a refresh token fails signature or expiry validation."""

    def __init__(self, message: str = "Refresh token is expired or invalid") -> None:
        super().__init__(message)


class InvalidTokenError(ServiceError):
    """Raised when claims are requested from a token that does not decode."""

    def __init__(self, message: str = "Invalid token") -> None:
        super().__init__(message)
