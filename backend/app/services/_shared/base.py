# app/services/_shared/base.py
from __future__ import annotations

from app.core import errors as api_errors
from app.services._shared.errors import (
    AccountRestrictedError,
    ConflictError,
    DeviceNotFoundError,
    ExpiredOrInvalidRefreshError,
    InvalidRequestError,
    InvalidTokenError,
    NotFoundError,
    RateLimitedError,
    ServiceError,
    TokenNotFoundError,
    UnsupportedProviderError,
    UpstreamAuthError,
)
from app.uow.sqlalchemy_uow import SQLAlchemyUnitOfWork


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide a helper to run units of work against the identity tables.
    * Centralize error translation to the HTTP taxonomy.
    * Keep services thin, orchestration-only, no web/ORM leakage.

    Notes
    -----
    - Services must never touch the global session; always use a Unit of Work.
    """

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """
        Create a read-write Unit of Work.

        :returns: Read-write UoW instance.
        :rtype: SQLAlchemyUnitOfWork
        """
        return SQLAlchemyUnitOfWork()

    # -------------------------- Error handling ------------------------------

    @staticmethod
    def translate_exceptions(exc: Exception) -> Exception:
        """
        Map domain/service-level errors to API-level (HTTP) errors.

        Client messages are fixed per error type; the service-level detail
        (provider failure cause, restricted status) only reaches the logs.

        :param exc: Exception raised within the service.
        :type exc: Exception
        :returns: Translated exception ready to be re-raised.
        :rtype: Exception
        """
        if isinstance(exc, RateLimitedError):
            # → 429, identical for bans and threshold hits
            return api_errors.TooManyRequests("Too many attempts. Please try again later.")

        if isinstance(exc, AccountRestrictedError):
            # → 403, identical for suspended/dormant/deleted
            return api_errors.Forbidden("This account is restricted.", code="account_restricted")

        if isinstance(exc, UpstreamAuthError):
            return api_errors.UpstreamError()

        if isinstance(exc, UnsupportedProviderError):
            return api_errors.APIError(
                message="Unsupported social provider.",
                status_code=400,
                code="unsupported_provider",
            )

        if isinstance(exc, TokenNotFoundError):
            # → 409: the caller claims a session that does not exist
            return api_errors.Conflict("Refresh token not found.", code="token_not_found")

        if isinstance(exc, ExpiredOrInvalidRefreshError):
            return api_errors.APIError(
                message="Refresh token is expired or invalid.",
                status_code=400,
                code="expired_refresh_token",
            )

        if isinstance(exc, InvalidTokenError):
            return api_errors.APIError(
                message="Invalid token.", status_code=400, code="invalid_token"
            )

        if isinstance(exc, DeviceNotFoundError):
            return api_errors.NotFound("Device not found.", code="device_not_found")

        if isinstance(exc, NotFoundError):
            # Lookup key stays in the logs (see core.errors)
            return api_errors.NotFound(f"{exc.entity} not found.")

        if isinstance(exc, ConflictError):
            return api_errors.Conflict(f"{exc.entity} already exists with these values.")

        if isinstance(exc, InvalidRequestError):
            return api_errors.APIError(
                message=str(exc), status_code=400, code="invalid_request"
            )

        # Any other ServiceError subclass → 400 Bad Request
        if isinstance(exc, ServiceError):
            return api_errors.APIError(message=str(exc), status_code=400, code="bad_request")

        # Fallback: return untouched (will bubble up to Flask handler)
        return exc
