"""Service layer public API.

This package exposes the essential building blocks for the service layer so that
callers can import from :mod:`app.services` without knowing internal structure.

Re-exports
----------
- Base primitives (from ``app.services._shared.base``)
    * :class:`BaseService`

- Session core
    * :class:`AuthService` (social login, logout, reissue, device login)
    * :class:`TokenService`
    * :class:`RateLimitService`

- Account lifecycle
    * :class:`IdentityDirectory`, :class:`PetDeviceDirectory`
    * :class:`RegistrationService`, :class:`WithdrawalService`
"""

from __future__ import annotations

from ._shared.base import BaseService
from .auth.service import AuthService
from .devices.service import PetDeviceDirectory
from .identity.service import IdentityDirectory
from .rate_limit.service import RateLimitService
from .registration.service import RegistrationService
from .tokens.service import TokenService
from .withdrawal.service import WithdrawalService

__all__ = [
    # Base
    "BaseService",
    # Session core
    "AuthService",
    "TokenService",
    "RateLimitService",
    # Account lifecycle
    "IdentityDirectory",
    "PetDeviceDirectory",
    "RegistrationService",
    "WithdrawalService",
]
