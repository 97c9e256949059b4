"""
app.services._shared.ports
==========================

Collection of *ports* (hexagonal interfaces) that define the contracts
between the session core and its infrastructure.

Modules
-------
- :mod:`token_provider`:
    Defines :class:`~.TokenProvider`, the abstraction for signing and decoding tokens.

- :mod:`session_store`:
    Defines :class:`~.SessionStore` and :class:`~.RefreshTokenRecord`, one refresh
    token per principal with lookup by value.

- :mod:`revocation_store`:
    Defines :class:`~.RevocationStore`, the self-expiring access-token denylist.

- :mod:`rate_limit_store`:
    Defines :class:`~.RateLimitStore`, attempt counters, bans, email cooldowns
    and verification codes.

- :mod:`identity_provider`:
    Defines :class:`~.IdentityProvider`, :class:`~.SocialProvider` and
    :class:`~.SocialProfile` for federated login.

- :mod:`directory`:
    Defines :class:`~.UserDirectory` and :class:`~.DeviceDirectory`.

- :mod:`mail_sender`:
    Defines :class:`~.MailSender`.

Design Notes
------------
Concrete adapters (Redis, SQLAlchemy, HTTP) implement these interfaces under
``app.infra`` or as directory services.
"""

from __future__ import annotations

from .directory import DeviceDirectory, DirectoryUser, PairedPet, UserDirectory
from .identity_provider import (
    IdentityProvider,
    IdentityProviderRegistry,
    SocialProfile,
    SocialProvider,
)
from .mail_sender import MailSender, RecordingMailSender
from .rate_limit_store import RateLimitStore
from .revocation_store import InMemoryRevocationStore, RevocationStore
from .session_store import InMemorySessionStore, RefreshTokenRecord, SessionStore
from .token_provider import TokenProvider

__all__ = [
    "TokenProvider",
    "SessionStore",
    "RefreshTokenRecord",
    "InMemorySessionStore",
    "RevocationStore",
    "InMemoryRevocationStore",
    "RateLimitStore",
    "IdentityProvider",
    "IdentityProviderRegistry",
    "SocialProfile",
    "SocialProvider",
    "UserDirectory",
    "DeviceDirectory",
    "DirectoryUser",
    "PairedPet",
    "MailSender",
    "RecordingMailSender",
]
