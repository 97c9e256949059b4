from __future__ import annotations

from datetime import timedelta
from typing import Protocol


class RevocationStore(Protocol):
    """
    Denylist of **access tokens** revoked before their natural expiry.

    Entries must expire on their own no later than the token they revoke.
    """

    def is_revoked(self, access_token: str) -> bool: ...

    def revoke(self, access_token: str, remaining: timedelta) -> None:
        """Revoke ``access_token`` for ``remaining``; no-op when ``remaining <= 0``."""


class InMemoryRevocationStore(RevocationStore):
    """Simple in-memory denylist for unit tests (entries never expire)."""

    def __init__(self) -> None:
        self.entries: dict[str, timedelta] = {}

    def is_revoked(self, access_token: str) -> bool:
        return access_token in self.entries

    def revoke(self, access_token: str, remaining: timedelta) -> None:
        if remaining <= timedelta(0):
            return
        self.entries[access_token] = remaining
