from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class RefreshTokenRecord:
    """
    Stored refresh session of a principal.

    :ivar principal_id: Owner (user UUID or device UUID).
    :ivar refresh_token: The exact token value handed to the client.
    :ivar role: Role to embed in access tokens minted from this session.
    """

    principal_id: str
    refresh_token: str
    role: str


class SessionStore(Protocol):
    """
    One live refresh token per principal, searchable by token value.

    ``save`` replaces whatever the principal had before. ``delete`` is a
    compare-and-delete: it only removes the record if the principal still
    holds ``record.refresh_token`` and reports whether this call removed it.
    """

    def save(self, principal_id: str, refresh_token: str, role: str) -> RefreshTokenRecord: ...

    def find_by_value(self, refresh_token: str) -> RefreshTokenRecord | None: ...

    def delete(self, record: RefreshTokenRecord) -> bool: ...


class InMemorySessionStore(SessionStore):
    """Dictionary-backed session store used in unit tests."""

    def __init__(self) -> None:
        self._by_principal: dict[str, RefreshTokenRecord] = {}
        self._lock = threading.Lock()

    def save(self, principal_id: str, refresh_token: str, role: str) -> RefreshTokenRecord:
        record = RefreshTokenRecord(principal_id, refresh_token, role)
        with self._lock:
            self._by_principal[principal_id] = record
        return record

    def find_by_value(self, refresh_token: str) -> RefreshTokenRecord | None:
        with self._lock:
            for record in self._by_principal.values():
                if record.refresh_token == refresh_token:
                    return record
        return None

    def delete(self, record: RefreshTokenRecord) -> bool:
        with self._lock:
            current = self._by_principal.get(record.principal_id)
            if current is None or current.refresh_token != record.refresh_token:
                return False
            del self._by_principal[record.principal_id]
            return True

    def count_for(self, principal_id: str) -> int:
        """Number of live records for ``principal_id`` (0 or 1)."""
        return int(principal_id in self._by_principal)
