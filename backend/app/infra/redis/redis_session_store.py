# comments in English; reST docstrings
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta

import redis  # type: ignore[import-untyped]

from app.core.logger import mask_token
from app.services._shared.ports import RefreshTokenRecord, SessionStore

log = logging.getLogger(__name__)


def _s(value: bytes | str | None, default: str = "") -> str:
    """Decode a Redis reply (bytes or str) to ``str``."""
    if value is None:
        return default
    return value.decode() if isinstance(value, bytes | bytearray) else str(value)


@dataclass(slots=True)
class RedisSessionStore(SessionStore):
    """
    Redis-backed refresh session store: one hash per principal plus a
    token-value index.

    Layout::

        refresh_token:<principal_id>         hash {principal_id, refresh_token, role}
        refresh_token:index:<refresh_token>  string -> principal_id

    Both keys share the refresh-token TTL.

    :param r: A Redis client (already connected).
    :param ttl: Lifetime of a stored session (refresh token validity).
    """

    r: redis.Redis
    ttl: timedelta

    # -------------------- helpers --------------------

    @staticmethod
    def _k(principal_id: str) -> str:
        return f"refresh_token:{principal_id}"

    @staticmethod
    def _ki(refresh_token: str) -> str:
        return f"refresh_token:index:{refresh_token}"

    def _ttl_seconds(self) -> int:
        return max(1, int(self.ttl.total_seconds()))

    # -------------------- API ------------------------

    def save(self, principal_id: str, refresh_token: str, role: str) -> RefreshTokenRecord:
        """
        Store ``refresh_token`` as the only live session of ``principal_id``.

        Any previous record of the principal is replaced and its index entry
        dropped inside the same ``MULTI``/``EXEC`` block.
        """
        key = self._k(principal_id)
        ttl = self._ttl_seconds()

        while True:
            try:
                with self.r.pipeline() as p:
                    p.watch(key)
                    previous = _s(self.r.hget(key, "refresh_token")) or None

                    p.multi()
                    if previous and previous != refresh_token:
                        p.delete(self._ki(previous))
                    p.delete(key)
                    p.hset(
                        key,
                        mapping={
                            "principal_id": principal_id,
                            "refresh_token": refresh_token,
                            "role": role,
                        },
                    )
                    p.expire(key, ttl)
                    p.set(self._ki(refresh_token), principal_id, ex=ttl)
                    p.execute()
                return RefreshTokenRecord(principal_id, refresh_token, role)
            except redis.WatchError:
                # Concurrent save for the same principal; retry against the new state
                continue

    def find_by_value(self, refresh_token: str) -> RefreshTokenRecord | None:
        """
        Resolve a token value to its session record.

        An index entry whose principal no longer holds that exact token is
        stale and treated as absent.
        """
        principal_id = _s(self.r.get(self._ki(refresh_token))) or None
        if principal_id is None:
            return None
        h = self.r.hgetall(self._k(principal_id))
        if not h or _s(h.get(b"refresh_token")) != refresh_token:
            return None
        return RefreshTokenRecord(
            principal_id=_s(h.get(b"principal_id"), principal_id),
            refresh_token=refresh_token,
            role=_s(h.get(b"role")),
        )

    def delete(self, record: RefreshTokenRecord) -> bool:
        """
        Compare-and-delete ``record`` using WATCH/MULTI/EXEC.

        :returns: ``True`` only when this call removed the record. A record
            already rotated or deleted by a concurrent request yields ``False``.
        """
        key = self._k(record.principal_id)
        while True:
            try:
                with self.r.pipeline() as p:
                    p.watch(key)
                    current = _s(self.r.hget(key, "refresh_token")) or None
                    if current != record.refresh_token:
                        p.unwatch()
                        log.info(
                            "session.delete_lost",
                            extra={
                                "principal": record.principal_id,
                                "token": mask_token(record.refresh_token),
                            },
                        )
                        return False

                    p.multi()
                    p.delete(key)
                    p.delete(self._ki(record.refresh_token))
                    p.execute()
                return True
            except redis.WatchError:
                # Someone touched the record; re-check whether it is still ours
                continue
