from __future__ import annotations

from datetime import timedelta
from typing import cast

import redis  # type: ignore[import-untyped]

from app.services._shared.ports import RevocationStore


class RedisRevocationStore(RevocationStore):
    """
    Blacklist for **access tokens**, keyed by the full token value.

    Each entry lives exactly as long as the token it revokes, so the
    blacklist never outgrows the set of still-valid tokens.
    """

    MARKER = "logout"

    def __init__(self, r: redis.Redis):
        self.r = r

    @staticmethod
    def _k(access_token: str) -> str:
        return f"blacklist:{access_token}"

    def is_revoked(self, access_token: str) -> bool:
        return cast(int, self.r.exists(self._k(access_token))) == 1

    def revoke(self, access_token: str, remaining: timedelta) -> None:
        ttl_ms = int(remaining.total_seconds() * 1000)
        if ttl_ms <= 0:
            # Already expired: nothing left to revoke
            return
        self.r.set(self._k(access_token), self.MARKER, px=ttl_ms)
