from __future__ import annotations

from datetime import timedelta
from typing import cast

import redis  # type: ignore[import-untyped]

from app.services._shared.ports import RateLimitStore


def _seconds(duration: timedelta) -> int:
    return max(1, int(duration.total_seconds()))


class RedisRateLimitStore(RateLimitStore):
    """
    Attempt counters, bans, email cooldowns and verification codes in Redis.

    Keys::

        rate_limit:attempts:<ip>   INCR counter, TTL set on first increment
        rate_limit:ban:<ip>        "BANNED"
        rate_limit:email:<email>   "SENT"
        auth_code:<email>          verification code
    """

    BANNED = "BANNED"
    SENT = "SENT"

    def __init__(self, r: redis.Redis):
        self.r = r

    @staticmethod
    def _k_attempts(ip: str) -> str:
        return f"rate_limit:attempts:{ip}"

    @staticmethod
    def _k_ban(ip: str) -> str:
        return f"rate_limit:ban:{ip}"

    @staticmethod
    def _k_email(email: str) -> str:
        return f"rate_limit:email:{email}"

    @staticmethod
    def _k_code(email: str) -> str:
        return f"auth_code:{email}"

    # -------------------- IP attempts & bans --------------------

    def is_banned(self, ip: str) -> bool:
        return cast(int, self.r.exists(self._k_ban(ip))) == 1

    def increment_attempts(self, ip: str, window: timedelta) -> int:
        key = self._k_attempts(ip)
        count = int(self.r.incr(key))
        if count == 1:
            # Fixed window: only the first attempt starts the clock
            self.r.expire(key, _seconds(window))
        return count

    def attempts(self, ip: str) -> int | None:
        raw = self.r.get(self._k_attempts(ip))
        return int(raw) if raw is not None else None

    def ban(self, ip: str, duration: timedelta) -> None:
        with self.r.pipeline(transaction=True) as p:
            p.set(self._k_ban(ip), self.BANNED, ex=_seconds(duration))
            p.delete(self._k_attempts(ip))
            p.execute()

    # -------------------- Email cooldown --------------------

    def email_cooldown_active(self, email: str) -> bool:
        return cast(int, self.r.exists(self._k_email(email))) == 1

    def set_email_cooldown(self, email: str, duration: timedelta) -> None:
        self.r.set(self._k_email(email), self.SENT, ex=_seconds(duration))

    def clear_email_cooldown(self, email: str) -> None:
        self.r.delete(self._k_email(email))

    # -------------------- Verification codes --------------------

    def save_verification_code(self, email: str, code: str, duration: timedelta) -> None:
        self.r.set(self._k_code(email), code, ex=_seconds(duration))

    def get_verification_code(self, email: str) -> str | None:
        raw = self.r.get(self._k_code(email))
        if raw is None:
            return None
        return raw.decode() if isinstance(raw, bytes) else str(raw)

    def delete_verification_code(self, email: str) -> None:
        self.r.delete(self._k_code(email))
