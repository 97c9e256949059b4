# app/services/rate_limit/service.py
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from app.services._shared.errors import RateLimitedError
from app.services._shared.ports import RateLimitStore

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RateLimitPolicy:
    """
    Rate-limit constants.

    :param threshold: Attempts per window that trigger a ban.
    :param window: Attempt-counter lifetime, fixed by the first attempt.
    :param ban: Ban duration.
    :param email_cooldown: Spacing between two mails to the same address.
    :param code_ttl: Verification code lifetime.
    """

    threshold: int = 5
    window: timedelta = timedelta(seconds=60)
    ban: timedelta = timedelta(minutes=10)
    email_cooldown: timedelta = timedelta(seconds=60)
    code_ttl: timedelta = timedelta(minutes=5)

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> RateLimitPolicy:
        return cls(
            threshold=int(config["RATE_LIMIT_THRESHOLD"]),
            window=timedelta(seconds=int(config["RATE_LIMIT_WINDOW_SECONDS"])),
            ban=timedelta(seconds=int(config["RATE_LIMIT_BAN_SECONDS"])),
            email_cooldown=timedelta(seconds=int(config["EMAIL_COOLDOWN_SECONDS"])),
            code_ttl=timedelta(seconds=int(config["VERIFICATION_CODE_TTL_SECONDS"])),
        )


class RateLimitService:
    """
    Per-IP login throttling with temporary bans, plus per-email cooldowns
    and verification codes for outbound mail.

    :param store: TTL-backed counter store.
    :param policy: Thresholds and durations.
    """

    def __init__(self, *, store: RateLimitStore, policy: RateLimitPolicy | None = None) -> None:
        self.store = store
        self.policy = policy or RateLimitPolicy()

    # ------------------------------------------------------------------ #
    # IP gate
    # ------------------------------------------------------------------ #

    def check_and_enforce(self, ip: str) -> None:
        """
        Count one attempt from ``ip`` and reject it when banned or over the threshold.

        A banned IP is rejected without incrementing. The attempt that reaches
        the threshold creates the ban (and clears the counter) and is itself
        rejected.

        :param ip: Client address.
        :raises RateLimitedError: Banned or threshold reached.
        """
        if self.store.is_banned(ip):
            log.warning("rate_limit.banned_attempt", extra={"client_ip": ip})
            raise RateLimitedError(key=ip)

        count = self.record_attempt(ip)
        if count >= self.policy.threshold:
            self.ban(ip)
            raise RateLimitedError(key=ip)

    def is_banned(self, ip: str) -> bool:
        return self.store.is_banned(ip)

    def record_attempt(self, ip: str) -> int:
        return self.store.increment_attempts(ip, self.policy.window)

    def ban(self, ip: str, duration: timedelta | None = None) -> None:
        duration = duration or self.policy.ban
        self.store.ban(ip, duration)
        log.warning(
            "rate_limit.ban_created seconds=%d",
            int(duration.total_seconds()),
            extra={"client_ip": ip},
        )

    # ------------------------------------------------------------------ #
    # Email cooldown & verification codes
    # ------------------------------------------------------------------ #

    def email_cooldown_active(self, email: str) -> bool:
        return self.store.email_cooldown_active(email)

    def set_email_cooldown(self, email: str, duration: timedelta | None = None) -> None:
        self.store.set_email_cooldown(email, duration or self.policy.email_cooldown)

    def clear_email_cooldown(self, email: str) -> None:
        self.store.clear_email_cooldown(email)

    def save_verification_code(
        self, email: str, code: str, duration: timedelta | None = None
    ) -> None:
        self.store.save_verification_code(email, code, duration or self.policy.code_ttl)

    def get_verification_code(self, email: str) -> str | None:
        return self.store.get_verification_code(email)

    def delete_verification_code(self, email: str) -> None:
        self.store.delete_verification_code(email)
