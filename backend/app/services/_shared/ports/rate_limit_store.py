from __future__ import annotations

from datetime import timedelta
from typing import Protocol


class RateLimitStore(Protocol):
    """
    TTL-bounded counters and markers backing the rate limiter.

    ``increment_attempts`` must be atomic and must only set the window TTL on
    the first increment so later attempts never extend the window.
    """

    def is_banned(self, ip: str) -> bool: ...

    def increment_attempts(self, ip: str, window: timedelta) -> int: ...

    def attempts(self, ip: str) -> int | None: ...

    def ban(self, ip: str, duration: timedelta) -> None:
        """Set the ban marker and delete the attempt counter."""

    def email_cooldown_active(self, email: str) -> bool: ...

    def set_email_cooldown(self, email: str, duration: timedelta) -> None: ...

    def clear_email_cooldown(self, email: str) -> None: ...

    def save_verification_code(self, email: str, code: str, duration: timedelta) -> None: ...

    def get_verification_code(self, email: str) -> str | None: ...

    def delete_verification_code(self, email: str) -> None: ...
