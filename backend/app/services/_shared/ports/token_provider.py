from __future__ import annotations

from datetime import timedelta
from typing import Any, Protocol


class TokenProvider(Protocol):
    """Port for encoding and decoding signed session tokens.

    Decoding raises the underlying library's error for malformed, expired,
    badly signed or wrongly algorithm'd tokens. Callers decide whether that
    is a boolean ``False`` or an error.
    """

    def create_access_token(
        self,
        *,
        identity: str,
        additional_claims: dict[str, Any] | None = None,
        expires_delta: timedelta,
    ) -> str: ...

    def create_refresh_token(
        self,
        *,
        identity: str,
        additional_claims: dict[str, Any] | None = None,
        expires_delta: timedelta,
    ) -> str: ...

    def decode(self, token: str, *, allow_expired: bool = False) -> dict[str, Any]: ...
