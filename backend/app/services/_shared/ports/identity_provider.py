from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class SocialProvider(str, Enum):
    """Closed set of federated identity providers."""

    GOOGLE = "GOOGLE"
    NAVER = "NAVER"

    @classmethod
    def parse(cls, raw: str) -> SocialProvider:
        """Case-insensitive lookup; raises ``ValueError`` for unknown names."""
        return cls(raw.strip().upper())


@dataclass(frozen=True, slots=True)
class SocialProfile:
    """
    Normalized profile returned by any provider.

    :param email: Verified email address.
    :param name: Display name (may be empty).
    :param avatar_url: Profile picture URL, if any.
    """

    email: str
    name: str
    avatar_url: str | None = None


class IdentityProvider(Protocol):
    """Uniform contract every social provider client implements."""

    provider: SocialProvider

    def supports(self, provider: str) -> bool: ...

    def exchange_code(self, code: str) -> str:
        """Trade an authorization code for a provider access token."""

    def fetch_profile(self, provider_access_token: str) -> SocialProfile: ...


class IdentityProviderRegistry(Protocol):
    """Resolves a client-supplied provider name to its client."""

    def resolve(self, provider: str) -> IdentityProvider: ...
