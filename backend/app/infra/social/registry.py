"""Closed provider registry built from application config."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from app.infra.social.base import OAuthProviderClient
from app.infra.social.google import GoogleOAuthClient
from app.infra.social.naver import NaverOAuthClient
from app.services._shared.errors import UnsupportedProviderError
from app.services._shared.ports import IdentityProvider, SocialProvider


class ProviderRegistry:
    """
    Dispatch a client-supplied provider name to its client.

    Names outside :class:`SocialProvider`, or members without configured
    credentials, raise :class:`UnsupportedProviderError`.
    """

    def __init__(self, clients: Mapping[SocialProvider, IdentityProvider]) -> None:
        self._clients = dict(clients)

    def resolve(self, provider: str) -> IdentityProvider:
        try:
            member = SocialProvider.parse(provider or "")
        except ValueError as exc:
            raise UnsupportedProviderError(provider=provider) from exc
        client = self._clients.get(member)
        if client is None or not client.supports(member.value):
            raise UnsupportedProviderError(provider=provider)
        return client

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> ProviderRegistry:
        """Build clients for every provider whose client id is configured."""
        timeout = float(config.get("SOCIAL_HTTP_TIMEOUT_SECONDS", 5))
        clients: dict[SocialProvider, OAuthProviderClient] = {}
        if config.get("GOOGLE_CLIENT_ID"):
            clients[SocialProvider.GOOGLE] = GoogleOAuthClient(
                client_id=config["GOOGLE_CLIENT_ID"],
                client_secret=config.get("GOOGLE_CLIENT_SECRET", ""),
                redirect_uri=config.get("GOOGLE_REDIRECT_URI", ""),
                timeout=timeout,
            )
        if config.get("NAVER_CLIENT_ID"):
            clients[SocialProvider.NAVER] = NaverOAuthClient(
                client_id=config["NAVER_CLIENT_ID"],
                client_secret=config.get("NAVER_CLIENT_SECRET", ""),
                redirect_uri=config.get("NAVER_REDIRECT_URI", ""),
                state=config.get("NAVER_STATE", ""),
                timeout=timeout,
            )
        return cls(clients)
