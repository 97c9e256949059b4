"""Shared plumbing for OAuth2 authorization-code providers."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import requests

from app.services._shared.errors import UpstreamAuthError
from app.services._shared.ports import SocialProfile, SocialProvider

log = logging.getLogger(__name__)


class OAuthProviderClient(ABC):
    """
    Blocking OAuth2 client for one provider.

    Subclasses set ``provider``, ``token_url`` and ``profile_url`` and map the
    provider payload into a :class:`SocialProfile`. Every transport failure,
    non-2xx reply or unusable body becomes :class:`UpstreamAuthError`; nothing
    is retried.

    :param client_id: OAuth client id.
    :param client_secret: OAuth client secret.
    :param redirect_uri: Redirect URI registered with the provider.
    :param timeout: Per-call timeout in seconds.
    :param session: Optional ``requests.Session`` (connection reuse, tests).
    """

    provider: SocialProvider
    token_url: str
    profile_url: str

    def __init__(
        self,
        *,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        timeout: float = 5.0,
        session: requests.Session | None = None,
    ) -> None:
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.timeout = timeout
        self.http = session or requests.Session()

    # -------------------- contract --------------------

    def supports(self, provider: str) -> bool:
        return provider.strip().upper() == self.provider.value

    def exchange_code(self, code: str) -> str:
        body = self._call("POST", self.token_url, data=self.token_request(code))
        access_token = body.get("access_token")
        if not access_token:
            raise self._error("token response without access_token")
        return str(access_token)

    def fetch_profile(self, provider_access_token: str) -> SocialProfile:
        body = self._call(
            "GET",
            self.profile_url,
            headers={"Authorization": f"Bearer {provider_access_token}"},
        )
        profile = self.parse_profile(body)
        if not profile.email:
            raise self._error("profile without email")
        return profile

    # -------------------- provider specifics --------------------

    def token_request(self, code: str) -> dict[str, str]:
        """Form body for the authorization-code exchange."""
        return {
            "grant_type": "authorization_code",
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "redirect_uri": self.redirect_uri,
            "code": code,
        }

    @abstractmethod
    def parse_profile(self, body: dict[str, Any]) -> SocialProfile: ...

    # -------------------- helpers --------------------

    def _error(self, reason: str) -> UpstreamAuthError:
        return UpstreamAuthError(provider=self.provider.value, reason=reason)

    def _call(self, method: str, url: str, **kwargs: Any) -> dict[str, Any]:
        try:
            resp = self.http.request(method, url, timeout=self.timeout, **kwargs)
            resp.raise_for_status()
            body = resp.json()
        except requests.RequestException as exc:
            # Covers timeouts, connection errors, HTTP errors and bad JSON
            log.warning(
                "social.upstream_error",
                extra={"provider": self.provider.value, "endpoint": url},
                exc_info=True,
            )
            raise self._error(f"{type(exc).__name__} calling {url}") from exc
        if not isinstance(body, dict):
            raise self._error(f"unexpected payload from {url}")
        return body
