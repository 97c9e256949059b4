from __future__ import annotations

from typing import Any

from app.infra.social.base import OAuthProviderClient
from app.services._shared.ports import SocialProfile, SocialProvider

NAVER_TOKEN_URL = "https://nid.naver.com/oauth2.0/token"
NAVER_PROFILE_URL = "https://openapi.naver.com/v1/nid/me"


class NaverOAuthClient(OAuthProviderClient):
    """Naver login: token exchange carries ``state``; profile sits under ``response``."""

    provider = SocialProvider.NAVER
    token_url = NAVER_TOKEN_URL
    profile_url = NAVER_PROFILE_URL

    def __init__(self, *, state: str = "", **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.state = state

    def token_request(self, code: str) -> dict[str, str]:
        data = super().token_request(code)
        data["state"] = self.state
        return data

    def parse_profile(self, body: dict[str, Any]) -> SocialProfile:
        data = body.get("response") or {}
        return SocialProfile(
            email=str(data.get("email") or ""),
            name=str(data.get("name") or ""),
            avatar_url=data.get("profile_image"),
        )
