from __future__ import annotations

from typing import Any

from app.infra.social.base import OAuthProviderClient
from app.services._shared.ports import SocialProfile, SocialProvider

GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_PROFILE_URL = "https://www.googleapis.com/oauth2/v3/userinfo"


class GoogleOAuthClient(OAuthProviderClient):
    """Google OpenID userinfo: flat ``email`` / ``name`` / ``picture`` fields."""

    provider = SocialProvider.GOOGLE
    token_url = GOOGLE_TOKEN_URL
    profile_url = GOOGLE_PROFILE_URL

    def parse_profile(self, body: dict[str, Any]) -> SocialProfile:
        return SocialProfile(
            email=str(body.get("email") or ""),
            name=str(body.get("name") or ""),
            avatar_url=body.get("picture"),
        )
