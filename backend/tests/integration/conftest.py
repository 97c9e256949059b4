"""Fixtures for endpoint tests: mocked provider HTTP and login helpers."""

from __future__ import annotations

import pytest
import responses
from app.infra.social.google import GOOGLE_PROFILE_URL, GOOGLE_TOKEN_URL


@pytest.fixture
def mocked_http():
    """Intercept outgoing ``requests`` calls for the duration of a test."""
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


@pytest.fixture
def google_profile(mocked_http):
    """Make Google answer the code exchange and return the given profile."""

    def _install(email: str, name: str = "Member", picture: str | None = None):
        mocked_http.post(GOOGLE_TOKEN_URL, json={"access_token": "google-at"})
        mocked_http.get(
            GOOGLE_PROFILE_URL,
            json={"email": email, "name": name, "picture": picture},
        )

    return _install


@pytest.fixture
def social_login(client):
    """POST a Google social login from ``ip``."""

    def _login(code: str = "auth-code", ip: str = "198.51.100.20"):
        return client.post(
            "/api/v1/auth/social-login",
            json={"provider": "google", "code": code},
            environ_base={"REMOTE_ADDR": ip},
        )

    return _login
