"""Google / Naver OAuth clients against mocked HTTP (``responses``)."""

from __future__ import annotations

from urllib.parse import parse_qs

import pytest
import requests
import responses
from app.infra.social.google import GOOGLE_PROFILE_URL, GOOGLE_TOKEN_URL, GoogleOAuthClient
from app.infra.social.naver import NAVER_PROFILE_URL, NAVER_TOKEN_URL, NaverOAuthClient
from app.services._shared.errors import UpstreamAuthError
from app.services._shared.ports import SocialProfile


@pytest.fixture
def google():
    return GoogleOAuthClient(
        client_id="gid", client_secret="gsecret", redirect_uri="http://cb/google", timeout=2
    )


@pytest.fixture
def naver():
    return NaverOAuthClient(
        client_id="nid",
        client_secret="nsecret",
        redirect_uri="http://cb/naver",
        state="xyz",
        timeout=2,
    )


@responses.activate
def test_google_exchange_posts_authorization_code_form(google):
    responses.post(GOOGLE_TOKEN_URL, json={"access_token": "g-at", "token_type": "Bearer"})

    assert google.exchange_code("the-code") == "g-at"

    form = parse_qs(responses.calls[0].request.body)
    assert form["grant_type"] == ["authorization_code"]
    assert form["code"] == ["the-code"]
    assert form["client_id"] == ["gid"]
    assert form["redirect_uri"] == ["http://cb/google"]


@responses.activate
def test_google_profile_maps_picture_to_avatar(google):
    responses.get(
        GOOGLE_PROFILE_URL,
        json={"email": "a@gmail.com", "name": "Ann", "picture": "https://img/a.png"},
    )

    profile = google.fetch_profile("g-at")

    assert profile == SocialProfile(email="a@gmail.com", name="Ann", avatar_url="https://img/a.png")
    assert responses.calls[0].request.headers["Authorization"] == "Bearer g-at"


@responses.activate
def test_naver_exchange_sends_state(naver):
    responses.post(NAVER_TOKEN_URL, json={"access_token": "n-at"})

    assert naver.exchange_code("c") == "n-at"
    assert parse_qs(responses.calls[0].request.body)["state"] == ["xyz"]


@responses.activate
def test_naver_profile_is_read_from_response_envelope(naver):
    responses.get(
        NAVER_PROFILE_URL,
        json={
            "resultcode": "00",
            "response": {"email": "b@naver.com", "name": "Bo", "profile_image": "https://img/b"},
        },
    )

    profile = naver.fetch_profile("n-at")

    assert profile.email == "b@naver.com"
    assert profile.avatar_url == "https://img/b"


@responses.activate
def test_token_response_without_access_token_is_upstream_error(google):
    responses.post(GOOGLE_TOKEN_URL, json={"error": "invalid_grant"})

    with pytest.raises(UpstreamAuthError):
        google.exchange_code("bad")


@responses.activate
def test_http_error_is_upstream_error(google):
    responses.post(GOOGLE_TOKEN_URL, status=401, json={"error": "unauthorized_client"})

    with pytest.raises(UpstreamAuthError) as exc_info:
        google.exchange_code("c")
    assert exc_info.value.provider == "GOOGLE"


@responses.activate
def test_timeout_is_upstream_error(naver):
    responses.get(NAVER_PROFILE_URL, body=requests.exceptions.ConnectTimeout("slow"))

    with pytest.raises(UpstreamAuthError):
        naver.fetch_profile("n-at")


@responses.activate
def test_malformed_json_is_upstream_error(google):
    responses.get(GOOGLE_PROFILE_URL, body="<html>oops</html>", content_type="text/html")

    with pytest.raises(UpstreamAuthError):
        google.fetch_profile("g-at")


@responses.activate
def test_profile_without_email_is_upstream_error(google):
    responses.get(GOOGLE_PROFILE_URL, json={"name": "No Mail"})

    with pytest.raises(UpstreamAuthError):
        google.fetch_profile("g-at")


@pytest.mark.parametrize("name", ["google", "GOOGLE", " Google "])
def test_supports_is_case_insensitive(google, name):
    assert google.supports(name) is True
    assert google.supports("naver") is False
