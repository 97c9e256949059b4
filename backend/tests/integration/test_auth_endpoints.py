"""End-to-end tests for the /api/v1/auth endpoints."""

from __future__ import annotations

import requests
from app.infra.social.google import GOOGLE_TOKEN_URL
from app.models.user import UserStatus
from tests.factories.pet import PetFactory
from tests.factories.user import UserFactory
from tests.helpers.utils import bearer


def _problem(resp):
    assert resp.mimetype == "application/problem+json"
    return resp.get_json()


# ------------------------------ Social login ------------------------------- #


def test_existing_member_login_returns_session(social_login, google_profile, session):
    user = UserFactory(email="member@example.com")
    session.flush()
    google_profile("member@example.com")

    resp = social_login()

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["message"] == "Login completed."
    assert body["profileUrl"] == user.profile_url
    assert body["accessToken"] and body["refreshToken"]
    assert body["accessTokenExpiresIn"] == 3600


def test_new_member_login_returns_registration_token(social_login, google_profile):
    google_profile("fresh@example.com", name="Fresh")

    resp = social_login()

    assert resp.status_code == 202
    body = resp.get_json()
    assert body["message"] == "Additional information is required."
    assert body["email"] == "fresh@example.com"
    assert body["name"] == "Fresh"
    assert body["tokenExpiresIn"] == 1800
    assert "refreshToken" not in body


def test_restricted_member_gets_generic_403(social_login, google_profile, session):
    UserFactory(email="member@example.com", status=UserStatus.SUSPENDED)
    session.flush()
    google_profile("member@example.com")

    resp = social_login()

    assert resp.status_code == 403
    problem = _problem(resp)
    assert problem["code"] == "account_restricted"
    assert "SUSPENDED" not in problem["detail"]


def test_unsupported_provider(client):
    resp = client.post("/api/v1/auth/social-login", json={"provider": "kakao", "code": "c"})

    assert resp.status_code == 400
    assert _problem(resp)["code"] == "unsupported_provider"


def test_provider_failure_is_500_without_detail(social_login, mocked_http):
    mocked_http.post(GOOGLE_TOKEN_URL, body=requests.exceptions.ReadTimeout("slow"))

    resp = social_login()

    assert resp.status_code == 500
    problem = _problem(resp)
    assert problem["code"] == "social_login_failed"
    assert "timeout" not in problem["detail"].lower()


def test_missing_fields_are_422(client):
    resp = client.post("/api/v1/auth/social-login", json={"provider": "google"})

    assert resp.status_code == 422
    assert "code" in _problem(resp)["details"]["errors"]


def test_fifth_attempt_from_same_ip_is_banned(social_login, google_profile, session):
    UserFactory(email="member@example.com")
    session.flush()
    google_profile("member@example.com")

    statuses = [social_login(code=f"c{i}", ip="203.0.113.5").status_code for i in range(6)]

    assert statuses == [200, 200, 200, 200, 429, 429]
    # Another client is unaffected
    assert social_login(ip="203.0.113.6").status_code == 200


# ------------------------------ Logout & reissue --------------------------- #


def _login_existing(social_login, google_profile, session):
    UserFactory(email="member@example.com")
    session.flush()
    google_profile("member@example.com")
    return social_login().get_json()


def test_logout_revokes_access_token(client, social_login, google_profile, session, redis_client):
    tokens = _login_existing(social_login, google_profile, session)
    access, refresh = tokens["accessToken"], tokens["refreshToken"]

    resp = client.post(
        "/api/v1/auth/logout", json={"refreshToken": refresh}, headers=bearer(access)
    )

    assert resp.status_code == 200
    assert resp.get_json() == {"message": "Logged out."}
    assert redis_client.exists(f"blacklist:{access}") == 1

    # Same bearer is now unauthenticated
    again = client.post(
        "/api/v1/auth/logout", json={"refreshToken": refresh}, headers=bearer(access)
    )
    assert again.status_code == 401


def test_logout_requires_bearer(client):
    resp = client.post("/api/v1/auth/logout", json={"refreshToken": "x"})

    assert resp.status_code == 401


def test_logout_with_unknown_refresh_token_is_409(client, social_login, google_profile, session):
    tokens = _login_existing(social_login, google_profile, session)

    resp = client.post(
        "/api/v1/auth/logout",
        json={"refreshToken": "not-stored"},
        headers=bearer(tokens["accessToken"]),
    )

    assert resp.status_code == 409
    assert _problem(resp)["code"] == "token_not_found"


def test_reissue_rotates_and_old_token_is_rejected(client, social_login, google_profile, session):
    tokens = _login_existing(social_login, google_profile, session)

    resp = client.post("/api/v1/auth/reissue", json={"refreshToken": tokens["refreshToken"]})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["message"] == "Tokens reissued successfully."
    assert body["refreshToken"] != tokens["refreshToken"]

    reuse = client.post("/api/v1/auth/reissue", json={"refreshToken": tokens["refreshToken"]})
    assert reuse.status_code == 409
    assert _problem(reuse)["code"] == "token_not_found"


def test_reissue_with_garbage_token_is_400(client):
    resp = client.post("/api/v1/auth/reissue", json={"refreshToken": "garbage"})

    assert resp.status_code == 400
    assert _problem(resp)["code"] == "expired_refresh_token"


def test_refresh_token_is_not_accepted_as_bearer(client, social_login, google_profile, session):
    tokens = _login_existing(social_login, google_profile, session)

    resp = client.post(
        "/api/v1/auth/logout",
        json={"refreshToken": tokens["refreshToken"]},
        headers=bearer(tokens["refreshToken"]),
    )

    assert resp.status_code == 401


# ------------------------------- Device login ------------------------------ #


def test_device_login(client, session):
    pet = PetFactory(device_id="TRK-777")
    session.flush()

    resp = client.post("/api/v1/auth/device-login", json={"deviceId": "TRK-777"})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["petId"] == pet.id
    assert body["accessToken"] and body["refreshToken"]


def test_device_login_unknown_device(client):
    resp = client.post("/api/v1/auth/device-login", json={"deviceId": "nope"})

    assert resp.status_code == 404
    assert _problem(resp)["code"] == "device_not_found"
