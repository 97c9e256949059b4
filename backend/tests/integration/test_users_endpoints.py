"""End-to-end signup completion and withdrawal."""

from __future__ import annotations

import uuid

from app.models.user import User, UserStatus
from tests.factories.user import UserFactory
from tests.helpers.utils import bearer


def _register(client, social_login, google_profile, nickname="bori-mom"):
    google_profile("fresh@example.com", name="Fresh")
    pending = social_login().get_json()
    return client.post(
        "/api/v1/users/register",
        json={"nickname": nickname},
        headers=bearer(pending["registrationToken"]),
    )


def test_full_signup_session_lifecycle(client, social_login, google_profile, session):
    resp = _register(client, social_login, google_profile)

    assert resp.status_code == 201
    pair = resp.get_json()
    user = session.query(User).filter_by(email="fresh@example.com").one()
    assert user.status == UserStatus.ACTIVE
    assert user.nickname == "bori-mom"

    rotated = client.post("/api/v1/auth/reissue", json={"refreshToken": pair["refreshToken"]})
    assert rotated.status_code == 200
    rotated_pair = rotated.get_json()

    out = client.post(
        "/api/v1/auth/logout",
        json={"refreshToken": rotated_pair["refreshToken"]},
        headers=bearer(rotated_pair["accessToken"]),
    )
    assert out.status_code == 200

    after = client.post(
        "/api/v1/auth/reissue", json={"refreshToken": rotated_pair["refreshToken"]}
    )
    assert after.status_code == 409


def test_login_after_completed_registration_gets_full_session(
    client, social_login, google_profile, tokens
):
    google_profile("a@b.com", name="Ari")

    first = social_login(code="abc")

    assert first.status_code == 202
    registration_token = first.get_json()["registrationToken"]
    assert tokens.validate(registration_token) is True
    assert tokens.parse_email(registration_token) == "a@b.com"

    registered = client.post(
        "/api/v1/users/register",
        json={"nickname": "ari-dad"},
        headers=bearer(registration_token),
    )
    assert registered.status_code == 201

    again = social_login(code="abc")

    assert again.status_code == 200
    body = again.get_json()
    assert tokens.validate(body["accessToken"]) is True
    assert tokens.validate(body["refreshToken"]) is True
    assert "registrationToken" not in body


def test_register_requires_registration_token(client, tokens, session):
    user = UserFactory()
    session.flush()
    member_access = tokens.issue_access(str(user.id), "USER")

    resp = client.post(
        "/api/v1/users/register", json={"nickname": "x-name"}, headers=bearer(member_access)
    )

    assert resp.status_code == 403


def test_register_with_taken_nickname(client, social_login, google_profile, session):
    UserFactory(nickname="bori-mom")
    session.flush()

    resp = _register(client, social_login, google_profile)

    assert resp.status_code == 409


def test_register_nickname_is_validated(client, social_login, google_profile):
    resp = _register(client, social_login, google_profile, nickname="x")

    assert resp.status_code == 422


def test_withdrawal_flow(client, tokens, session, redis_client):
    user = UserFactory(email="leaving@example.com")
    session.flush()
    headers = bearer(tokens.issue_access(str(user.id), "USER"))

    requested = client.post("/api/v1/users/withdrawal", headers=headers)
    assert requested.status_code == 202

    throttled = client.post("/api/v1/users/withdrawal", headers=headers)
    assert throttled.status_code == 429

    wrong = client.delete("/api/v1/users/withdrawal", json={"code": "12345x"}, headers=headers)
    assert wrong.status_code == 422

    code = redis_client.get("auth_code:leaving@example.com").decode()
    confirmed = client.delete("/api/v1/users/withdrawal", json={"code": code}, headers=headers)
    assert confirmed.status_code == 200

    session.refresh(user)
    assert user.status == UserStatus.DELETED


def test_withdrawal_forbidden_for_devices(client, tokens):
    headers = bearer(tokens.issue_access("device-principal", "DEVICE"))

    assert client.post("/api/v1/users/withdrawal", headers=headers).status_code == 403


def test_withdrawal_for_unknown_account_does_not_echo_principal(client, tokens):
    ghost = str(uuid.uuid4())

    resp = client.post(
        "/api/v1/users/withdrawal", headers=bearer(tokens.issue_access(ghost, "USER"))
    )

    assert resp.status_code == 404
    problem = resp.get_json()
    assert problem["detail"] == "User not found."
    assert ghost not in resp.get_data(as_text=True)
