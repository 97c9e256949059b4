"""Authentication endpoints using the service layer."""

from __future__ import annotations

from flask import Blueprint, request

from app.api.deps import auth_service, client_ip, current_auth, json_response, require_auth, timing
from app.schemas import (
    DeviceLoginResponseSchema,
    DeviceLoginSchema,
    LoginSuccessSchema,
    MessageSchema,
    NewMemberSchema,
    RefreshTokenSchema,
    SocialLoginSchema,
    TokenPairSchema,
)
from app.services.auth.dto import (
    DeviceLoginIn,
    ExistingMember,
    LogoutIn,
    ReissueIn,
    SocialLoginIn,
    TokenPairOut,
)

bp = Blueprint("auth", __name__, url_prefix="/auth")

social_login_schema = SocialLoginSchema()
refresh_token_schema = RefreshTokenSchema()
device_login_schema = DeviceLoginSchema()
message_schema = MessageSchema()
token_pair_schema = TokenPairSchema()
login_success_schema = LoginSuccessSchema()
new_member_schema = NewMemberSchema()
device_login_response_schema = DeviceLoginResponseSchema()


def _pair_fields(pair: TokenPairOut) -> dict:
    return {
        "access_token": pair.access_token,
        "refresh_token": pair.refresh_token,
        "access_token_expires_in": pair.access_token_expires_in,
    }


@bp.post("/social-login")
@timing
def social_login():
    """Log in with a provider authorization code.

    200 with a full session for existing members, 202 with a registration
    token for members that still have to sign up.
    """

    data = social_login_schema.load(request.get_json(silent=True) or {})
    outcome = auth_service().social_login(
        SocialLoginIn(provider=data["provider"], code=data["code"], client_ip=client_ip())
    )
    if isinstance(outcome, ExistingMember):
        body = login_success_schema.dump(
            {
                "message": "Login completed.",
                "profile_url": outcome.profile_url,
                **_pair_fields(outcome.tokens),
            }
        )
        return json_response(body)

    body = new_member_schema.dump(
        {
            "message": "Additional information is required.",
            "email": outcome.email,
            "name": outcome.name,
            "registration_token": outcome.registration_token,
            "token_expires_in": outcome.token_expires_in,
        }
    )
    return json_response(body, status=202)


@bp.post("/logout")
@require_auth()
@timing
def logout():
    """Close the refresh session and revoke the bearer access token."""

    data = refresh_token_schema.load(request.get_json(silent=True) or {})
    ctx = current_auth()
    auth_service().logout(LogoutIn(refresh_token=data["refresh_token"], access_token=ctx.token))
    return json_response(message_schema.dump({"message": "Logged out."}))


@bp.post("/reissue")
@timing
def reissue():
    """Rotate a refresh token into a new token pair."""

    data = refresh_token_schema.load(request.get_json(silent=True) or {})
    pair = auth_service().reissue(ReissueIn(refresh_token=data["refresh_token"]))
    body = token_pair_schema.dump({"message": "Tokens reissued successfully.", **_pair_fields(pair)})
    return json_response(body)


@bp.post("/device-login")
@timing
def device_login():
    """Start a session for a paired tracking device."""

    data = device_login_schema.load(request.get_json(silent=True) or {})
    result = auth_service().device_login(DeviceLoginIn(device_id=data["device_id"]))
    body = device_login_response_schema.dump(
        {"message": "Device login completed.", "pet_id": result.pet_id, **_pair_fields(result.tokens)}
    )
    return json_response(body)
