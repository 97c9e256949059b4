"""User lifecycle endpoints (signup completion, withdrawal)."""

from __future__ import annotations

from flask import Blueprint, request

from app.api.deps import (
    current_auth,
    json_response,
    registration_service,
    require_auth,
    timing,
    withdrawal_service,
)
from app.schemas import MessageSchema, RegistrationSchema, TokenPairSchema, WithdrawalConfirmSchema
from app.services.tokens.dto import ROLE_GUEST

bp = Blueprint("users", __name__, url_prefix="/users")

registration_schema = RegistrationSchema()
withdrawal_confirm_schema = WithdrawalConfirmSchema()
message_schema = MessageSchema()
token_pair_schema = TokenPairSchema()

MEMBER_ROLES = ("USER", "ADMIN")


@bp.post("/register")
@require_auth(ROLE_GUEST)
@timing
def register():
    """Complete a pending signup with the registration token as bearer."""

    data = registration_schema.load(request.get_json(silent=True) or {})
    email = current_auth().principal
    pair = registration_service().complete(email, data["nickname"])
    body = token_pair_schema.dump(
        {
            "message": "Registration completed.",
            "access_token": pair.access_token,
            "refresh_token": pair.refresh_token,
            "access_token_expires_in": pair.access_token_expires_in,
        }
    )
    return json_response(body, status=201)


@bp.post("/withdrawal")
@require_auth(*MEMBER_ROLES)
@timing
def request_withdrawal():
    """Mail a verification code confirming the withdrawal."""

    withdrawal_service().request(current_auth().principal)
    return json_response(message_schema.dump({"message": "Verification code sent."}), status=202)


@bp.delete("/withdrawal")
@require_auth(*MEMBER_ROLES)
@timing
def confirm_withdrawal():
    """Withdraw the account once the mailed code is confirmed."""

    data = withdrawal_confirm_schema.load(request.get_json(silent=True) or {})
    withdrawal_service().confirm(current_auth().principal, data["code"])
    return json_response(message_schema.dump({"message": "Account withdrawn."}))
