"""Authentication-related Marshmallow schemas (camelCase on the wire)."""

from __future__ import annotations

from marshmallow import Schema, fields, validate


class SocialLoginSchema(Schema):
    """Input payload for social login."""

    provider = fields.String(required=True, validate=validate.Length(min=1, max=20))
    code = fields.String(required=True, validate=validate.Length(min=1, max=2048))


class RefreshTokenSchema(Schema):
    """Input payload carrying a refresh token (logout, reissue)."""

    refresh_token = fields.String(
        required=True, data_key="refreshToken", validate=validate.Length(min=1)
    )


class DeviceLoginSchema(Schema):
    """Input payload for device login."""

    device_id = fields.String(
        required=True, data_key="deviceId", validate=validate.Length(min=1, max=100)
    )


class MessageSchema(Schema):
    message = fields.String(required=True)


class TokenPairSchema(MessageSchema):
    """Response payload with a fresh token pair."""

    access_token = fields.String(required=True, data_key="accessToken")
    refresh_token = fields.String(required=True, data_key="refreshToken")
    access_token_expires_in = fields.Integer(required=True, data_key="accessTokenExpiresIn")


class LoginSuccessSchema(TokenPairSchema):
    """Response payload for an existing member."""

    profile_url = fields.String(allow_none=True, data_key="profileUrl")


class NewMemberSchema(MessageSchema):
    """Response payload for a member that still has to register."""

    email = fields.Email(required=True)
    name = fields.String(allow_none=True)
    registration_token = fields.String(required=True, data_key="registrationToken")
    token_expires_in = fields.Integer(required=True, data_key="tokenExpiresIn")


class DeviceLoginResponseSchema(TokenPairSchema):
    """Response payload for device login."""

    pet_id = fields.Integer(required=True, data_key="petId")
