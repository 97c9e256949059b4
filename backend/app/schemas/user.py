"""User lifecycle schemas (signup completion, withdrawal)."""

from __future__ import annotations

from marshmallow import Schema, fields, validate


class RegistrationSchema(Schema):
    """Payload completing a pending signup."""

    nickname = fields.String(
        required=True,
        validate=[
            validate.Length(min=2, max=20),
            validate.Regexp(r"^\S(.*\S)?$", error="Nickname must not start or end with spaces."),
        ],
    )


class WithdrawalConfirmSchema(Schema):
    """Payload confirming an account withdrawal."""

    code = fields.String(
        required=True,
        validate=validate.Regexp(r"^\d{6}$", error="Code must be 6 digits."),
    )
