"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import (
    DeviceLoginResponseSchema,
    DeviceLoginSchema,
    LoginSuccessSchema,
    MessageSchema,
    NewMemberSchema,
    RefreshTokenSchema,
    SocialLoginSchema,
    TokenPairSchema,
)
from .user import RegistrationSchema, WithdrawalConfirmSchema

__all__ = [
    "SocialLoginSchema",
    "RefreshTokenSchema",
    "DeviceLoginSchema",
    "MessageSchema",
    "TokenPairSchema",
    "LoginSuccessSchema",
    "NewMemberSchema",
    "DeviceLoginResponseSchema",
    "RegistrationSchema",
    "WithdrawalConfirmSchema",
]
