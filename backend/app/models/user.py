"""User model: the identity row behind every human session principal."""

from __future__ import annotations

from enum import Enum

from sqlalchemy import Enum as SAEnum
from sqlalchemy import Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, validates

from app.core.extensions import db

from .base import ReprMixin, TimestampMixin, UUIDPKMixin


class UserRole(str, Enum):
    """Persisted account roles (``DEVICE`` and ``GUEST`` only live in tokens)."""

    USER = "USER"
    ADMIN = "ADMIN"


class UserStatus(str, Enum):
    """Account lifecycle states."""

    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"
    DORMANT = "DORMANT"
    DELETED = "DELETED"
    REGISTER = "REGISTER"  # provisioned by a social login, signup not completed

    @property
    def is_restricted(self) -> bool:
        """Whether the status forbids starting a session."""
        return self in RESTRICTED_STATUSES


RESTRICTED_STATUSES = frozenset({UserStatus.SUSPENDED, UserStatus.DORMANT, UserStatus.DELETED})


class User(UUIDPKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Account identity resolved from a social provider profile.

    Fields
    ------
    email : str
        Provider-verified email. Stored normalized (lowercase, trimmed).
    name : str | None
        Display name reported by the provider.
    nickname : str | None
        Public handle chosen when completing signup. Unique once set.
    profile_url : str | None
        Avatar URL reported by the provider.
    role : UserRole
        Persisted role embedded into access tokens.
    status : UserStatus
        Lifecycle state gating session issuance.
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(254), nullable=False)
    name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    nickname: Mapped[str | None] = mapped_column(String(50), nullable=True)
    profile_url: Mapped[str | None] = mapped_column(String(512), nullable=True)
    role: Mapped[UserRole] = mapped_column(
        SAEnum(UserRole, name="enum_user_role", native_enum=True, create_constraint=True),
        nullable=False,
        default=UserRole.USER,
    )
    status: Mapped[UserStatus] = mapped_column(
        SAEnum(UserStatus, name="enum_user_status", native_enum=True, create_constraint=True),
        nullable=False,
        default=UserStatus.REGISTER,
    )

    __table_args__ = (
        UniqueConstraint("email", name="uq_users_email"),
        UniqueConstraint("nickname", name="uq_users_nickname"),
        Index("ix_users_email", "email"),
    )

    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        """
        Normalize and validate email.

        :param key: Field name (``email``).
        :type key: str
        :param value: Email to normalize.
        :type value: str
        :returns: Normalized email (lowercased/trimmed).
        :rtype: str
        :raises ValueError: If email is missing or malformed.
        """
        if not value or not isinstance(value, str):
            raise ValueError("Email is required.")
        v = value.strip().lower()
        # Minimal sanity check; providers already verified the address.
        if "@" not in v or "." not in v.split("@")[-1]:
            raise ValueError("Email format looks invalid.")
        return v

    @validates("nickname")
    def _normalize_nickname(self, key: str, value: str | None) -> str | None:
        """Trim the nickname; blank values are rejected."""
        if value is None:
            return None
        v = value.strip()
        if not v:
            raise ValueError("Nickname cannot be blank.")
        return v
