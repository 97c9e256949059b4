"""User repository for identity lookups."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select

from app.models.user import User
from app.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    It NEVER handles JWT or session creation, only DB-level user management.
    """

    model = User

    def _filterable_fields(self):
        """Whitelist fields safe for equality filters."""
        return {
            "email": User.email,
            "nickname": User.nickname,
        }

    def _updatable_fields(self):
        """Fields that signup completion and withdrawal may change."""
        return {"nickname", "status", "name", "profile_url"}

    def get_by_email(self, email: str) -> User | None:
        """Fetch a user by email (case-insensitive).

        :param email: Email address to normalise and search.
        :type email: str
        :returns: User instance or ``None`` when not found.
        :rtype: User | None
        """
        stmt = select(User).where(User.email == email.lower().strip())
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def nickname_taken(self, nickname: str) -> bool:
        """Return ``True`` when another account already uses ``nickname``."""
        return self.exists(nickname=nickname.strip())
