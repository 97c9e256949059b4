"""
IdentityDirectory
=================

SQLAlchemy-backed :class:`UserDirectory` for the session core:
- Resolve or provision accounts from social profiles (by email)
- Complete a pending signup (nickname + ``ACTIVE`` status)
- Mark accounts as withdrawn
"""

from __future__ import annotations

import logging
import uuid

from sqlalchemy.exc import IntegrityError

from app.models.user import User, UserRole, UserStatus
from app.repositories.user import UserRepository
from app.services._shared.base import BaseService
from app.services._shared.errors import (
    ConflictError,
    InvalidRequestError,
    NotFoundError,
    violates,
)
from app.services._shared.ports import DirectoryUser, UserDirectory

log = logging.getLogger(__name__)


def _to_view(user: User) -> DirectoryUser:
    return DirectoryUser(
        principal_id=str(user.id),
        email=user.email,
        name=user.name,
        profile_url=user.profile_url,
        role=UserRole(user.role).value,
        status=UserStatus(user.status).value,
    )


def _parse_principal(principal_id: str) -> uuid.UUID:
    try:
        return uuid.UUID(str(principal_id))
    except ValueError as exc:
        raise NotFoundError("User", principal_id) from exc


class IdentityDirectory(BaseService, UserDirectory):
    """
    Application service for the ``User`` aggregate as seen by authentication.

    Responsibilities
    ----------------
    - Find an account by email or create it in the ``REGISTER`` state.
    - Finish registration with a unique nickname.
    - Withdraw accounts (status ``DELETED``).
    """

    # --------------------------------------------------------------------- #
    # Lookup / provisioning
    # --------------------------------------------------------------------- #

    def find_or_provision(
        self, email: str, name: str | None, avatar_url: str | None
    ) -> DirectoryUser:
        """
        Return the account registered under ``email``, creating it when missing.

        New accounts get role ``USER`` and status ``REGISTER`` until signup is
        completed.

        :param email: Provider-verified email.
        :type email: str
        :param name: Display name from the provider profile.
        :type name: str | None
        :param avatar_url: Avatar URL from the provider profile.
        :type avatar_url: str | None
        :returns: Account view.
        :rtype: DirectoryUser
        """
        try:
            with self.rw_uow() as uow:
                repo: UserRepository = uow.users
                user = repo.get_by_email(email)
                if user is None:
                    user = repo.add(
                        User(
                            email=email,
                            name=name,
                            profile_url=avatar_url,
                            role=UserRole.USER,
                            status=UserStatus.REGISTER,
                        )
                    )
                    log.info("identity.provisioned", extra={"principal": str(user.id)})
                return _to_view(user)
        except IntegrityError:
            # Concurrent first login with the same email: the other request won
            existing = self.get_by_email(email)
            if existing is None:
                raise
            return existing

    def get(self, principal_id: str) -> DirectoryUser | None:
        user_id = _parse_principal(principal_id)
        with self.rw_uow() as uow:
            user = uow.users.get(user_id)
            return _to_view(user) if user is not None else None

    def get_by_email(self, email: str) -> DirectoryUser | None:
        with self.rw_uow() as uow:
            user = uow.users.get_by_email(email)
            return _to_view(user) if user is not None else None

    # --------------------------------------------------------------------- #
    # Lifecycle
    # --------------------------------------------------------------------- #

    def complete_registration(self, email: str, nickname: str) -> DirectoryUser:
        """
        Finish the signup of a pending account.

        :param email: Email carried by the registration token.
        :type email: str
        :param nickname: Requested public nickname.
        :type nickname: str
        :returns: Activated account view.
        :rtype: DirectoryUser
        :raises NotFoundError: If no account exists for ``email``.
        :raises InvalidRequestError: If the account is not pending registration.
        :raises ConflictError: If the nickname is already taken.
        """
        try:
            with self.rw_uow() as uow:
                repo: UserRepository = uow.users
                user = repo.get_by_email(email)
                if user is None:
                    raise NotFoundError("User", email)
                if user.status != UserStatus.REGISTER:
                    raise InvalidRequestError("Registration is already completed.")
                if repo.nickname_taken(nickname):
                    raise ConflictError("User", "nickname already in use")
                repo.update(user, nickname=nickname, status=UserStatus.ACTIVE)
                return _to_view(user)
        except IntegrityError as exc:
            if violates(exc, "uq_users_nickname") or "nickname" in str(exc.orig).lower():
                raise ConflictError("User", "nickname already in use") from exc
            raise

    def mark_deleted(self, principal_id: str) -> DirectoryUser:
        """Set the account status to ``DELETED``."""
        user_id = _parse_principal(principal_id)
        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get_for_update(user_id)
            if user is None:
                raise NotFoundError("User", principal_id)
            repo.update(user, status=UserStatus.DELETED)
            return _to_view(user)
