"""
RegistrationService
===================

Finishes the signup of a member who logged in through a social provider but
has no nickname yet (status ``REGISTER``):

- Activates the account with a unique nickname.
- Starts the member's first session (access + stored refresh token).
"""

from __future__ import annotations

import logging

from app.services._shared.base import BaseService
from app.services._shared.ports import UserDirectory
from app.services.auth.dto import TokenPairOut
from app.services.auth.service import AuthService

log = logging.getLogger(__name__)


class RegistrationService(BaseService):
    """
    Orchestrates signup completion.

    :param users: Account directory.
    :param auth: Session issuer used once the account is active.
    """

    def __init__(self, *, users: UserDirectory, auth: AuthService) -> None:
        super().__init__()
        self.users = users
        self.auth = auth

    def complete(self, email: str, nickname: str) -> TokenPairOut:
        """
        Activate the pending account of ``email`` and log it in.

        :param email: Email carried by the registration token.
        :type email: str
        :param nickname: Requested public nickname.
        :type nickname: str
        :returns: First token pair of the member.
        :rtype: TokenPairOut
        :raises NotFoundError: No account for ``email``.
        :raises InvalidRequestError: Registration already completed.
        :raises ConflictError: Nickname already taken.
        """
        user = self.users.complete_registration(email, nickname.strip())
        pair = self.auth.start_session(user.principal_id, user.role)
        log.info("registration.completed", extra={"principal": user.principal_id})
        return pair
