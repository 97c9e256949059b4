# app/services/withdrawal/service.py
from __future__ import annotations

import logging
import secrets

from app.services._shared.base import BaseService
from app.services._shared.errors import InvalidRequestError, NotFoundError, RateLimitedError
from app.services._shared.ports import MailSender, UserDirectory
from app.services.rate_limit.service import RateLimitService

log = logging.getLogger(__name__)

CODE_DIGITS = 6


def generate_code(digits: int = CODE_DIGITS) -> str:
    """Random zero-padded numeric code."""
    return f"{secrets.randbelow(10**digits):0{digits}d}"


class WithdrawalService(BaseService):
    """
    Account withdrawal confirmed by a mailed verification code.

    The code lives in the rate-limit store next to the per-email cooldown
    that spaces out repeated requests.

    :param users: Account directory.
    :param rate_limiter: Cooldown and verification-code storage.
    :param mailer: Outbound mail port.
    """

    def __init__(
        self, *, users: UserDirectory, rate_limiter: RateLimitService, mailer: MailSender
    ) -> None:
        super().__init__()
        self.users = users
        self.rate_limiter = rate_limiter
        self.mailer = mailer

    def request(self, principal_id: str) -> None:
        """
        Mail a verification code to the account owner.

        :raises NotFoundError: Unknown principal.
        :raises RateLimitedError: A code was mailed to this address recently.
        """
        user = self.users.get(principal_id)
        if user is None:
            raise NotFoundError("User", principal_id)

        if self.rate_limiter.email_cooldown_active(user.email):
            log.warning("withdrawal.cooldown_active", extra={"principal": principal_id})
            raise RateLimitedError(key=user.email)

        code = generate_code()
        self.mailer.send_verification_code(user.email, code)
        self.rate_limiter.save_verification_code(user.email, code)
        self.rate_limiter.set_email_cooldown(user.email)
        log.info("withdrawal.code_sent", extra={"principal": principal_id})

    def confirm(self, principal_id: str, code: str) -> None:
        """
        Check ``code`` and mark the account as deleted.

        :raises NotFoundError: Unknown principal.
        :raises InvalidRequestError: Missing, expired or wrong code.
        """
        user = self.users.get(principal_id)
        if user is None:
            raise NotFoundError("User", principal_id)

        expected = self.rate_limiter.get_verification_code(user.email)
        if expected is None or not secrets.compare_digest(expected, code.strip()):
            log.warning("withdrawal.code_mismatch", extra={"principal": principal_id})
            raise InvalidRequestError("Verification code does not match.")

        self.users.mark_deleted(principal_id)
        self.rate_limiter.delete_verification_code(user.email)
        self.rate_limiter.clear_email_cooldown(user.email)
        log.info("withdrawal.confirmed", extra={"principal": principal_id})
