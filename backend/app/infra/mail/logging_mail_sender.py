from __future__ import annotations

import logging

from app.services._shared.ports import MailSender

log = logging.getLogger(__name__)


class LoggingMailSender(MailSender):
    """
    Mail sender that only records the dispatch in the logs.

    The code itself is never logged; delivery belongs to the mail gateway.
    """

    def send_verification_code(self, email: str, code: str) -> None:
        log.info("mail.verification_code_sent", extra={"principal": email})
