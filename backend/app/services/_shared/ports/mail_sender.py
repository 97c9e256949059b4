from __future__ import annotations

from typing import Protocol


class MailSender(Protocol):
    """Outbound verification mail."""

    def send_verification_code(self, email: str, code: str) -> None: ...


class RecordingMailSender(MailSender):
    """Keeps sent codes in memory; used by tests."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, str]] = []

    def send_verification_code(self, email: str, code: str) -> None:
        self.sent.append((email, code))
