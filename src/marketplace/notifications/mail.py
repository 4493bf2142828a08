"""Outbound mail: the port every sender implements and the in-memory one.

Senders raise ``UpstreamFailure`` when a message cannot be handed over;
callers decide whether that failure matters.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from uuid import uuid4

from marketplace.errors import UpstreamFailure


@dataclass(frozen=True)
class Mail:
    message_id: str
    to: str
    subject: str
    body: str


class Mailer(ABC):
    @abstractmethod
    def send_mail(self, to: str, subject: str, body: str) -> str:
        """Hand a plain-text message over for delivery and return its id."""


class OutboxMailer(Mailer):
    """Keeps every message in ``outbox`` instead of delivering it."""

    def __init__(self) -> None:
        self.outbox: list[Mail] = []
        self._failure: str | None = None

    def fail_with(self, reason: str = "Mail server unavailable") -> None:
        """Make every following send raise until ``reset``."""
        self._failure = reason

    def send_mail(self, to: str, subject: str, body: str) -> str:
        if self._failure:
            raise UpstreamFailure(self._failure)
        mail = Mail(message_id=f"mail-{uuid4().hex[:12]}", to=to, subject=subject, body=body)
        self.outbox.append(mail)
        return mail.message_id

    def reset(self) -> None:
        self.outbox.clear()
        self._failure = None
