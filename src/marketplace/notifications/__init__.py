"""Mail adapter registry.

The adapter is picked once from ``MAIL_ADAPTER`` and kept as a singleton.
Only the outbox adapter ships with the application; deployments plug a
real sender in with ``set_mailer``.
"""

import os

from marketplace.notifications.mail import Mailer, OutboxMailer

_mailer: Mailer | None = None


def get_mailer() -> Mailer:
    global _mailer
    if _mailer is None:
        adapter = os.getenv("MAIL_ADAPTER", "outbox")
        if adapter != "outbox":
            raise ValueError(f"Unknown mail adapter: {adapter}")
        _mailer = OutboxMailer()
    return _mailer


def set_mailer(mailer: Mailer) -> None:
    global _mailer
    _mailer = mailer


def reset_mailer() -> None:
    """Drop the singleton (useful for testing)."""
    global _mailer
    _mailer = None
