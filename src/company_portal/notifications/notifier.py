from __future__ import annotations

import logging
from typing import Protocol

import resend
from resend.exceptions import ResendError

from ..core.constants import DEFAULT_MAIL_FROM

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Outbound message channel used by the core; transport is pluggable."""

    def deliver(self, recipient: str, subject: str, body: str) -> bool:
        raise NotImplementedError


class LogNotifier(Notifier):
    """Simulated delivery for environments without a mail provider."""

    def deliver(self, recipient: str, subject: str, body: str) -> bool:
        logger.info("[SIMULATED EMAIL] to=%s subject=%r\n%s", recipient, subject, body)
        return True


class ResendNotifier(Notifier):
    """Delivers through the Resend HTTP API, retrying a failed send once."""

    def __init__(self, api_key: str, *, sender: str = DEFAULT_MAIL_FROM, attempts: int = 2):
        resend.api_key = api_key
        self._sender = sender
        self._attempts = max(1, int(attempts))

    def deliver(self, recipient: str, subject: str, body: str) -> bool:
        params = {
            "from": self._sender,
            "to": [recipient],
            "subject": subject,
            "text": body,
        }
        for attempt in range(1, self._attempts + 1):
            try:
                result = resend.Emails.send(params)
            except (ResendError, OSError) as exc:
                logger.error("Email delivery to %s failed (attempt %s/%s): %s", recipient, attempt, self._attempts, exc)
                continue
            logger.info("Email sent to %s (id=%s)", recipient, (result or {}).get("id"))
            return True
        return False


def build_notifier(api_key: str | None, *, sender: str = DEFAULT_MAIL_FROM) -> Notifier:
    if not api_key:
        logger.warning("RESEND_API_KEY is not set; emails will be logged instead of sent")
        return LogNotifier()
    return ResendNotifier(api_key, sender=sender)
