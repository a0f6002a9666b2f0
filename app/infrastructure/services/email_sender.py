"""Email delivery adapters (implement IEmailSender)."""

from __future__ import annotations

import logging

from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class LogOnlyEmailSender:
    """Logs outgoing email instead of delivering it.

    Delivery transport is an external concern; a production deployment swaps
    in an SMTP or queue-backed sender behind the same protocol.
    """

    async def send(self, to_emails: list[str], subject: str, body: str) -> None:
        recipients = [address for address in to_emails or [] if address]
        if not recipients:
            logger.info("Email: no recipients, skipping (subject=%r)", (subject or "")[:80])
            return
        logger.info("Email: would send to %d recipient(s) (subject=%r)", len(recipients), (subject or "")[:80])
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Email recipients: %s", recipients)
            logger.debug("Email body (first 500 chars): %s", (body or "")[:500])
