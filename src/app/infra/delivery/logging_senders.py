"""Senders que apenas registram o envio (dev/test ou sem credenciais)."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class LoggingChannelSender:
    async def send_text(self, to: str, body: str) -> str | None:
        logger.info("channel_send_skipped", extra={"to": to, "body_length": len(body)})
        return None


class LoggingEmailSender:
    async def send_notification(self, sender_id: str, subject: str, body: str) -> str | None:
        logger.info(
            "email_send_skipped",
            extra={"sender_id": sender_id, "subject": subject, "body_length": len(body)},
        )
        return None
