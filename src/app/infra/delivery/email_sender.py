"""Sender de notificação por email via API HTTP (Resend)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.infra.http import HttpClient, HttpClientConfig, HttpError

if TYPE_CHECKING:
    from config.settings import EmailSettings

logger = logging.getLogger(__name__)


class ResendEmailSender:
    """Implementa EmailSenderProtocol via POST /emails.

    As notificações vão para a equipe (EMAIL_NOTIFY_TO); o remetente da
    mensagem aparece no corpo.
    """

    def __init__(
        self,
        settings: EmailSettings,
        http_client: HttpClient | None = None,
    ) -> None:
        self._settings = settings
        self._client = http_client or HttpClient(
            HttpClientConfig(
                timeout_seconds=settings.request_timeout_seconds,
                max_retries=settings.max_retries,
            )
        )

    async def send_notification(self, sender_id: str, subject: str, body: str) -> str | None:
        payload = {
            "from": self._settings.from_email,
            "to": [self._settings.notify_to],
            "subject": subject,
            "text": f"From: {sender_id}\n\n{body}",
        }
        response = await self._client.post(
            self._settings.api_url,
            json=payload,
            headers={"Authorization": f"Bearer {self._settings.api_key}"},
        )
        if response.status_code >= 400:
            raise HttpError("email_api_error", status_code=response.status_code)
        email_id = response.json().get("id")
        logger.info("email_notification_sent", extra={"email_id": email_id})
        return email_id
