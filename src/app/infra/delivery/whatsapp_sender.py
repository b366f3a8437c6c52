"""Sender de texto pelo WhatsApp (Graph API /{phone_number_id}/messages)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from api.connectors.whatsapp.http_client import (
    WhatsAppHttpClient,
    build_text_payload,
    create_whatsapp_http_client,
)

if TYPE_CHECKING:
    from config.settings import WhatsAppSettings

logger = logging.getLogger(__name__)


class WhatsAppTextSender:
    """Implementa ChannelSenderProtocol via Graph API."""

    def __init__(
        self,
        settings: WhatsAppSettings,
        http_client: WhatsAppHttpClient | None = None,
    ) -> None:
        self._settings = settings
        self._client = http_client or create_whatsapp_http_client(settings)

    async def send_text(self, to: str, body: str) -> str | None:
        data = await self._client.send_message(
            self._settings.get_messages_endpoint(),
            self._settings.access_token,
            build_text_payload(to, body),
        )
        messages = data.get("messages") or []
        message_id = messages[0].get("id") if messages and isinstance(messages[0], dict) else None
        logger.info("whatsapp_text_sent", extra={"message_id": message_id})
        return message_id
