"""Extrator de payloads do webhook WhatsApp Business API.

Lê apenas a primeira mensagem de entry[0].changes[0].value.messages e a
converte em MessageEnvelope. Nunca levanta exceção: payload sem mensagem,
sem remetente ou sem timestamp válido resulta em None.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from app.domain.envelope import MessageEnvelope

logger = logging.getLogger(__name__)

TRANSPORT_NAME = "whatsapp"

MEDIA_MESSAGE_TYPES = frozenset({"image", "video", "document"})

# Prefixo de URI para mídia sem link, apenas com ID da Graph API
MEDIA_ID_SCHEME = "whatsapp-media:"


def _first(items: Any) -> dict[str, Any] | None:
    if isinstance(items, list) and items and isinstance(items[0], dict):
        return items[0]
    return None


def _first_message(payload: dict[str, Any]) -> dict[str, Any] | None:
    entry = _first(payload.get("entry"))
    if entry is None:
        return None
    change = _first(entry.get("changes"))
    if change is None:
        return None
    value = change.get("value")
    if not isinstance(value, dict):
        return None
    return _first(value.get("messages"))


def _parse_epoch_seconds(raw: Any) -> datetime | None:
    """Epoch em segundos (int ou string de dígitos) → datetime UTC."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        seconds = raw
    elif isinstance(raw, str) and raw.strip().isdigit():
        seconds = int(raw.strip())
    else:
        return None
    try:
        return datetime.fromtimestamp(seconds, tz=UTC)
    except (OverflowError, OSError, ValueError):
        return None


def _extract_body_and_media(msg: dict[str, Any], message_type: str) -> tuple[str, str | None]:
    if message_type == "text":
        text_block = msg.get("text")
        body = text_block.get("body") if isinstance(text_block, dict) else None
        return (body if isinstance(body, str) else ""), None

    if message_type in MEDIA_MESSAGE_TYPES:
        block = msg.get(message_type)
        if not isinstance(block, dict):
            return "", None
        caption = block.get("caption")
        media_url = block.get("link") or block.get("url")
        if not media_url and block.get("id"):
            media_url = f"{MEDIA_ID_SCHEME}{block['id']}"
        return (caption if isinstance(caption, str) else ""), (str(media_url) if media_url else None)

    logger.info("unsupported_message_type_received", extra={"message_type": message_type})
    return "", None


def decode_whatsapp_payload(payload: dict[str, Any]) -> MessageEnvelope | None:
    """Converte o payload do webhook em envelope (ou None se não decodificável)."""
    if not isinstance(payload, dict):
        return None
    msg = _first_message(payload)
    if msg is None:
        return None

    sender = msg.get("from")
    if not isinstance(sender, str) or not sender.strip():
        return None

    received_at = _parse_epoch_seconds(msg.get("timestamp"))
    if received_at is None:
        return None

    message_type = msg.get("type")
    body, media_url = _extract_body_and_media(
        msg, message_type if isinstance(message_type, str) else "unknown"
    )
    message_id = msg.get("id")
    return MessageEnvelope(
        sender_id=sender.strip(),
        body=body,
        received_at=received_at,
        media_url=media_url,
        message_id=message_id if isinstance(message_id, str) else None,
        transport=TRANSPORT_NAME,
    )
