"""Testes do extrator de payloads WhatsApp → MessageEnvelope."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

import pytest

from api.normalizers.whatsapp import decode_whatsapp_payload


def _payload(message: dict[str, Any] | None, *, extra_messages: int = 0) -> dict[str, Any]:
    messages: list[dict[str, Any]] = [] if message is None else [message]
    messages += [
        {"from": "15559999999", "timestamp": "1", "type": "text", "text": {"body": "other"}}
    ] * extra_messages
    return {
        "object": "whatsapp_business_account",
        "entry": [
            {
                "id": "WABA_ID",
                "changes": [
                    {
                        "field": "messages",
                        "value": {
                            "messaging_product": "whatsapp",
                            "metadata": {"phone_number_id": "123"},
                            "messages": messages,
                        },
                    }
                ],
            }
        ],
    }


def _text_message(**overrides: Any) -> dict[str, Any]:
    message = {
        "from": "15551234567",
        "id": "wamid.ABC",
        "timestamp": "1736942400",
        "type": "text",
        "text": {"body": "order status please"},
    }
    message.update(overrides)
    return message


class TestTextMessages:
    """Mensagens de texto."""

    def test_text_message_is_decoded(self) -> None:
        envelope = decode_whatsapp_payload(_payload(_text_message()))

        assert envelope is not None
        assert envelope.sender_id == "15551234567"
        assert envelope.body == "order status please"
        assert envelope.media_url is None
        assert envelope.message_id == "wamid.ABC"
        assert envelope.transport == "whatsapp"
        assert envelope.received_at == datetime.fromtimestamp(1736942400, tz=UTC)
        assert envelope.role is None

    def test_integer_timestamp_is_accepted(self) -> None:
        envelope = decode_whatsapp_payload(_payload(_text_message(timestamp=1736942400)))
        assert envelope is not None
        assert envelope.received_at.tzinfo is UTC

    def test_only_first_message_is_used(self) -> None:
        envelope = decode_whatsapp_payload(_payload(_text_message(), extra_messages=2))
        assert envelope is not None
        assert envelope.body == "order status please"


class TestMediaMessages:
    """image/video/document carregam uma URI de mídia."""

    @pytest.mark.parametrize("media_type", ["image", "video", "document"])
    def test_media_with_link(self, media_type: str) -> None:
        message = _text_message(type=media_type)
        message.pop("text")
        message[media_type] = {"link": "https://cdn.example/label.jpg", "caption": "label"}

        envelope = decode_whatsapp_payload(_payload(message))

        assert envelope is not None
        assert envelope.media_url == "https://cdn.example/label.jpg"
        assert envelope.body == "label"

    def test_media_with_only_id_gets_media_scheme(self) -> None:
        message = _text_message(type="image")
        message.pop("text")
        message["image"] = {"id": "MEDIA123", "mime_type": "image/jpeg"}

        envelope = decode_whatsapp_payload(_payload(message))

        assert envelope is not None
        assert envelope.media_url == "whatsapp-media:MEDIA123"
        assert envelope.body == ""

    def test_unsupported_type_has_empty_body(self) -> None:
        message = _text_message(type="sticker")
        message.pop("text")
        message["sticker"] = {"id": "S1"}

        envelope = decode_whatsapp_payload(_payload(message))

        assert envelope is not None
        assert envelope.body == ""
        assert envelope.media_url is None


class TestUndecodable:
    """Payloads sem mensagem utilizável resultam em None."""

    def test_status_only_callback(self) -> None:
        payload = _payload(None)
        payload["entry"][0]["changes"][0]["value"]["statuses"] = [{"id": "wamid.X"}]
        assert decode_whatsapp_payload(payload) is None

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"entry": []},
            {"entry": "nope"},
            {"entry": [{"changes": []}]},
            {"entry": [{"changes": [{"value": "x"}]}]},
        ],
    )
    def test_malformed_structure(self, payload: dict[str, Any]) -> None:
        assert decode_whatsapp_payload(payload) is None

    @pytest.mark.parametrize("sender", [None, "", "   ", 15551234567])
    def test_missing_sender(self, sender: Any) -> None:
        assert decode_whatsapp_payload(_payload(_text_message(**{"from": sender}))) is None

    @pytest.mark.parametrize("timestamp", [None, "", "yesterday", True, 1.5])
    def test_invalid_timestamp(self, timestamp: Any) -> None:
        assert decode_whatsapp_payload(_payload(_text_message(timestamp=timestamp))) is None

    def test_non_dict_payload(self) -> None:
        assert decode_whatsapp_payload([1, 2, 3]) is None  # type: ignore[arg-type]
