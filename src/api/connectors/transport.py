"""Verificação e decodificação por tipo de transporte.

verify e decode são puros: não fazem IO nem consultam estado. O secret de
cada transporte é fixado na construção do WebhookVerifier.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Any

from api.connectors.stripe.signature import verify_stripe_signature
from api.connectors.whatsapp.signature import verify_signature_header
from api.normalizers.whatsapp import decode_whatsapp_payload

if TYPE_CHECKING:
    from collections.abc import Mapping

    from app.domain.envelope import MessageEnvelope


class TransportKind(StrEnum):
    """Transportes inbound suportados."""

    WHATSAPP = "whatsapp"
    STRIPE = "stripe"


class WebhookVerifier:
    """Verifica assinaturas de webhook por transporte.

    Args:
        secrets: Secret por transporte (ausente ou vazio = sempre inválido)
    """

    def __init__(self, secrets: Mapping[TransportKind, str | None]) -> None:
        self._secrets = dict(secrets)

    def verify(
        self,
        transport_kind: TransportKind,
        signature_header: str | None,
        raw_body: bytes,
    ) -> bool:
        secret = self._secrets.get(transport_kind)
        if transport_kind == TransportKind.WHATSAPP:
            return verify_signature_header(signature_header, raw_body, secret).valid
        if transport_kind == TransportKind.STRIPE:
            return verify_stripe_signature(signature_header, raw_body, secret).valid
        return False


def decode(transport_kind: TransportKind, parsed_body: Any) -> MessageEnvelope | None:
    """Payload parseado → envelope; transportes sem mensagem retornam None."""
    if transport_kind == TransportKind.WHATSAPP:
        return decode_whatsapp_payload(parsed_body)
    return None
