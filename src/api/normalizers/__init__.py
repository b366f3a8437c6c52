"""Normalizers por transporte — payloads externos → modelos internos.

Estrutura:
- whatsapp/: webhook WhatsApp Business API → MessageEnvelope
- stripe/: callbacks de pagamento → PaymentEvent
"""

from .stripe import PaymentEvent, classify_payment_event
from .whatsapp import decode_whatsapp_payload

__all__ = [
    "PaymentEvent",
    "classify_payment_event",
    "decode_whatsapp_payload",
]
