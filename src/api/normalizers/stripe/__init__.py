"""Normalizer de callbacks de pagamento (Stripe)."""

from .events import HANDLED_EVENT_TYPES, PaymentEvent, classify_payment_event

__all__ = [
    "HANDLED_EVENT_TYPES",
    "PaymentEvent",
    "classify_payment_event",
]
