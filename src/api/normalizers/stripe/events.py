"""Classificação de eventos de callback de pagamento (Stripe).

Apenas identifica o tipo; conciliação e efeitos de negócio ficam fora
do gateway.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

HANDLED_EVENT_TYPES = frozenset({
    "checkout.session.completed",
    "invoice.paid",
    "customer.subscription.updated",
    "customer.subscription.deleted",
})


@dataclass(frozen=True, slots=True)
class PaymentEvent:
    """Evento de pagamento classificado.

    Attributes:
        event_type: Tipo informado pelo provedor ("" se ausente)
        event_id: ID do evento no provedor
        object_id: ID do objeto afetado (sessão, fatura, assinatura)
        handled: True se o tipo é conhecido pelo gateway
    """

    event_type: str
    event_id: str | None
    object_id: str | None
    handled: bool


def classify_payment_event(payload: dict[str, Any]) -> PaymentEvent:
    event_type = payload.get("type")
    event_type = event_type if isinstance(event_type, str) else ""
    data = payload.get("data")
    obj = data.get("object") if isinstance(data, dict) else None
    object_id = obj.get("id") if isinstance(obj, dict) else None
    event_id = payload.get("id")
    return PaymentEvent(
        event_type=event_type,
        event_id=event_id if isinstance(event_id, str) else None,
        object_id=object_id if isinstance(object_id, str) else None,
        handled=event_type in HANDLED_EVENT_TYPES,
    )
