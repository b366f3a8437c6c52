"""Settings do provedor de pagamentos (Stripe).

Apenas o necessário para verificar callbacks; conciliação fica fora.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class PaymentSettings:
    """Configurações de webhooks de pagamento.

    Attributes:
        webhook_secret: Secret de assinatura (Stripe-Signature)
    """

    webhook_secret: str = ""

    def validate(self) -> list[str]:
        errors: list[str] = []
        if not self.webhook_secret:
            errors.append("STRIPE_WEBHOOK_SECRET não configurado")
        return errors


def _load_from_env() -> PaymentSettings:
    return PaymentSettings(webhook_secret=os.getenv("STRIPE_WEBHOOK_SECRET", ""))


@lru_cache(maxsize=1)
def get_payment_settings() -> PaymentSettings:
    """Retorna instância cacheada de PaymentSettings."""
    return _load_from_env()
