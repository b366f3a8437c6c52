"""Connectors por transporte — adapters de borda para APIs externas.

Estrutura:
- whatsapp/: WhatsApp Business API (webhook + envio)
- stripe/: callbacks de pagamento (assinatura)
- transport.py: verify/decode por TransportKind
"""

from .transport import TransportKind, WebhookVerifier, decode

__all__ = [
    "TransportKind",
    "WebhookVerifier",
    "decode",
]
