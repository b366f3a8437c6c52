"""Conector de callbacks de pagamento (Stripe): verificação de assinatura."""

from .signature import SIGNATURE_HEADER, verify_stripe_signature

__all__ = [
    "SIGNATURE_HEADER",
    "verify_stripe_signature",
]
