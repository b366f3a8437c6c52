"""Conector WhatsApp - adapter de borda para Meta Graph API.

Único ponto de IO para o canal WhatsApp:
- Webhook (challenge, assinatura, parsing)
- HTTP client para Graph API (envio de texto)
- Erros do Graph API
"""

from .http_client import WhatsAppHttpClient, build_text_payload
from .meta_errors import WhatsAppApiError, is_permanent_error, parse_meta_error
from .signature import SignatureResult, verify_meta_signature

__all__ = [
    "SignatureResult",
    "WhatsAppApiError",
    "WhatsAppHttpClient",
    "build_text_payload",
    "is_permanent_error",
    "parse_meta_error",
    "verify_meta_signature",
]
