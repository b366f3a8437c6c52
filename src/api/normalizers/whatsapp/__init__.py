"""Normalizer WhatsApp — payload do webhook → MessageEnvelope.

Subtipos com texto: text (text.body) e image/video/document (caption).
Demais subtipos geram envelope com corpo vazio e sem mídia.
"""

from .extractor import MEDIA_ID_SCHEME, decode_whatsapp_payload

__all__ = [
    "MEDIA_ID_SCHEME",
    "decode_whatsapp_payload",
]
