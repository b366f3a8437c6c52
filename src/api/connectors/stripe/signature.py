"""Validação do header Stripe-Signature ("t=<ts>,v1=<hex>[,v1=<hex>...]").

A assinatura é HMAC-SHA256(secret, "<ts>." + raw_body). Qualquer v1 que
case aceita (rotação de secret). Sem janela de tolerância de timestamp:
a verificação depende só do header e do corpo.
"""

from __future__ import annotations

import hmac

from api.connectors.whatsapp.signature import SignatureResult, compute_hmac_sha256

SIGNATURE_HEADER = "Stripe-Signature"


def _parse_header(signature_header: str) -> tuple[str | None, list[str]]:
    timestamp: str | None = None
    signatures: list[str] = []
    for item in signature_header.split(","):
        key, sep, value = item.strip().partition("=")
        if not sep:
            continue
        if key == "t":
            timestamp = value.strip()
        elif key == "v1":
            signatures.append(value.strip().lower())
    return timestamp, signatures


def verify_stripe_signature(
    signature_header: str | None,
    raw_body: bytes,
    secret: str | None,
) -> SignatureResult:
    if not secret:
        return SignatureResult(valid=False, error="missing_secret")
    if not signature_header:
        return SignatureResult(valid=False, error="missing_signature")

    timestamp, signatures = _parse_header(signature_header)
    if not timestamp or not signatures:
        return SignatureResult(valid=False, error="malformed_signature")

    expected = compute_hmac_sha256(secret, f"{timestamp}.".encode() + raw_body)
    # Compara contra todas para não vazar posição por tempo
    matched = False
    for candidate in signatures:
        if hmac.compare_digest(candidate, expected):
            matched = True
    if not matched:
        return SignatureResult(valid=False, error="signature_mismatch")
    return SignatureResult(valid=True)
