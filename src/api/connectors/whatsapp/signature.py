"""Validação de assinatura HMAC do webhook Meta (X-Hub-Signature-256)."""

from __future__ import annotations

import hashlib
import hmac
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

SIGNATURE_HEADER = "X-Hub-Signature-256"
SIGNATURE_PREFIX = "sha256="


@dataclass(frozen=True, slots=True)
class SignatureResult:
    """Resultado da verificação (error sem dados sensíveis)."""

    valid: bool
    error: str | None = None


def get_header(headers: Mapping[str, str], name: str) -> str | None:
    """Lookup case-insensitive (dict comum ou Headers do Starlette)."""
    value = headers.get(name)
    if value is None:
        value = headers.get(name.lower())
    return value


def compute_hmac_sha256(secret: str, message: bytes) -> str:
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


def verify_signature_header(
    signature_header: str | None,
    raw_body: bytes,
    secret: str | None,
) -> SignatureResult:
    """Verifica "sha256=<hex>" contra HMAC-SHA256(secret, raw_body)."""
    if not secret:
        return SignatureResult(valid=False, error="missing_secret")
    if not signature_header:
        return SignatureResult(valid=False, error="missing_signature")
    if not signature_header.startswith(SIGNATURE_PREFIX):
        return SignatureResult(valid=False, error="malformed_signature")

    received = signature_header[len(SIGNATURE_PREFIX):].strip().lower()
    expected = compute_hmac_sha256(secret, raw_body)
    if not hmac.compare_digest(received, expected):
        return SignatureResult(valid=False, error="signature_mismatch")
    return SignatureResult(valid=True)


def verify_meta_signature(
    raw_body: bytes,
    headers: Mapping[str, str],
    secret: str | None,
) -> SignatureResult:
    """Verifica a assinatura do webhook a partir dos headers do request."""
    return verify_signature_header(get_header(headers, SIGNATURE_HEADER), raw_body, secret)
