"""Testes de verificação de assinatura por transporte (WhatsApp e Stripe)."""

from __future__ import annotations

import hashlib
import hmac

import pytest

from api.connectors.stripe.signature import verify_stripe_signature
from api.connectors.transport import TransportKind, WebhookVerifier, decode
from api.connectors.whatsapp.signature import (
    get_header,
    verify_meta_signature,
    verify_signature_header,
)

BODY = b'{"object":"whatsapp_business_account"}'


def _meta_signature(secret: str, body: bytes = BODY) -> str:
    return "sha256=" + hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()


def _stripe_signature(secret: str, timestamp: str = "1700000000", body: bytes = BODY) -> str:
    signed = f"{timestamp}.".encode() + body
    digest = hmac.new(secret.encode(), signed, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={digest}"


class TestMetaSignature:
    """Header X-Hub-Signature-256 sobre o corpo bruto."""

    def test_valid_signature(self) -> None:
        result = verify_signature_header(_meta_signature("s3cret"), BODY, "s3cret")
        assert result.valid is True
        assert result.error is None

    def test_uppercase_hex_is_accepted(self) -> None:
        header = _meta_signature("s3cret")
        prefix, digest = header.split("=", 1)
        result = verify_signature_header(f"{prefix}={digest.upper()}", BODY, "s3cret")
        assert result.valid is True

    def test_body_mutation_is_rejected(self) -> None:
        result = verify_signature_header(_meta_signature("s3cret"), BODY + b" ", "s3cret")
        assert result.valid is False
        assert result.error == "signature_mismatch"

    @pytest.mark.parametrize(
        ("header", "secret", "error"),
        [
            (None, "s3cret", "missing_signature"),
            ("", "s3cret", "missing_signature"),
            ("md5=abc", "s3cret", "malformed_signature"),
            ("sha256=abc", "", "missing_secret"),
            ("sha256=abc", None, "missing_secret"),
        ],
    )
    def test_invalid_inputs(self, header: str | None, secret: str | None, error: str) -> None:
        result = verify_signature_header(header, BODY, secret)
        assert result.valid is False
        assert result.error == error

    def test_header_lookup_is_case_insensitive(self) -> None:
        headers = {"x-hub-signature-256": _meta_signature("s3cret")}
        assert get_header(headers, "X-Hub-Signature-256") == headers["x-hub-signature-256"]
        assert verify_meta_signature(BODY, headers, "s3cret").valid is True


class TestStripeSignature:
    """Header Stripe-Signature (t=..., v1=...)."""

    def test_valid_signature(self) -> None:
        assert verify_stripe_signature(_stripe_signature("whsec"), BODY, "whsec").valid

    def test_any_matching_v1_is_accepted(self) -> None:
        header = _stripe_signature("whsec") + ",v1=" + "0" * 64
        rotated = "t=1700000000,v1=" + "0" * 64 + "," + header.split(",")[1]
        assert verify_stripe_signature(header, BODY, "whsec").valid
        assert verify_stripe_signature(rotated, BODY, "whsec").valid

    def test_timestamp_is_part_of_the_signature(self) -> None:
        header = _stripe_signature("whsec", timestamp="1700000000")
        tampered = header.replace("t=1700000000", "t=1700000001")
        result = verify_stripe_signature(tampered, BODY, "whsec")
        assert result.valid is False
        assert result.error == "signature_mismatch"

    @pytest.mark.parametrize(
        ("header", "error"),
        [
            (None, "missing_signature"),
            ("v1=abc", "malformed_signature"),
            ("t=1700000000", "malformed_signature"),
            ("garbage", "malformed_signature"),
        ],
    )
    def test_invalid_headers(self, header: str | None, error: str) -> None:
        result = verify_stripe_signature(header, BODY, "whsec")
        assert result.valid is False
        assert result.error == error

    def test_missing_secret(self) -> None:
        result = verify_stripe_signature(_stripe_signature("whsec"), BODY, "")
        assert result.error == "missing_secret"


class TestWebhookVerifier:
    """WebhookVerifier despacha pelo tipo de transporte."""

    def test_each_transport_uses_its_own_secret(self) -> None:
        verifier = WebhookVerifier(
            {TransportKind.WHATSAPP: "wa", TransportKind.STRIPE: "st"}
        )
        assert verifier.verify(TransportKind.WHATSAPP, _meta_signature("wa"), BODY)
        assert verifier.verify(TransportKind.STRIPE, _stripe_signature("st"), BODY)
        assert not verifier.verify(TransportKind.WHATSAPP, _meta_signature("st"), BODY)
        assert not verifier.verify(TransportKind.STRIPE, _stripe_signature("wa"), BODY)

    def test_missing_secret_always_fails(self) -> None:
        verifier = WebhookVerifier({TransportKind.WHATSAPP: ""})
        assert not verifier.verify(TransportKind.WHATSAPP, _meta_signature(""), BODY)
        assert not verifier.verify(TransportKind.STRIPE, _stripe_signature(""), BODY)

    def test_verify_is_deterministic(self) -> None:
        verifier = WebhookVerifier({TransportKind.WHATSAPP: "wa"})
        header = _meta_signature("wa")
        results = {verifier.verify(TransportKind.WHATSAPP, header, BODY) for _ in range(5)}
        assert results == {True}


def test_decode_stripe_has_no_envelope() -> None:
    assert decode(TransportKind.STRIPE, {"type": "invoice.paid"}) is None
