"""Testes das rotas do webhook WhatsApp (GET challenge e POST inbound)."""

from __future__ import annotations

import json
from typing import Any

import pytest
from fastapi.testclient import TestClient

from api.connectors.whatsapp.signature import SIGNATURE_HEADER, compute_hmac_sha256
from api.routes.whatsapp import webhook as webhook_module
from app.app import create_app
from app.infra.stores import MemoryAuditStore
from tests.fakes.fake_senders import RecordingChannelSender, RecordingEmailSender

WEBHOOK_PATH = "/webhook/whatsapp/"
WEBHOOK_SECRET = "wa-secret"
VERIFY_TOKEN = "verify-me"
CUSTOMER = "15550000003"


def _payload(text: str, sender: str = CUSTOMER) -> dict[str, Any]:
    return {
        "object": "whatsapp_business_account",
        "entry": [
            {
                "changes": [
                    {
                        "value": {
                            "messages": [
                                {
                                    "from": sender,
                                    "id": "wamid.ABC",
                                    "timestamp": "1768478400",
                                    "type": "text",
                                    "text": {"body": text},
                                }
                            ]
                        }
                    }
                ]
            }
        ],
    }


def _signed_post(client: TestClient, body: bytes, secret: str = WEBHOOK_SECRET) -> Any:
    return client.post(
        WEBHOOK_PATH,
        content=body,
        headers={
            SIGNATURE_HEADER: f"sha256={compute_hmac_sha256(secret, body)}",
            "content-type": "application/json",
            "x-correlation-id": "cid-webhook",
        },
    )


@pytest.fixture
def client(runtime: Any) -> TestClient:
    return TestClient(create_app(runtime))


class TestVerifyChallenge:
    """GET /webhook/whatsapp/."""

    def test_valid_token_echoes_challenge(self, client: TestClient) -> None:
        response = client.get(
            WEBHOOK_PATH,
            params={
                "hub.mode": "subscribe",
                "hub.verify_token": VERIFY_TOKEN,
                "hub.challenge": "12345",
            },
        )

        assert response.status_code == 200
        assert response.text == "12345"

    def test_wrong_token_is_forbidden(self, client: TestClient) -> None:
        response = client.get(
            WEBHOOK_PATH,
            params={
                "hub.mode": "subscribe",
                "hub.verify_token": "wrong",
                "hub.challenge": "12345",
            },
        )

        assert response.status_code == 403
        assert response.text == "Forbidden"


class TestReceive:
    """POST /webhook/whatsapp/ em modo inline."""

    def test_invalid_signature_audits_nothing(
        self, client: TestClient, audit_store: MemoryAuditStore
    ) -> None:
        body = json.dumps(_payload("hello")).encode()

        response = _signed_post(client, body, secret="other-secret")

        assert response.status_code == 401
        assert audit_store.get_records() == []

    def test_missing_signature(self, client: TestClient) -> None:
        response = client.post(WEBHOOK_PATH, content=b"{}")
        assert response.status_code == 401

    def test_invalid_json(self, client: TestClient, audit_store: MemoryAuditStore) -> None:
        response = _signed_post(client, b"{not-json")

        assert response.status_code == 400
        assert audit_store.get_records() == []

    def test_payload_without_message(
        self, client: TestClient, audit_store: MemoryAuditStore
    ) -> None:
        body = json.dumps({"entry": [{"changes": [{"value": {"statuses": []}}]}]}).encode()

        response = _signed_post(client, body)

        assert response.status_code == 400
        assert audit_store.get_records() == []

    def test_tampered_body_is_rejected_before_decode(
        self,
        client: TestClient,
        audit_store: MemoryAuditStore,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        decode_calls: list[Any] = []

        def _spy_decode(*args: Any) -> None:
            decode_calls.append(args)

        monkeypatch.setattr(webhook_module, "decode", _spy_decode)
        original = json.dumps(_payload("hello")).encode()
        tampered = json.dumps(_payload("transfer everything")).encode()

        response = client.post(
            WEBHOOK_PATH,
            content=tampered,
            headers={
                SIGNATURE_HEADER: f"sha256={compute_hmac_sha256(WEBHOOK_SECRET, original)}",
                "content-type": "application/json",
            },
        )

        assert response.status_code == 401
        assert decode_calls == []
        assert audit_store.get_records() == []

    def test_customer_message_is_dispatched_inline(
        self,
        client: TestClient,
        audit_store: MemoryAuditStore,
        email_sender: RecordingEmailSender,
        channel_sender: RecordingChannelSender,
    ) -> None:
        body = json.dumps(_payload("I have a problem with my order")).encode()

        response = _signed_post(client, body)

        assert response.status_code == 200
        assert response.json() == {"status": "received", "correlation_id": "cid-webhook"}

        records = audit_store.get_records()
        assert [r["action"] for r in records] == ["received", "responded"]
        assert {r["role"] for r in records} == {"customer"}
        assert {r["correlation_id"] for r in records} == {"cid-webhook"}
        assert len(email_sender.sent) == 1
        assert email_sender.sent[0][0] == CUSTOMER
        assert channel_sender.sent == []

    def test_media_only_message_is_accepted(
        self, client: TestClient, audit_store: MemoryAuditStore
    ) -> None:
        payload = _payload("")
        message = payload["entry"][0]["changes"][0]["value"]["messages"][0]
        message["type"] = "image"
        message.pop("text")
        message["image"] = {"id": "media-1", "mime_type": "image/jpeg"}

        response = _signed_post(client, json.dumps(payload).encode())

        assert response.status_code == 200
        received = audit_store.get_records()[0]
        assert received["details"]["media_url"] == "whatsapp-media:media-1"


def test_runtime_missing_returns_503() -> None:
    client = TestClient(create_app(None))
    response = client.post(WEBHOOK_PATH, content=b"{}")

    assert response.status_code == 503
    assert response.json() == {"detail": "runtime_not_ready"}
