"""Configuração do pytest para o agent-gateway."""

from __future__ import annotations

import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import pytest

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from app.domain.envelope import MessageEnvelope  # noqa: E402
from app.infra.stores import MemoryAccessDirectory, MemoryAuditStore  # noqa: E402
from config.settings import (  # noqa: E402
    DispatchSettings,
    PaymentSettings,
    WhatsAppSettings,
    get_base_settings,
    get_dispatch_settings,
    get_email_settings,
    get_firestore_settings,
    get_payment_settings,
    get_whatsapp_settings,
)
from tests.fakes.fake_senders import RecordingChannelSender, RecordingEmailSender  # noqa: E402

WHATSAPP_SECRET = "wa-secret"
STRIPE_SECRET = "whsec_test"
VERIFY_TOKEN = "verify-me"

ADMIN_PHONE = "+15550000001"
STAFF_PHONE = "+15550000002"
CUSTOMER_PHONE = "+15550000003"


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Any:
    getters = (
        get_base_settings,
        get_dispatch_settings,
        get_email_settings,
        get_firestore_settings,
        get_payment_settings,
        get_whatsapp_settings,
    )
    for getter in getters:
        getter.cache_clear()
    yield
    for getter in getters:
        getter.cache_clear()


@pytest.fixture
def audit_store() -> MemoryAuditStore:
    return MemoryAuditStore()


@pytest.fixture
def directory() -> MemoryAccessDirectory:
    return MemoryAccessDirectory()


@pytest.fixture
def channel_sender() -> RecordingChannelSender:
    return RecordingChannelSender()


@pytest.fixture
def email_sender() -> RecordingEmailSender:
    return RecordingEmailSender()


@pytest.fixture
def make_envelope() -> Any:
    def _make(
        body: str = "hello",
        sender_id: str = CUSTOMER_PHONE,
        media_url: str | None = None,
    ) -> MessageEnvelope:
        return MessageEnvelope(
            sender_id=sender_id,
            body=body,
            received_at=datetime(2026, 1, 15, 12, 0, tzinfo=UTC),
            media_url=media_url,
        )

    return _make


@pytest.fixture
def whatsapp_settings() -> WhatsAppSettings:
    return WhatsAppSettings(
        verify_token=VERIFY_TOKEN,
        webhook_secret=WHATSAPP_SECRET,
        webhook_processing_mode="inline",
    )


@pytest.fixture
def runtime(
    directory: MemoryAccessDirectory,
    audit_store: MemoryAuditStore,
    channel_sender: RecordingChannelSender,
    email_sender: RecordingEmailSender,
    whatsapp_settings: WhatsAppSettings,
) -> Any:
    from app.bootstrap.runtime import build_runtime

    return build_runtime(
        directory=directory,
        audit_sink=audit_store,
        channel_sender=channel_sender,
        email_sender=email_sender,
        whatsapp_settings=whatsapp_settings,
        payment_settings=PaymentSettings(webhook_secret=STRIPE_SECRET),
        dispatch_settings=DispatchSettings(handler_timeout_seconds=2.0),
    )
