"""Agregador de settings do gateway.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    AccessDirectoryBackend,
    AuditSinkBackend,
    BaseSettings,
    DispatchSettings,
    Environment,
    get_base_settings,
    get_dispatch_settings,
)

# Email
from config.settings.email import (
    EmailSettings,
    get_email_settings,
)

# Infrastructure settings
from config.settings.infra import (
    FirestoreSettings,
    get_firestore_settings,
)

# Payments
from config.settings.payments import (
    PaymentSettings,
    get_payment_settings,
)

# Channel-specific settings
from config.settings.whatsapp import (
    GRAPH_API_BASE_URL,
    GRAPH_API_VERSION,
    WhatsAppSettings,
    get_whatsapp_settings,
)

__all__ = [
    # Constants
    "GRAPH_API_BASE_URL",
    "GRAPH_API_VERSION",
    "AccessDirectoryBackend",
    "AuditSinkBackend",
    # Base
    "BaseSettings",
    "DispatchSettings",
    "EmailSettings",
    "Environment",
    # Infrastructure
    "FirestoreSettings",
    "PaymentSettings",
    # Channels
    "WhatsAppSettings",
    "get_base_settings",
    "get_dispatch_settings",
    "get_email_settings",
    "get_firestore_settings",
    "get_payment_settings",
    "get_whatsapp_settings",
]
