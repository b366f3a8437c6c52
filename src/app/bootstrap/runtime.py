"""Composition root do gateway — conecta implementações aos protocolos.

O runtime é montado uma vez no startup (lifespan) e guardado em
`app.state.runtime`. Testes montam o seu com backends em memória e
senders falsos via `build_runtime(...)`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from api.connectors.transport import TransportKind, WebhookVerifier
from app.bootstrap.clients import create_async_redis_client, create_firestore_client
from app.handlers import build_default_registry
from app.infra.delivery import (
    LoggingChannelSender,
    LoggingEmailSender,
    ResendEmailSender,
    WhatsAppTextSender,
)
from app.infra.stores import (
    FirestoreAccessDirectory,
    FirestoreAuditStore,
    MemoryAccessDirectory,
    MemoryAuditStore,
    RedisAccessDirectory,
)
from app.services.access_management import AccessManagementService
from app.services.delivery_executor import DeliveryExecutor
from app.services.dispatcher import Dispatcher
from app.services.role_resolver import RoleResolver
from config.settings import (
    get_dispatch_settings,
    get_email_settings,
    get_firestore_settings,
    get_payment_settings,
    get_whatsapp_settings,
)

if TYPE_CHECKING:
    from app.handlers.registry import HandlerRegistry
    from app.protocols import (
        AccessDirectoryProtocol,
        AuditSinkProtocol,
        ChannelSenderProtocol,
        EmailSenderProtocol,
    )
    from config.settings import (
        DispatchSettings,
        EmailSettings,
        FirestoreSettings,
        PaymentSettings,
        WhatsAppSettings,
    )

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class GatewayRuntime:
    """Dependências do processo, compartilhadas pelas rotas.

    Attributes:
        directory: Diretório de acesso
        audit_sink: Sink da trilha de auditoria
        resolver: Resolvedor de papel (caminho do canal)
        dispatcher: Dispatcher de envelopes
        delivery: Executor das ações da resposta
        verifier: Verificador de assinatura por transporte
        access_management: Gestão de concessões
        whatsapp_settings: Settings do canal (challenge e modo de processamento)
        redis_client: Cliente Redis, se algum backend o usa
        firestore_client: Cliente Firestore, se algum backend o usa
    """

    directory: AccessDirectoryProtocol
    audit_sink: AuditSinkProtocol
    resolver: RoleResolver
    dispatcher: Dispatcher
    delivery: DeliveryExecutor
    verifier: WebhookVerifier
    access_management: AccessManagementService
    whatsapp_settings: WhatsAppSettings
    redis_client: Any | None = None
    firestore_client: Any | None = None


def build_runtime(
    *,
    directory: AccessDirectoryProtocol | None = None,
    audit_sink: AuditSinkProtocol | None = None,
    channel_sender: ChannelSenderProtocol | None = None,
    email_sender: EmailSenderProtocol | None = None,
    registry: HandlerRegistry | None = None,
    whatsapp_settings: WhatsAppSettings | None = None,
    payment_settings: PaymentSettings | None = None,
    dispatch_settings: DispatchSettings | None = None,
) -> GatewayRuntime:
    """Monta o runtime; componentes omitidos vêm das settings do ambiente."""
    whatsapp_settings = whatsapp_settings or get_whatsapp_settings()
    payment_settings = payment_settings or get_payment_settings()
    dispatch_settings = dispatch_settings or get_dispatch_settings()

    redis_client = None
    firestore_client = None
    if directory is None or audit_sink is None:
        redis_client, firestore_client = _create_backend_clients(
            dispatch_settings,
            need_directory=directory is None,
            need_audit=audit_sink is None,
        )
    if directory is None:
        directory = _create_access_directory(
            dispatch_settings, redis_client, firestore_client, get_firestore_settings()
        )
    if audit_sink is None:
        audit_sink = _create_audit_sink(
            dispatch_settings, firestore_client, get_firestore_settings()
        )

    access_management = AccessManagementService(directory)
    dispatcher = Dispatcher(
        directory=directory,
        audit_sink=audit_sink,
        registry=registry or build_default_registry(access_management),
        handler_timeout_seconds=dispatch_settings.handler_timeout_seconds,
    )
    delivery = DeliveryExecutor(
        channel_sender=channel_sender or _create_channel_sender(whatsapp_settings),
        email_sender=email_sender or _create_email_sender(get_email_settings()),
    )
    verifier = WebhookVerifier(
        {
            TransportKind.WHATSAPP: whatsapp_settings.webhook_secret,
            TransportKind.STRIPE: payment_settings.webhook_secret,
        }
    )

    logger.info(
        "runtime_built",
        extra={
            "component": "bootstrap",
            "access_directory": type(directory).__name__,
            "audit_sink": type(audit_sink).__name__,
        },
    )
    return GatewayRuntime(
        directory=directory,
        audit_sink=audit_sink,
        resolver=RoleResolver(directory),
        dispatcher=dispatcher,
        delivery=delivery,
        verifier=verifier,
        access_management=access_management,
        whatsapp_settings=whatsapp_settings,
        redis_client=redis_client,
        firestore_client=firestore_client,
    )


def _create_backend_clients(
    settings: DispatchSettings,
    *,
    need_directory: bool,
    need_audit: bool,
) -> tuple[Any | None, Any | None]:
    backends = set()
    if need_directory:
        backends.add(settings.access_directory_backend)
    if need_audit:
        backends.add(settings.audit_sink_backend)

    redis_client = create_async_redis_client() if "redis" in backends else None
    firestore_client = create_firestore_client() if "firestore" in backends else None
    return redis_client, firestore_client


def _create_access_directory(
    settings: DispatchSettings,
    redis_client: Any | None,
    firestore_client: Any | None,
    firestore_settings: FirestoreSettings,
) -> AccessDirectoryProtocol:
    backend = settings.access_directory_backend
    if backend == "firestore":
        return FirestoreAccessDirectory(
            firestore_client, collection_name=firestore_settings.collection_access
        )
    if backend == "redis":
        return RedisAccessDirectory(redis_client)
    return MemoryAccessDirectory()


def _create_audit_sink(
    settings: DispatchSettings,
    firestore_client: Any | None,
    firestore_settings: FirestoreSettings,
) -> AuditSinkProtocol:
    if settings.audit_sink_backend == "firestore":
        return FirestoreAuditStore(
            firestore_client, collection_name=firestore_settings.collection_audit
        )
    return MemoryAuditStore()


def _create_channel_sender(settings: WhatsAppSettings) -> ChannelSenderProtocol:
    if settings.can_send:
        return WhatsAppTextSender(settings)
    logger.warning(
        "channel_sender_not_configured",
        extra={"component": "bootstrap", "fallback": "logging"},
    )
    return LoggingChannelSender()


def _create_email_sender(settings: EmailSettings) -> EmailSenderProtocol:
    if settings.can_send:
        return ResendEmailSender(settings)
    return LoggingEmailSender()
