"""Runtime helpers para processamento do webhook WhatsApp.

Pipeline por envelope: resolver papel → dispatcher → delivery executor.
Roda depois do 200 (modo async) ou antes dele (modo inline); nos dois
casos o status HTTP só indica "recebido".
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from api.routes.whatsapp.webhook_runtime_tasks import (
    drain_processing_tasks,
    schedule_processing_task,
)
from app.observability import reset_correlation_id, set_correlation_id
from utils.errors import FirestoreUnavailableError, RedisConnectionError

if TYPE_CHECKING:
    from app.bootstrap.runtime import GatewayRuntime
    from app.domain.envelope import MessageEnvelope
    from app.services.dispatcher import DispatchResult

logger = logging.getLogger(__name__)


async def process_inbound_envelope(
    *,
    envelope: MessageEnvelope,
    correlation_id: str,
    runtime: GatewayRuntime,
) -> DispatchResult:
    """Resolve o papel, despacha e executa as ações da resposta."""
    token = set_correlation_id(correlation_id)
    try:
        role = await runtime.resolver.resolve(envelope.sender_id)
        result = await runtime.dispatcher.run(envelope, role)
        report = await runtime.delivery.execute(result.response, envelope.sender_id)
        logger.info(
            "webhook_processing_completed",
            extra={
                "channel": "whatsapp",
                "correlation_id": correlation_id,
                "role": role.value,
                "final_state": result.final_state.value,
                "delivered": report.delivered,
                "failed": report.failed,
            },
        )
        return result
    finally:
        reset_correlation_id(token)


async def process_inbound_envelope_safe(
    *,
    envelope: MessageEnvelope,
    correlation_id: str,
    runtime: GatewayRuntime,
) -> None:
    """Executa o pipeline com classificação explícita de erros."""
    try:
        await process_inbound_envelope(
            envelope=envelope,
            correlation_id=correlation_id,
            runtime=runtime,
        )
    except Exception as exc:
        if _is_infrastructure_error(exc):
            logger.error(
                "webhook_processing_infra_failed",
                extra={
                    "channel": "whatsapp",
                    "correlation_id": correlation_id,
                    "error_type": type(exc).__name__,
                },
            )
            raise
        logger.exception(
            "webhook_processing_failed",
            extra={
                "channel": "whatsapp",
                "correlation_id": correlation_id,
            },
        )
        raise


async def dispatch_inbound_processing(
    *,
    envelope: MessageEnvelope,
    correlation_id: str,
    runtime: GatewayRuntime,
) -> None:
    """Despacha processamento inline ou async conforme configuração."""
    processing_mode = (runtime.whatsapp_settings.webhook_processing_mode or "async").lower()
    if processing_mode == "inline":
        await process_inbound_envelope_safe(
            envelope=envelope,
            correlation_id=correlation_id,
            runtime=runtime,
        )
        return
    schedule_processing_task(
        correlation_id=correlation_id,
        coroutine=process_inbound_envelope_safe(
            envelope=envelope,
            correlation_id=correlation_id,
            runtime=runtime,
        ),
    )


async def drain_background_tasks(timeout_seconds: float = 30.0) -> None:
    """Aguarda tasks async pendentes durante shutdown do processo."""
    await drain_processing_tasks(timeout_seconds=timeout_seconds)


def _is_infrastructure_error(exc: Exception) -> bool:
    if isinstance(exc, (RedisConnectionError, FirestoreUnavailableError)):
        return True
    module_name = type(exc).__module__
    return module_name.startswith(("redis.", "google.api_core.", "httpx"))
