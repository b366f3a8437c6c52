"""Registro de métricas via structured logging.

As métricas são registradas como logs estruturados e podem ser agregadas
posteriormente (BigQuery, Cloud Logging, etc.).

Métricas suportadas:
- Latência: tempo de execução por componente/operação
- Dispatch: desfecho de cada envelope por papel
- Delivery: resultado de cada ação entregue

Uso:
    from app.observability.metrics import record_latency, record_dispatch_outcome

    start = time.perf_counter()
    # ... operação ...
    latency_ms = (time.perf_counter() - start) * 1000
    record_latency("dispatcher", "handle", latency_ms, correlation_id)
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "dispatcher", "delivery")
        operation: Nome da operação (ex: "handle", "send_text")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": correlation_id,
        },
    )


def record_dispatch_outcome(
    role: str,
    outcome: str,
    correlation_id: str | None = None,
) -> None:
    """Registra desfecho do despacho (responded | rejected | fallback).

    Args:
        role: Papel do envelope
        outcome: Estado terminal da máquina de despacho
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_dispatch_outcome",
        extra={
            "metric_type": "dispatch_outcome",
            "component": "dispatcher",
            "role": role,
            "outcome": outcome,
            "correlation_id": correlation_id,
        },
    )


def record_delivery(
    action: str,
    delivered: bool,
    correlation_id: str | None = None,
) -> None:
    """Registra resultado de entrega de uma ação.

    Args:
        action: Tag da ação (whatsapp | email)
        delivered: True se o canal aceitou a mensagem
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_delivery",
        extra={
            "metric_type": "delivery",
            "component": "delivery",
            "action": action,
            "delivered": delivered,
            "correlation_id": correlation_id,
        },
    )
