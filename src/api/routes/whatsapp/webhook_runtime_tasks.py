"""Controle das tasks de processamento pós-ack do webhook.

Cada mensagem aceita vira uma task asyncio; o semáforo limita quantas
rodam ao mesmo tempo e o conjunto de tasks ativas permite drenar no
shutdown. Não há fila durável: uma queda do processo perde o que ainda
estiver pendente.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import weakref
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Awaitable

logger = logging.getLogger(__name__)

MAX_CONCURRENT_TASKS = 100

_semaphores: weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, asyncio.Semaphore] = (
    weakref.WeakKeyDictionary()
)
_active_tasks: set[asyncio.Task[Any]] = set()


def _loop_semaphore() -> asyncio.Semaphore:
    # Um semáforo por event loop (testes criam loops novos)
    loop = asyncio.get_running_loop()
    semaphore = _semaphores.get(loop)
    if semaphore is None:
        semaphore = asyncio.Semaphore(MAX_CONCURRENT_TASKS)
        _semaphores[loop] = semaphore
    return semaphore


def active_task_count() -> int:
    """Quantidade de tasks ainda não concluídas."""
    return len(_active_tasks)


def schedule_processing_task(
    *,
    correlation_id: str,
    coroutine: Awaitable[None],
) -> int:
    """Agenda task assíncrona com limite de concorrência.

    Returns:
        Número de tasks ativas após o agendamento.
    """
    task = asyncio.create_task(_run_with_limit(coroutine, _loop_semaphore()))
    _active_tasks.add(task)
    task.add_done_callback(_on_processing_task_done)
    logger.info(
        "webhook_processing_scheduled",
        extra={
            "channel": "whatsapp",
            "correlation_id": correlation_id,
            "mode": "async",
            "active_tasks": len(_active_tasks),
        },
    )
    return len(_active_tasks)


async def _run_with_limit(coroutine: Awaitable[None], semaphore: asyncio.Semaphore) -> None:
    async with semaphore:
        await coroutine


def _on_processing_task_done(task: asyncio.Task[Any]) -> None:
    _active_tasks.discard(task)
    with contextlib.suppress(asyncio.CancelledError):
        exc = task.exception()
        if exc is not None:
            logger.error(
                "webhook_processing_task_failed",
                extra={
                    "channel": "whatsapp",
                    "error_type": type(exc).__name__,
                    "active_tasks": len(_active_tasks),
                },
            )


async def drain_processing_tasks(timeout_seconds: float = 30.0) -> int:
    """Aguarda tasks pendentes no shutdown; cancela as que excederem o prazo.

    Returns:
        Número de tasks canceladas.
    """
    if not _active_tasks:
        return 0

    pending_now = list(_active_tasks)
    logger.info(
        "webhook_processing_shutdown_wait",
        extra={
            "channel": "whatsapp",
            "pending_tasks": len(pending_now),
            "timeout_seconds": timeout_seconds,
        },
    )
    _, pending = await asyncio.wait(pending_now, timeout=timeout_seconds)
    if not pending:
        return 0

    for task in pending:
        task.cancel()
    await asyncio.gather(*pending, return_exceptions=True)
    logger.warning(
        "webhook_processing_shutdown_cancelled",
        extra={"channel": "whatsapp", "cancelled_tasks": len(pending)},
    )
    return len(pending)
