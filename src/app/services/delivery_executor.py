"""Delivery Executor — executa as ações pedidas na resposta do handler.

Cada ação é independente: falha em uma não impede as seguintes e nunca
volta ao dispatcher. A trilha de auditoria já registrou a resposta antes
da entrega.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from app.domain.response import ActionTag
from app.observability import get_correlation_id, record_delivery, record_latency

if TYPE_CHECKING:
    from app.domain.response import AgentResponse
    from app.protocols.outbound_sender import ChannelSenderProtocol, EmailSenderProtocol

logger = logging.getLogger(__name__)

NOTIFICATION_SUBJECT = "Agent notification"


@dataclass(slots=True)
class DeliveryReport:
    """Resumo da execução das ações (para logs e testes)."""

    delivered: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    ignored: list[str] = field(default_factory=list)


class DeliveryExecutor:
    """Traduz ActionTags em envios pelos senders configurados."""

    def __init__(
        self,
        *,
        channel_sender: ChannelSenderProtocol,
        email_sender: EmailSenderProtocol,
        notification_subject: str = NOTIFICATION_SUBJECT,
    ) -> None:
        self._channel_sender = channel_sender
        self._email_sender = email_sender
        self._subject = notification_subject

    async def execute(self, response: AgentResponse, sender_id: str) -> DeliveryReport:
        """Executa as ações da resposta na ordem em que foram pedidas."""
        report = DeliveryReport()
        correlation_id = get_correlation_id()
        for action in response.actions:
            tag = str(action)
            started = time.perf_counter()
            try:
                if action == ActionTag.NOTIFY_CHANNEL:
                    await self._channel_sender.send_text(sender_id, response.reply)
                elif action == ActionTag.NOTIFY_EMAIL:
                    await self._email_sender.send_notification(
                        sender_id, self._subject, response.reply
                    )
                else:
                    logger.warning("delivery_action_ignored", extra={"action": tag})
                    report.ignored.append(tag)
                    continue
            except Exception as exc:
                logger.error(
                    "delivery_action_failed",
                    extra={"action": tag, "error_type": type(exc).__name__},
                )
                report.failed.append(tag)
                record_delivery(tag, False, correlation_id)
                continue

            report.delivered.append(tag)
            record_delivery(tag, True, correlation_id)
            record_latency(
                "delivery",
                tag,
                (time.perf_counter() - started) * 1000,
                correlation_id,
            )
        return report
