"""Eventos da trilha de auditoria.

Append-only: eventos nunca são alterados nem removidos pelo núcleo.
Por envelope são gerados no máximo dois: recebimento e (resposta | erro).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from app.domain.roles import Role


class AuditAction(StrEnum):
    """Tipo de passo registrado."""

    RECEIVED = "received"
    RESPONDED = "responded"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class AuditEvent:
    """Registro imutável de um passo do pipeline para um envelope.

    Attributes:
        role: Papel para o qual a mensagem foi roteada
        action: Tipo de passo (received | responded | error)
        sender_id: Remetente ao qual o evento se refere
        details: Payload estruturado livre
        correlation_id: ID de correlação da requisição
        timestamp: Momento do evento (UTC)
    """

    role: Role
    action: AuditAction
    sender_id: str
    details: dict[str, Any] = field(default_factory=dict)
    correlation_id: str = ""
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def to_record(self) -> dict[str, Any]:
        """Representação serializável para os stores."""
        return {
            "role": self.role.value,
            "action": self.action.value,
            "sender_id": self.sender_id,
            "details": dict(self.details),
            "correlation_id": self.correlation_id,
            "timestamp": self.timestamp.isoformat(),
        }
