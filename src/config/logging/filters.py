"""Filters de logging para injeção de contexto e mascaramento.

Campos injetados:
- correlation_id: ID de rastreamento da requisição
- service: Nome do serviço (ex: agent_gateway)

Campos mascarados:
- sender_id / to: apenas os 4 últimos dígitos ficam visíveis
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

# Atributos de LogRecord que carregam identificador de remetente
MASKED_FIELDS = ("sender_id", "to")


def mask_sender_id(value: str) -> str:
    """Mascara identificador de remetente ("+15551234567" -> "***4567")."""
    if len(value) <= 4:
        return "***"
    return f"***{value[-4:]}"


class CorrelationIdFilter(logging.Filter):
    """Injeta correlation_id e service em cada record de log.

    Se correlation_id já foi passado via `extra`, preserva o valor.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name
        return True


class SenderMaskingFilter(logging.Filter):
    """Mascara identificadores de remetente passados via `extra`.

    Nunca filtra records; apenas reescreve os campos de MASKED_FIELDS.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        for field_name in MASKED_FIELDS:
            value = getattr(record, field_name, None)
            if isinstance(value, str) and value:
                setattr(record, field_name, mask_sender_id(value))
        return True
