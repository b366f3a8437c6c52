"""correlation_id por requisição, propagado até a trilha de auditoria.

Vem do header `x-correlation-id` quando o chamador envia um valor
aceitável; caso contrário é gerado. Guardado em ContextVar, então cada
task asyncio enxerga o seu.
"""

from __future__ import annotations

import re
import uuid
from contextvars import ContextVar, Token

MAX_CORRELATION_ID_LENGTH = 128

# Header externo: só caracteres seguros para logs e IDs de documento
_ACCEPTED = re.compile(r"^[A-Za-z0-9._:-]+$")

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def generate_correlation_id() -> str:
    return str(uuid.uuid4())


def sanitize_correlation_id(candidate: str | None) -> str | None:
    """Valor do header se aceitável, senão None."""
    if not candidate:
        return None
    value = candidate.strip()
    if not value or len(value) > MAX_CORRELATION_ID_LENGTH or not _ACCEPTED.match(value):
        return None
    return value


def get_correlation_id() -> str:
    """correlation_id do contexto atual ("" fora de uma requisição)."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation_id do contexto; valor ausente ou inválido gera um novo.

    Returns:
        Token para reset_correlation_id().
    """
    value = sanitize_correlation_id(correlation_id) or generate_correlation_id()
    return _correlation_id.set(value)


def reset_correlation_id(token: Token[str]) -> None:
    _correlation_id.reset(token)
