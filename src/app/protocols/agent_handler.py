"""Protocolo de handler de papel (colaborador externo do dispatcher)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.domain.envelope import MessageEnvelope
    from app.domain.response import AgentResponse


class AgentHandlerProtocol(Protocol):
    """Gera a resposta de um papel para um envelope.

    Pode levantar exceção (o dispatcher converte em fallback). Não deve
    checar autorização: o dispatcher já fez isso. Invocado no máximo uma
    vez por envelope.
    """

    async def handle(self, envelope: MessageEnvelope) -> AgentResponse: ...
