"""Dispatcher — autorização, invocação do handler e trilha de auditoria.

Ciclo por envelope (fsm.DispatchState):
    RECEIVED → AUTHORIZING → AUTHORIZED → PROCESSING → RESPONDED
                           → UNAUTHORIZED → REJECTED
                                          PROCESSING → ERRORED → FALLBACK

Por envelope são gravados exatamente dois eventos de auditoria: o de
recebimento e um de desfecho (responded | error). Falhas do handler e da
auditoria nunca chegam ao chamador.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from app.domain.audit import AuditAction, AuditEvent
from app.domain.response import FALLBACK_RESPONSE, UNAUTHORIZED_RESPONSE, AgentResponse
from app.observability import get_correlation_id, record_dispatch_outcome, record_latency
from config.logging import log_fallback
from config.settings.base.dispatch import DEFAULT_HANDLER_TIMEOUT_SECONDS
from fsm import DispatchState, StateTransition, create_dispatch_fsm
from utils.errors import HandlerFailureError, HandlerTimeoutError

if TYPE_CHECKING:
    from app.domain.envelope import MessageEnvelope
    from app.domain.roles import Role
    from app.handlers.registry import HandlerRegistry
    from app.protocols.access_directory import AccessDirectoryProtocol
    from app.protocols.audit_sink import AuditSinkProtocol
    from fsm import DispatchStateMachine

logger = logging.getLogger(__name__)

REASON_UNAUTHORIZED = "unauthorized"
REASON_HANDLER_FAILURE = "handler_failure"
REASON_HANDLER_TIMEOUT = "handler_timeout"


@dataclass(frozen=True, slots=True)
class DispatchResult:
    """Resultado de um despacho.

    Attributes:
        response: Resposta entregue ao chamador
        final_state: Estado terminal atingido
        history: Transições percorridas
    """

    response: AgentResponse
    final_state: DispatchState
    history: tuple[StateTransition, ...] = ()

    @property
    def rejected(self) -> bool:
        return self.final_state == DispatchState.REJECTED

    @property
    def fell_back(self) -> bool:
        return self.final_state == DispatchState.FALLBACK


class Dispatcher:
    """Despacha envelopes com papel atribuído para o handler do papel.

    Args:
        directory: Diretório de acesso (consultado só para papéis restritos)
        audit_sink: Sink da trilha de auditoria
        registry: Registro papel → handler
        handler_timeout_seconds: Prazo máximo de um handler
    """

    def __init__(
        self,
        *,
        directory: AccessDirectoryProtocol,
        audit_sink: AuditSinkProtocol,
        registry: HandlerRegistry,
        handler_timeout_seconds: float = DEFAULT_HANDLER_TIMEOUT_SECONDS,
    ) -> None:
        self._directory = directory
        self._audit_sink = audit_sink
        self._registry = registry
        self._handler_timeout = handler_timeout_seconds

    async def dispatch(self, envelope: MessageEnvelope, role: Role) -> AgentResponse:
        """Despacha e retorna apenas a resposta."""
        result = await self.run(envelope, role)
        return result.response

    async def run(self, envelope: MessageEnvelope, role: Role) -> DispatchResult:
        """Despacha e retorna resposta, estado terminal e histórico.

        Raises:
            RoleAlreadyAssignedError: Se o envelope já tem outro papel.
        """
        envelope.assign_role(role)
        correlation_id = get_correlation_id()
        started = time.perf_counter()
        fsm = create_dispatch_fsm(dispatch_id=correlation_id)

        await self._append_audit(
            role, AuditAction.RECEIVED, envelope, envelope.to_audit_details(), correlation_id
        )

        fsm.advance(DispatchState.AUTHORIZING, "authorization_started")
        if not await self._authorize(envelope.sender_id, role):
            fsm.advance(DispatchState.UNAUTHORIZED, "access_denied")
            await self._append_audit(
                role,
                AuditAction.ERROR,
                envelope,
                {"reason": REASON_UNAUTHORIZED},
                correlation_id,
            )
            fsm.advance(DispatchState.REJECTED, "unauthorized_response")
            logger.info("dispatch_rejected", extra={"role": role.value})
            return self._finish(fsm, UNAUTHORIZED_RESPONSE, role, started, correlation_id)

        fsm.advance(DispatchState.AUTHORIZED, "access_granted")
        fsm.advance(DispatchState.PROCESSING, "handler_invoked")
        try:
            response = await self._invoke_handler(envelope, role)
            responded_details = response.to_dict()
        except Exception as exc:
            reason = (
                REASON_HANDLER_TIMEOUT
                if isinstance(exc, HandlerTimeoutError)
                else REASON_HANDLER_FAILURE
            )
            fsm.advance(DispatchState.ERRORED, reason, {"error_type": type(exc).__name__})
            await self._append_audit(
                role,
                AuditAction.ERROR,
                envelope,
                {"reason": reason, "error_type": type(exc).__name__, "error": str(exc)},
                correlation_id,
            )
            log_fallback(
                logger,
                "dispatcher",
                reason=reason,
                elapsed_ms=(time.perf_counter() - started) * 1000,
            )
            fsm.advance(DispatchState.FALLBACK, "fallback_response")
            return self._finish(fsm, FALLBACK_RESPONSE, role, started, correlation_id)

        await self._append_audit(
            role, AuditAction.RESPONDED, envelope, responded_details, correlation_id
        )
        fsm.advance(DispatchState.RESPONDED, "handler_responded")
        return self._finish(fsm, response, role, started, correlation_id)

    async def _authorize(self, sender_id: str, role: Role) -> bool:
        if role.is_open:
            return True
        try:
            return await self._directory.is_authorized(sender_id, role)
        except Exception as exc:
            # Diretório indisponível nega acesso
            logger.warning(
                "authorization_lookup_failed",
                extra={"role": role.value, "error_type": type(exc).__name__},
            )
            return False

    async def _invoke_handler(self, envelope: MessageEnvelope, role: Role) -> AgentResponse:
        handler = self._registry.get(role)
        try:
            result: Any = await asyncio.wait_for(
                handler.handle(envelope), timeout=self._handler_timeout
            )
        except TimeoutError as exc:
            raise HandlerTimeoutError(
                f"handler de {role} excedeu {self._handler_timeout}s"
            ) from exc
        return _coerce_response(result)

    async def _append_audit(
        self,
        role: Role,
        action: AuditAction,
        envelope: MessageEnvelope,
        details: dict[str, Any],
        correlation_id: str,
    ) -> None:
        event = AuditEvent(
            role=role,
            action=action,
            sender_id=envelope.sender_id,
            details=details,
            correlation_id=correlation_id,
        )
        try:
            await self._audit_sink.append(event)
        except Exception as exc:
            logger.error(
                "audit_append_failed",
                extra={
                    "action": action.value,
                    "role": role.value,
                    "error_type": type(exc).__name__,
                },
            )

    def _finish(
        self,
        fsm: DispatchStateMachine,
        response: AgentResponse,
        role: Role,
        started: float,
        correlation_id: str,
    ) -> DispatchResult:
        latency_ms = (time.perf_counter() - started) * 1000
        final_state = fsm.current_state
        record_latency("dispatcher", "run", latency_ms, correlation_id)
        record_dispatch_outcome(role.value, final_state.value.lower(), correlation_id)
        logger.debug(
            "dispatch_completed",
            extra={"role": role.value, "history": fsm.get_history_summary()},
        )
        return DispatchResult(
            response=response,
            final_state=final_state,
            history=tuple(fsm.history),
        )


def _coerce_response(result: Any) -> AgentResponse:
    """Aceita AgentResponse ou mapping {reply, actions}.

    Raises:
        HandlerFailureError: Para qualquer outro formato.
    """
    if isinstance(result, AgentResponse):
        return result
    if isinstance(result, Mapping):
        try:
            return AgentResponse.from_payload(result)
        except ValueError as exc:
            raise HandlerFailureError(f"resposta de handler inválida: {exc}") from exc
    raise HandlerFailureError(f"resposta de handler inválida: {type(result).__name__}")
