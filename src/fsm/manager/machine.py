"""
Máquina de estados do despacho de um envelope.

Uma instância por chamada ao dispatcher; mantém o estado atual e o
histórico de transições para logs e para o resultado do despacho.
"""

from typing import Any

from fsm.states.dispatch import (
    DEFAULT_INITIAL_STATE,
    DispatchState,
    is_terminal,
)
from fsm.transitions.rules import get_valid_targets, is_transition_valid
from fsm.types.transition import StateTransition, TransitionResult


class InvalidTransitionError(RuntimeError):
    """Transição fora do grafo solicitada via advance()."""


class DispatchStateMachine:
    """
    Máquina de estados de um despacho.

    Attributes:
        current_state: Estado atual
        history: Transições realizadas
    """

    __slots__ = ("_current_state", "_dispatch_id", "_history")

    def __init__(
        self,
        initial_state: DispatchState | None = None,
        dispatch_id: str = "",
    ) -> None:
        self._current_state = initial_state or DEFAULT_INITIAL_STATE
        self._history: list[StateTransition] = []
        self._dispatch_id = dispatch_id

    @property
    def current_state(self) -> DispatchState:
        return self._current_state

    @property
    def history(self) -> list[StateTransition]:
        """Histórico de transições (cópia para evitar mutação externa)."""
        return list(self._history)

    @property
    def dispatch_id(self) -> str:
        return self._dispatch_id

    @property
    def is_terminal(self) -> bool:
        return is_terminal(self._current_state)

    def can_transition_to(self, target: DispatchState) -> bool:
        return is_transition_valid(self._current_state, target)

    def get_valid_targets(self) -> frozenset[DispatchState]:
        return get_valid_targets(self._current_state)

    def transition(
        self,
        target: DispatchState,
        trigger: str,
        metadata: dict[str, Any] | None = None,
    ) -> TransitionResult:
        """
        Tenta realizar uma transição de estado.

        Args:
            target: Estado de destino
            trigger: Identificador do gatilho (ex: 'access_granted')
            metadata: Dados adicionais (nunca PII)

        Returns:
            TransitionResult com sucesso/falha e dados da transição
        """
        if not is_transition_valid(self._current_state, target):
            return TransitionResult(
                success=False,
                error_reason=(
                    f"Transição inválida: {self._current_state.name} → {target.name}"
                ),
            )

        transition = StateTransition(
            from_state=self._current_state,
            to_state=target,
            trigger=trigger,
            metadata=metadata or {},
        )
        self._current_state = target
        self._history.append(transition)
        return TransitionResult(success=True, transition=transition)

    def advance(
        self,
        target: DispatchState,
        trigger: str,
        metadata: dict[str, Any] | None = None,
    ) -> StateTransition:
        """
        Como transition(), mas falha alto se a transição for inválida.

        Raises:
            InvalidTransitionError: Se a transição não existe no grafo.
        """
        result = self.transition(target, trigger, metadata)
        if not result.success or result.transition is None:
            raise InvalidTransitionError(result.error_reason)
        return result.transition

    def get_state_summary(self) -> dict[str, Any]:
        """Resumo do estado atual (seguro para logs)."""
        return {
            "dispatch_id": self._dispatch_id,
            "current_state": self._current_state.name,
            "is_terminal": self.is_terminal,
            "transition_count": len(self._history),
        }

    def get_history_summary(self) -> list[dict[str, Any]]:
        return [t.to_log_dict() for t in self._history]


def create_dispatch_fsm(dispatch_id: str = "") -> DispatchStateMachine:
    """Cria uma máquina nova no estado RECEIVED."""
    return DispatchStateMachine(dispatch_id=dispatch_id)
