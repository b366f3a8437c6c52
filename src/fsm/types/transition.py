"""
Tipos para registro de transições do despacho.

Cada transição é um registro imutável usado em logs e no resultado do
dispatcher.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from fsm.states.dispatch import DispatchState


@dataclass(frozen=True, slots=True)
class StateTransition:
    """
    Transição de estado do despacho.

    Attributes:
        from_state: Estado de origem
        to_state: Estado de destino
        trigger: Gatilho da transição (ex: 'access_denied', 'handler_error')
        metadata: Dados adicionais (nunca conter PII)
        timestamp: Momento da transição (UTC)
    """

    from_state: DispatchState
    to_state: DispatchState
    trigger: str
    metadata: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        if not self.trigger or not self.trigger.strip():
            raise ValueError("trigger não pode ser vazio")

    def to_log_dict(self) -> dict[str, Any]:
        return {
            "from_state": self.from_state.name,
            "to_state": self.to_state.name,
            "trigger": self.trigger,
            "timestamp": self.timestamp.isoformat(),
            "metadata": self.metadata,
        }


@dataclass(frozen=True, slots=True)
class TransitionResult:
    """
    Resultado de uma tentativa de transição.

    Attributes:
        success: Se a transição foi aplicada
        transition: Dados da transição (se success=True)
        error_reason: Motivo da recusa (se success=False)
    """

    success: bool
    transition: StateTransition | None = None
    error_reason: str | None = None

    def __post_init__(self) -> None:
        if self.success and self.transition is None:
            raise ValueError("Transição bem-sucedida deve incluir transition")
        if not self.success and self.error_reason is None:
            raise ValueError("Transição falha deve incluir error_reason")
