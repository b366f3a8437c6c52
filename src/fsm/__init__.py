"""
Módulo FSM — máquina de estados do despacho de envelopes.

Estrutura:
    - states/: Estados do despacho (DispatchState)
    - transitions/: Grafo de transições (VALID_TRANSITIONS)
    - manager/: Máquina de estados (DispatchStateMachine)
    - types/: Tipos de dados (StateTransition, TransitionResult)
"""

from fsm.manager import (
    DispatchStateMachine,
    InvalidTransitionError,
    create_dispatch_fsm,
)
from fsm.states import (
    DEFAULT_INITIAL_STATE,
    TERMINAL_STATES,
    DispatchState,
    is_terminal,
)
from fsm.transitions import (
    VALID_TRANSITIONS,
    get_valid_targets,
    is_transition_valid,
    validate_transition_map,
)
from fsm.types import (
    StateTransition,
    TransitionResult,
)

__all__ = [
    "DEFAULT_INITIAL_STATE",
    "TERMINAL_STATES",
    "VALID_TRANSITIONS",
    "DispatchState",
    "DispatchStateMachine",
    "InvalidTransitionError",
    "StateTransition",
    "TransitionResult",
    "create_dispatch_fsm",
    "get_valid_targets",
    "is_terminal",
    "is_transition_valid",
    "validate_transition_map",
]
