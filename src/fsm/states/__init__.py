"""
Exports públicos do módulo fsm/states.

Estados do ciclo de despacho de um envelope.
"""

from fsm.states.dispatch import (
    DEFAULT_INITIAL_STATE,
    TERMINAL_STATES,
    DispatchState,
    is_terminal,
)

__all__ = [
    "DEFAULT_INITIAL_STATE",
    "TERMINAL_STATES",
    "DispatchState",
    "is_terminal",
]
