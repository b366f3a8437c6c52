"""
Exports públicos do módulo fsm/manager.

Máquina de estados (DispatchStateMachine) do despacho.
"""

from fsm.manager.machine import (
    DispatchStateMachine,
    InvalidTransitionError,
    create_dispatch_fsm,
)

__all__ = [
    "DispatchStateMachine",
    "InvalidTransitionError",
    "create_dispatch_fsm",
]
