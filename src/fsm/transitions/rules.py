"""
Grafo de transições válidas do despacho.

RECEIVED → AUTHORIZING → (AUTHORIZED → PROCESSING → RESPONDED)
                       | (UNAUTHORIZED → REJECTED)
PROCESSING → ERRORED → FALLBACK
"""

from fsm.states.dispatch import TERMINAL_STATES, DispatchState

TransitionMap = dict[DispatchState, frozenset[DispatchState]]

VALID_TRANSITIONS: TransitionMap = {
    DispatchState.RECEIVED: frozenset({DispatchState.AUTHORIZING}),
    DispatchState.AUTHORIZING: frozenset({
        DispatchState.AUTHORIZED,
        DispatchState.UNAUTHORIZED,
    }),
    DispatchState.AUTHORIZED: frozenset({DispatchState.PROCESSING}),
    DispatchState.UNAUTHORIZED: frozenset({DispatchState.REJECTED}),
    DispatchState.PROCESSING: frozenset({
        DispatchState.RESPONDED,
        DispatchState.ERRORED,
    }),
    DispatchState.ERRORED: frozenset({DispatchState.FALLBACK}),

    DispatchState.RESPONDED: frozenset(),
    DispatchState.REJECTED: frozenset(),
    DispatchState.FALLBACK: frozenset(),
}


def get_valid_targets(state: DispatchState) -> frozenset[DispatchState]:
    """Retorna os destinos permitidos a partir de um estado (vazio se terminal)."""
    return VALID_TRANSITIONS.get(state, frozenset())


def is_transition_valid(from_state: DispatchState, to_state: DispatchState) -> bool:
    """Verifica se a transição existe no grafo."""
    if from_state in TERMINAL_STATES:
        return False
    return to_state in get_valid_targets(from_state)


def validate_transition_map() -> list[str]:
    """
    Valida a integridade do mapa de transições.

    Verifica:
    - Todos os estados do enum estão no mapa
    - Estados terminais têm conjunto vazio
    - Todo estado não-terminal tem ao menos um destino

    Returns:
        Lista de erros encontrados (vazia se válido)
    """
    errors: list[str] = []

    for state in DispatchState:
        if state not in VALID_TRANSITIONS:
            errors.append(f"Estado {state.name} ausente em VALID_TRANSITIONS")

    for state, targets in VALID_TRANSITIONS.items():
        if state in TERMINAL_STATES and targets:
            errors.append(
                f"Estado terminal {state.name} não deveria ter transições: {targets}"
            )
        if state not in TERMINAL_STATES and not targets:
            errors.append(f"Estado {state.name} sem saída")

    return errors
