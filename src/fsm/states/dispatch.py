"""
Estados do ciclo de despacho de um envelope.

Cada chamada ao dispatcher percorre um caminho determinístico que termina
em exatamente um estado terminal: RESPONDED, REJECTED ou FALLBACK.
"""

from enum import StrEnum


class DispatchState(StrEnum):
    """
    Estados do despacho de um envelope.

    Estados não-terminais:
        - RECEIVED: Envelope aceito, evento de recebimento registrado
        - AUTHORIZING: Verificando acesso ao papel solicitado
        - AUTHORIZED: Acesso concedido
        - UNAUTHORIZED: Acesso negado
        - PROCESSING: Handler do papel em execução
        - ERRORED: Handler falhou ou excedeu o prazo

    Estados terminais:
        - RESPONDED: Resposta do handler devolvida
        - REJECTED: Resposta fixa de não autorizado devolvida
        - FALLBACK: Resposta fixa de fallback devolvida
    """

    RECEIVED = "RECEIVED"
    AUTHORIZING = "AUTHORIZING"
    AUTHORIZED = "AUTHORIZED"
    UNAUTHORIZED = "UNAUTHORIZED"
    PROCESSING = "PROCESSING"
    ERRORED = "ERRORED"

    RESPONDED = "RESPONDED"
    REJECTED = "REJECTED"
    FALLBACK = "FALLBACK"

    def __str__(self) -> str:
        return self.value


TERMINAL_STATES: frozenset[DispatchState] = frozenset({
    DispatchState.RESPONDED,
    DispatchState.REJECTED,
    DispatchState.FALLBACK,
})

DEFAULT_INITIAL_STATE: DispatchState = DispatchState.RECEIVED


def is_terminal(state: DispatchState) -> bool:
    """Verifica se o estado encerra o despacho."""
    return state in TERMINAL_STATES
