"""Testes da FSM de despacho.

Cobre: estados, grafo de transições, tipos e DispatchStateMachine.
"""

from __future__ import annotations

import pytest

from fsm import (
    DEFAULT_INITIAL_STATE,
    TERMINAL_STATES,
    VALID_TRANSITIONS,
    DispatchState,
    DispatchStateMachine,
    InvalidTransitionError,
    StateTransition,
    TransitionResult,
    create_dispatch_fsm,
    get_valid_targets,
    is_terminal,
    is_transition_valid,
    validate_transition_map,
)

HAPPY_PATH = (
    DispatchState.AUTHORIZING,
    DispatchState.AUTHORIZED,
    DispatchState.PROCESSING,
    DispatchState.RESPONDED,
)


class TestDispatchStates:
    """Estados e terminais."""

    def test_terminal_states(self) -> None:
        assert {
            DispatchState.RESPONDED,
            DispatchState.REJECTED,
            DispatchState.FALLBACK,
        } == TERMINAL_STATES

    def test_initial_state_is_received(self) -> None:
        assert DEFAULT_INITIAL_STATE == DispatchState.RECEIVED
        assert not is_terminal(DEFAULT_INITIAL_STATE)

    def test_str_is_value(self) -> None:
        assert str(DispatchState.FALLBACK) == "FALLBACK"


class TestTransitionRules:
    """Grafo de transições."""

    def test_map_is_consistent(self) -> None:
        assert validate_transition_map() == []
        assert set(VALID_TRANSITIONS) == set(DispatchState)

    @pytest.mark.parametrize("state", sorted(TERMINAL_STATES))
    def test_terminal_has_no_targets(self, state: DispatchState) -> None:
        assert get_valid_targets(state) == frozenset()
        assert not is_transition_valid(state, DispatchState.RECEIVED)

    @pytest.mark.parametrize(
        ("from_state", "to_state", "expected"),
        [
            (DispatchState.RECEIVED, DispatchState.AUTHORIZING, True),
            (DispatchState.AUTHORIZING, DispatchState.UNAUTHORIZED, True),
            (DispatchState.UNAUTHORIZED, DispatchState.REJECTED, True),
            (DispatchState.PROCESSING, DispatchState.ERRORED, True),
            (DispatchState.ERRORED, DispatchState.FALLBACK, True),
            (DispatchState.RECEIVED, DispatchState.PROCESSING, False),
            (DispatchState.UNAUTHORIZED, DispatchState.PROCESSING, False),
            (DispatchState.ERRORED, DispatchState.RESPONDED, False),
        ],
    )
    def test_edges(
        self, from_state: DispatchState, to_state: DispatchState, expected: bool
    ) -> None:
        assert is_transition_valid(from_state, to_state) is expected


class TestTransitionTypes:
    """Invariantes de StateTransition e TransitionResult."""

    def test_empty_trigger_rejected(self) -> None:
        with pytest.raises(ValueError, match="trigger"):
            StateTransition(DispatchState.RECEIVED, DispatchState.AUTHORIZING, "  ")

    def test_log_dict(self) -> None:
        transition = StateTransition(
            DispatchState.AUTHORIZING,
            DispatchState.UNAUTHORIZED,
            "access_denied",
            metadata={"role": "staff"},
        )
        log = transition.to_log_dict()
        assert log["from_state"] == "AUTHORIZING"
        assert log["to_state"] == "UNAUTHORIZED"
        assert log["metadata"] == {"role": "staff"}

    def test_result_invariants(self) -> None:
        with pytest.raises(ValueError):
            TransitionResult(success=True)
        with pytest.raises(ValueError):
            TransitionResult(success=False)


class TestDispatchStateMachine:
    """Máquina de estados por despacho."""

    def test_happy_path(self) -> None:
        fsm = create_dispatch_fsm("d-1")
        for target in HAPPY_PATH:
            fsm.advance(target, f"to_{target.value.lower()}")

        assert fsm.current_state == DispatchState.RESPONDED
        assert fsm.is_terminal
        assert [t.to_state for t in fsm.history] == list(HAPPY_PATH)
        assert fsm.get_state_summary() == {
            "dispatch_id": "d-1",
            "current_state": "RESPONDED",
            "is_terminal": True,
            "transition_count": 4,
        }

    def test_fallback_path(self) -> None:
        fsm = DispatchStateMachine(initial_state=DispatchState.PROCESSING)
        fsm.advance(DispatchState.ERRORED, "handler_timeout")
        fsm.advance(DispatchState.FALLBACK, "fallback_reply")

        assert fsm.current_state == DispatchState.FALLBACK
        assert [h["trigger"] for h in fsm.get_history_summary()] == [
            "handler_timeout",
            "fallback_reply",
        ]

    def test_invalid_transition_keeps_state(self) -> None:
        fsm = create_dispatch_fsm()
        result = fsm.transition(DispatchState.RESPONDED, "skip")

        assert result.success is False
        assert "RECEIVED" in (result.error_reason or "")
        assert fsm.current_state == DispatchState.RECEIVED
        assert fsm.history == []

    def test_advance_raises_on_invalid(self) -> None:
        fsm = create_dispatch_fsm()
        with pytest.raises(InvalidTransitionError):
            fsm.advance(DispatchState.FALLBACK, "skip")

    def test_can_transition_to(self) -> None:
        fsm = create_dispatch_fsm()
        fsm.advance(DispatchState.AUTHORIZING, "authorize")

        assert fsm.can_transition_to(DispatchState.UNAUTHORIZED)
        assert not fsm.can_transition_to(DispatchState.PROCESSING)
        assert fsm.get_valid_targets() == {
            DispatchState.AUTHORIZED,
            DispatchState.UNAUTHORIZED,
        }

    def test_history_is_a_copy(self) -> None:
        fsm = create_dispatch_fsm()
        fsm.advance(DispatchState.AUTHORIZING, "authorize")
        fsm.history.clear()
        assert len(fsm.history) == 1
