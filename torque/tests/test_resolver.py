"""
Tests for the move resolver.

Tests:
- Each outcome and the order the checks run in
- Jam bookkeeping
- Rejections leave everything untouched
- Time-weighted moves
"""

import pytest

from ..engine_core.state import Bottle, Direction, FailureReason, RunPhase
from ..engine_core.move import Move, MoveOutcome
from ..engine_core.costs import TimeWeightedCostModel
from ..engine_core.resolver import MoveResolver, resolve_move


class TestOpening:
    """Tests for twisting the right way."""

    def test_clean_open(self, bottle, run_state):
        """acw 35 against a CW lock: costs 18, opens."""
        result = resolve_move(bottle, run_state, Move.acw(35))

        assert result.outcome == MoveOutcome.OPENED
        assert result.energy_cost == 18
        assert result.state.energy == 82
        assert result.bottle.is_open

    def test_exact_required_force_opens(self, bottle, run_state):
        result = resolve_move(bottle, run_state, Move.acw(30))
        assert result.outcome == MoveOutcome.OPENED

    def test_too_weak_discards_force(self, bottle, run_state):
        """A weak twist leaves no progress behind."""
        result = resolve_move(bottle, run_state, Move.acw(20))

        assert result.outcome == MoveOutcome.TOO_WEAK
        assert result.state.energy == 90
        assert result.bottle.current_tightness == 0
        assert not result.bottle.is_open

    def test_weak_twists_do_not_accumulate(self, bottle, run_state):
        first = resolve_move(bottle, run_state, Move.acw(20))
        second = resolve_move(first.bottle, first.state, Move.acw(20))

        assert second.outcome == MoveOutcome.TOO_WEAK
        assert not second.bottle.is_open

    def test_force_at_capacity_does_not_break(self, bottle, run_state):
        result = resolve_move(bottle, run_state, Move.acw(50))
        assert result.outcome == MoveOutcome.OPENED


class TestJams:
    """Tests for tightness bookkeeping."""

    def test_wrong_direction_jams(self, bottle, run_state):
        """cw 20 against a CW lock: costs 10, tightness 20."""
        result = resolve_move(bottle, run_state, Move.cw(20))

        assert result.outcome == MoveOutcome.JAMMED
        assert result.state.energy == 90
        assert result.bottle.current_tightness == 20
        assert not result.bottle.is_open

    def test_jams_stack_without_limit(self, bottle, run_state):
        state = run_state
        for _ in range(3):
            result = resolve_move(bottle, state, Move.cw(40))
            bottle, state = result.bottle, result.state

        assert bottle.current_tightness == 120

    def test_jam_reduced(self, bottle, run_state):
        jammed = bottle.with_tightness(30)
        result = resolve_move(jammed, run_state, Move.acw(10))

        assert result.outcome == MoveOutcome.JAM_REDUCED
        assert result.bottle.current_tightness == 20
        assert not result.bottle.is_open

    def test_jam_then_open(self, bottle, run_state):
        """Tightness 10, required 30: 40N leaves exactly 30 to open."""
        jammed = bottle.with_tightness(10)
        result = resolve_move(jammed, run_state, Move.acw(40))

        assert result.outcome == MoveOutcome.OPENED
        assert result.bottle.current_tightness == 0
        assert result.bottle.is_open

    def test_jam_cleared_but_not_open(self, bottle, run_state):
        """Tightness 10, required 30: 35N leaves 25, cap stays on."""
        jammed = bottle.with_tightness(10)
        result = resolve_move(jammed, run_state, Move.acw(35))

        assert result.outcome == MoveOutcome.JAM_CLEARED
        assert result.bottle.current_tightness == 0
        assert not result.bottle.is_open

    def test_force_equal_to_jam_clears_it(self, bottle, run_state):
        jammed = bottle.with_tightness(25)
        result = resolve_move(jammed, run_state, Move.acw(25))

        assert result.outcome == MoveOutcome.JAM_CLEARED
        assert result.bottle.current_tightness == 0


class TestRunEnding:
    """Tests for exhaustion and breakage."""

    def test_breakage_beats_correct_direction(self, bottle, run_state):
        """51N the right way would open, but the glass goes first."""
        result = resolve_move(bottle, run_state, Move.acw(51))

        assert result.outcome == MoveOutcome.SHATTERED
        assert result.state.phase == RunPhase.FAILED
        assert result.state.failure_reason == FailureReason.SHATTERED
        assert result.state.energy == 74
        assert not result.bottle.is_open

    def test_breakage_in_wrong_direction(self, bottle, run_state):
        result = resolve_move(bottle, run_state, Move.cw(60))

        assert result.outcome == MoveOutcome.SHATTERED
        assert result.bottle.current_tightness == 0

    def test_exhaustion_checked_before_breakage(self, bottle, run_state):
        """Not enough energy: nothing else is evaluated."""
        tired = run_state._copy_with(energy=10)
        result = resolve_move(bottle, tired, Move.acw(60))

        assert result.outcome == MoveOutcome.EXHAUSTED
        assert result.state.failure_reason == FailureReason.EXHAUSTED
        assert result.state.energy == 10
        assert result.bottle == bottle

    def test_energy_exactly_enough(self, bottle, run_state):
        state = run_state._copy_with(energy=18)
        result = resolve_move(bottle, state, Move.acw(35))

        assert result.outcome == MoveOutcome.OPENED
        assert result.state.energy == 0


class TestRejections:
    """Tests for moves that are discarded."""

    @pytest.mark.parametrize("move", [
        Move(direction=None, force=20),
        Move(direction=Direction.CLOCKWISE, force=0),
        Move(direction=Direction.ANTICLOCKWISE, force=-5),
        Move(direction=Direction.ANTICLOCKWISE, force=float("inf")),
        Move(direction=Direction.ANTICLOCKWISE, force=float("nan")),
        Move(direction=Direction.ANTICLOCKWISE, force=10 ** 400),
    ])
    def test_invalid_moves_change_nothing(self, bottle, run_state, move):
        result = resolve_move(bottle, run_state, move)

        assert result.outcome == MoveOutcome.INVALID_MOVE
        assert result.reason
        assert result.bottle is bottle
        assert result.state is run_state
        assert result.energy_cost == 0

    def test_open_bottle_accepts_no_moves(self, bottle, run_state):
        result = resolve_move(bottle.opened(), run_state, Move.acw(30))

        assert result.outcome == MoveOutcome.INVALID_MOVE
        assert "open" in result.reason.lower()

    def test_finished_run_accepts_no_moves(self, bottle, run_state):
        over = run_state.failed(FailureReason.SHATTERED)
        result = resolve_move(bottle, over, Move.acw(30))

        assert result.outcome == MoveOutcome.INVALID_MOVE
        assert "over" in result.reason.lower()


class TestHistory:
    """Tests for move history."""

    def test_accepted_moves_recorded(self, bottle, run_state):
        result = resolve_move(bottle, run_state, Move.cw(20))

        assert len(result.state.history) == 1
        record = result.state.history[-1]
        assert record.outcome == MoveOutcome.JAMMED
        assert record.energy_cost == 10

    def test_rejected_moves_not_recorded(self, bottle, run_state):
        result = resolve_move(bottle, run_state, Move.cw(0))
        assert result.state.history == []

    def test_inputs_not_mutated(self, bottle, run_state):
        resolve_move(bottle, run_state, Move.cw(20))

        assert bottle.current_tightness == 0
        assert run_state.energy == 100
        assert run_state.history == []


class TestTimeWeighted:
    """Tests for moves with a hold time."""

    @pytest.fixture
    def resolver(self):
        return MoveResolver(cost_model=TimeWeightedCostModel())

    def test_hold_time_charged_to_clock(self, resolver, bottle, run_state):
        result = resolver.resolve(bottle, run_state, Move.acw(35, duration=20))

        assert result.outcome == MoveOutcome.OPENED
        assert result.energy_cost == 9
        assert result.state.energy == 91
        assert result.state.elapsed_time == 20

    def test_hold_longer_than_remaining_time(self, resolver, bottle, run_state):
        state = run_state._copy_with(elapsed_time=290)
        result = resolver.resolve(bottle, state, Move.acw(35, duration=11))

        assert result.outcome == MoveOutcome.INSUFFICIENT_TIME
        assert result.state is state
        assert result.bottle is bottle

    def test_hold_exactly_remaining_time(self, resolver, bottle, run_state):
        state = run_state._copy_with(elapsed_time=290)
        result = resolver.resolve(bottle, state, Move.acw(35, duration=10))

        assert result.accepted
        assert result.state.remaining_time == 0

    def test_missing_hold_time_invalid(self, resolver, bottle, run_state):
        result = resolver.resolve(bottle, run_state, Move.acw(35))
        assert result.outcome == MoveOutcome.INVALID_MOVE

    def test_non_finite_hold_time(self, resolver, bottle, run_state):
        """NaN is invalid, infinity is more time than is left."""
        nan = resolver.resolve(bottle, run_state, Move.acw(35, duration=float("nan")))
        inf = resolver.resolve(bottle, run_state, Move.acw(35, duration=float("inf")))

        assert nan.outcome == MoveOutcome.INVALID_MOVE
        assert inf.outcome == MoveOutcome.INSUFFICIENT_TIME
        assert inf.state is run_state

    def test_infinite_force_rejected(self, resolver, bottle, run_state):
        result = resolver.resolve(bottle, run_state, Move.acw(float("inf"), duration=5))

        assert result.outcome == MoveOutcome.INVALID_MOVE
        assert result.energy_cost == 0

    def test_exhaustion_spends_no_time(self, resolver, bottle, run_state):
        state = run_state._copy_with(energy=5)
        result = resolver.resolve(bottle, state, Move.acw(35, duration=20))

        assert result.outcome == MoveOutcome.EXHAUSTED
        assert result.state.elapsed_time == 0
