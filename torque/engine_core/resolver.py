"""
Move Resolver - Applies a move to a bottle and the run budgets.

The resolver is the single point of bottle mutation.
All twists must go through resolve().

Processing order (each step can short-circuit the rest):
1. Validate the move (rejections change nothing)
2. Charge energy; not enough energy ends the run
3. Breakage: force above capacity ends the run, whichever the direction
4. Direction: the locked way jams, the other way clears jam then opens

Force that clears a jam but leaves too little to open is lost, and so is a
too-weak twist on a clean cap. Nothing accumulates between moves except
tightness.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field

from .state import Bottle, Direction, FailureReason, RunState
from .move import MAX_FORCE, Move, MoveOutcome, MoveRecord, MoveResult
from .costs import CostModel, SimpleCostModel

logger = logging.getLogger(__name__)


@dataclass
class MoveResolver:
    """
    Resolver applies moves to a bottle.

    Stateless - all state is in Bottle and RunState.
    The cost model decides energy cost and whether moves carry a duration.
    """
    cost_model: CostModel = field(default_factory=SimpleCostModel)

    def resolve(self, bottle: Bottle, state: RunState, move: Move) -> MoveResult:
        """
        Resolve a move.

        Returns MoveResult with the new bottle and state, or the
        untouched inputs when the move is rejected.
        """
        rejection = self._validate_move(bottle, state, move)
        if rejection:
            outcome, reason = rejection
            return MoveResult.rejected(outcome, bottle, state, reason)

        # 1. Energy
        cost = self.cost_model.energy_cost(move)
        if state.energy < cost:
            new_state = state.failed(FailureReason.EXHAUSTED)
            return self._finish(bottle, new_state, move, MoveOutcome.EXHAUSTED, cost)

        new_state = state._copy_with(energy=state.energy - cost)
        if self.cost_model.requires_duration:
            new_state = new_state._copy_with(
                elapsed_time=new_state.elapsed_time + move.duration,
            )

        # 2. Breakage
        if move.force > bottle.max_capacity:
            new_state = new_state.failed(FailureReason.SHATTERED)
            return self._finish(bottle, new_state, move, MoveOutcome.SHATTERED, cost)

        # 3. Direction
        new_bottle, outcome = self._twist(bottle, move.direction, move.force)
        return self._finish(new_bottle, new_state, move, outcome, cost)

    def _validate_move(
        self, bottle: Bottle, state: RunState, move: Move
    ) -> tuple[MoveOutcome, str] | None:
        """
        Check a move can be applied.

        Returns (outcome, reason) if rejected, None if valid.
        """
        if state.is_over:
            return MoveOutcome.INVALID_MOVE, "The run is over - no moves allowed"

        if bottle.is_open:
            return MoveOutcome.INVALID_MOVE, "This bottle is already open"

        if not isinstance(move.direction, Direction):
            return MoveOutcome.INVALID_MOVE, "Missing direction: use CW or ACW"

        # Also refuses NaN and infinity
        if move.force is None or not 0 < move.force <= MAX_FORCE:
            return MoveOutcome.INVALID_MOVE, f"Force must be a positive number up to {MAX_FORCE}"

        if self.cost_model.requires_duration:
            if move.duration is None or not move.duration > 0:
                return MoveOutcome.INVALID_MOVE, "Duration must be a positive number of seconds"
            if move.duration > state.remaining_time:
                return (
                    MoveOutcome.INSUFFICIENT_TIME,
                    f"Only {state.remaining_time:g}s left, cannot hold for {move.duration:g}s",
                )

        return None

    def _twist(
        self, bottle: Bottle, direction: Direction, force: float
    ) -> tuple[Bottle, MoveOutcome]:
        """Apply force in a direction to a bottle that survived it."""
        if direction == bottle.locked_direction:
            # No ceiling on tightness
            return bottle.with_tightness(bottle.current_tightness + force), MoveOutcome.JAMMED

        if bottle.is_jammed:
            if force < bottle.current_tightness:
                return (
                    bottle.with_tightness(bottle.current_tightness - force),
                    MoveOutcome.JAM_REDUCED,
                )
            remainder = force - bottle.current_tightness
            if remainder >= bottle.required_force:
                return bottle.opened(), MoveOutcome.OPENED
            return bottle.with_tightness(0), MoveOutcome.JAM_CLEARED

        if force >= bottle.required_force:
            return bottle.opened(), MoveOutcome.OPENED
        return bottle, MoveOutcome.TOO_WEAK

    def _finish(
        self,
        bottle: Bottle,
        state: RunState,
        move: Move,
        outcome: MoveOutcome,
        cost: int,
    ) -> MoveResult:
        logger.debug(
            "Resolved %s: outcome=%s cost=%d energy=%s tightness=%s",
            move.describe(), outcome.value, cost, state.energy, bottle.current_tightness,
        )
        state = state.with_move(MoveRecord(move=move, outcome=outcome, energy_cost=cost))
        return MoveResult(outcome=outcome, bottle=bottle, state=state, energy_cost=cost)


def resolve_move(
    bottle: Bottle,
    state: RunState,
    move: Move,
    cost_model: CostModel | None = None,
) -> MoveResult:
    """Convenience function to resolve a single move."""
    resolver = MoveResolver(cost_model=cost_model or SimpleCostModel())
    return resolver.resolve(bottle, state, move)
