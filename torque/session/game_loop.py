"""
Game Loop - Drives a session from the first bottle to the end of the run.

The loop:
1. Generate the bottle for the current level
2. Accept a move (text or already parsed)
3. Resolve it against the bottle
4. On a clear: refill energy, advance the level, new bottle
5. Stop on completion, exhaustion, shattering or time expiry

Each move is atomic: it is fully applied or fully rejected before the
next one, and snapshot() never changes anything.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, TYPE_CHECKING
import logging
import time

from ..engine_core.state import FailureReason, RunPhase
from ..engine_core.move import Move, MoveOutcome, MoveRecord
from ..engine_core.parser import parse_move
from ..engine_core.resolver import MoveResolver
from ..engine_core.scoring import whole_seconds_left

if TYPE_CHECKING:
    from .manager import Session
    from ..schemas import RunSummary, ScoreRecord

logger = logging.getLogger(__name__)


class LoopState(Enum):
    """State of the game loop."""
    NOT_STARTED = "not_started"
    WAITING_MOVE = "waiting_move"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class TurnResult:
    """
    Result of one submitted command.

    outcome is None only when the run had already ended on the clock
    before the command could be looked at.
    """
    success: bool
    loop_state: LoopState
    outcome: MoveOutcome | None = None
    move: Move | None = None

    # Reason for rejected commands
    reason: str | None = None

    energy_cost: int = 0
    level: int = 1

    # The move opened the bottle and the run moved on
    level_completed: bool = False

    failure_reason: FailureReason | None = None
    score: int | None = None


@dataclass
class Snapshot:
    """Read-only view of a run for displays."""
    level: int
    total_levels: int
    energy: float
    max_energy: float
    time_left: float
    elapsed_time: float
    seconds_left: int
    bottle_open: bool
    phase: RunPhase
    failure_reason: FailureReason | None = None
    recent_moves: list[MoveRecord] = field(default_factory=list)
    score: int | None = None


class GameLoop:
    """
    The session controller.

    Usage:
        loop = GameLoop(session)
        loop.start()

        while loop.is_running:
            result = loop.submit(input("Action > "))
            show(result)

        show(loop.summary())
    """

    RECENT_MOVES = 3

    def __init__(self, session: Session, clock: Callable[[], float] = time.monotonic):
        self.session = session
        self.config = session.config
        self.resolver = MoveResolver(cost_model=self.config.cost_model)
        self.clock = clock
        self.state = LoopState.NOT_STARTED
        self._started_at: float | None = None

    @property
    def is_running(self) -> bool:
        return self.state == LoopState.WAITING_MOVE

    def start(self) -> Snapshot:
        """Generate the first bottle and start the clock."""
        if self.state != LoopState.NOT_STARTED:
            raise ValueError("Game loop already started")

        self.session.bottle = self.session.generator.generate(self.session.state.level)
        self._started_at = self.clock()
        self.state = LoopState.WAITING_MOVE
        logger.info("Session %s started at level %d",
                    self.session.session_id, self.session.state.level)
        return self.snapshot()

    def submit(self, text: str) -> TurnResult:
        """Parse a command line and apply it."""
        blocked = self._guard()
        if blocked:
            return blocked

        state = self.session.state
        parsed = parse_move(
            text,
            timed=self.config.timed_moves,
            remaining_time=state.remaining_time if self.config.timed_moves else None,
        )
        if not parsed.success:
            return TurnResult(
                success=False,
                loop_state=self.state,
                outcome=parsed.outcome,
                reason=parsed.error,
                level=state.level,
            )

        return self.apply_move(parsed.move)

    def apply_move(self, move: Move) -> TurnResult:
        """Resolve an already parsed move."""
        blocked = self._guard(move)
        if blocked:
            return blocked

        session = self.session
        level = session.state.level
        result = self.resolver.resolve(session.bottle, session.state, move)

        if not result.accepted:
            return TurnResult(
                success=False,
                loop_state=self.state,
                outcome=result.outcome,
                move=move,
                reason=result.reason,
                level=level,
            )

        session.bottle = result.bottle
        session.state = result.state

        if self.config.timed_moves and not session.state.is_over:
            self._regenerate(move.duration)

        level_completed = result.outcome == MoveOutcome.OPENED
        if level_completed:
            self._advance_level()

        self._check_expiry()
        self._update_loop_state()

        return TurnResult(
            success=True,
            loop_state=self.state,
            outcome=result.outcome,
            move=move,
            energy_cost=result.energy_cost,
            level=level,
            level_completed=level_completed,
            failure_reason=session.state.failure_reason,
            score=session.score,
        )

    def check_time(self) -> bool:
        """
        Poll the clock and end the run if the budget is spent.

        Returns True if the run is still in progress.
        """
        if self.state == LoopState.WAITING_MOVE:
            self._sync_clock()
            self._check_expiry()
            self._update_loop_state()
        return self.is_running

    def snapshot(self) -> Snapshot:
        """Current view of the run. Does not advance the clock."""
        state = self.session.state
        elapsed = state.elapsed_time
        if self._tracks_wall_clock() and self.is_running:
            elapsed = max(elapsed, self.clock() - self._started_at)

        return Snapshot(
            level=state.level,
            total_levels=self.config.total_levels,
            energy=state.energy,
            max_energy=self.config.max_energy,
            time_left=max(0, state.time_budget - elapsed),
            elapsed_time=elapsed,
            seconds_left=whole_seconds_left(state.time_budget, elapsed),
            bottle_open=bool(self.session.bottle and self.session.bottle.is_open),
            phase=state.phase,
            failure_reason=state.failure_reason,
            recent_moves=state.history[-self.RECENT_MOVES:],
            score=self.session.score,
        )

    def summary(self) -> RunSummary:
        """Serializable summary of the run so far."""
        from ..schemas import RunSummary

        state = self.session.state
        return RunSummary(
            session_id=self.session.session_id,
            player_name=self.session.player_name,
            status=state.phase.value,
            variant=self.config.variant.value,
            level_reached=min(state.level, self.config.total_levels),
            total_levels=self.config.total_levels,
            failure_reason=state.failure_reason.value if state.failure_reason else None,
            score=self.session.score,
            time_used=state.elapsed_time,
            energy_remaining=state.energy,
        )

    def score_record(self, player_id: str | None = None) -> ScoreRecord:
        """
        Record for a completed run, ready for an external score store.

        Raises ValueError if the run did not complete.
        """
        from ..schemas import ScoreRecord

        if self.state != LoopState.COMPLETED:
            raise ValueError("Only completed runs have a score record")

        state = self.session.state
        return ScoreRecord(
            player_id=player_id or self.session.player_name,
            score=self.session.score,
            time_used=state.elapsed_time,
            energy_remaining=state.energy,
        )

    # =========================================================================
    # Internals
    # =========================================================================

    def _tracks_wall_clock(self) -> bool:
        return not self.config.timed_moves

    def _sync_clock(self):
        """Move elapsed time up to the wall clock (simple variant only)."""
        if not self._tracks_wall_clock() or self._started_at is None:
            return
        state = self.session.state
        elapsed = self.clock() - self._started_at
        delta = elapsed - state.elapsed_time
        if delta <= 0:
            return
        self.session.state = state._copy_with(elapsed_time=elapsed)
        self._regenerate(delta)

    def _regenerate(self, delta: float):
        rate = self.config.passive_regen_rate
        if rate <= 0 or delta <= 0:
            return
        state = self.session.state
        energy = min(self.config.max_energy, state.energy + rate * delta)
        self.session.state = state._copy_with(energy=energy)

    def _check_expiry(self):
        state = self.session.state
        if state.is_over or not state.time_expired:
            return
        self.session.state = state.failed(FailureReason.TIME_EXPIRED)
        logger.warning("Session %s ran out of time at level %d",
                       self.session.session_id, state.level)

    def _advance_level(self):
        session = self.session
        state = session.state
        energy = min(self.config.max_energy, state.energy + self.config.level_bonus)
        next_level = state.level + 1
        logger.info("Session %s cleared level %d", session.session_id, state.level)

        session.state = state._copy_with(level=next_level, energy=energy, history=[])

        if next_level > self.config.total_levels:
            session.state = session.state._copy_with(phase=RunPhase.COMPLETED)
            session.score = self.config.scoring.score(session.state)
            logger.info("Session %s completed with score %d",
                        session.session_id, session.score)
            return

        session.bottle = session.generator.generate(next_level)

    def _update_loop_state(self):
        phase = self.session.state.phase
        if phase == RunPhase.COMPLETED:
            self.state = LoopState.COMPLETED
        elif phase == RunPhase.FAILED:
            if self.state != LoopState.FAILED:
                logger.info("Session %s failed: %s", self.session.session_id,
                            self.session.state.failure_reason.value)
            self.state = LoopState.FAILED

    def _guard(self, move: Move | None = None) -> TurnResult | None:
        """
        Result for commands that cannot be played, None if play can go on.

        The clock is polled first, so a command arriving after the budget
        ran out ends the run instead of being resolved.
        """
        if self.is_running:
            if self.check_time():
                return None
            state = self.session.state
            return TurnResult(
                success=False,
                loop_state=self.state,
                move=move,
                reason="Time ran out before the move",
                level=state.level,
                failure_reason=state.failure_reason,
            )

        state = self.session.state
        if self.state == LoopState.NOT_STARTED:
            reason = "The game has not started yet"
        else:
            reason = "The run is over - no moves allowed"
        return TurnResult(
            success=False,
            loop_state=self.state,
            outcome=MoveOutcome.INVALID_MOVE,
            move=move,
            reason=reason,
            level=state.level,
            failure_reason=state.failure_reason,
            score=self.session.score,
        )
