"""
Moves - Parsed player moves, move outcomes and results.

A move is one twist of the cap: a direction, a force in newtons and, in the
time-weighted variant, how long the force is held. Every resolved move
produces exactly one MoveOutcome.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from .state import Bottle, Direction, RunState

# Far beyond any bottle capacity; larger values are refused before costing
MAX_FORCE = 1_000_000


class MoveOutcome(Enum):
    """Tagged result of resolving one move."""
    # Rejected before anything changed
    INVALID_MOVE = "invalid_move"
    INSUFFICIENT_TIME = "insufficient_time"

    # Run-ending
    EXHAUSTED = "exhausted"
    SHATTERED = "shattered"

    # Jam bookkeeping
    JAMMED = "jammed"
    JAM_REDUCED = "jam_reduced"
    JAM_CLEARED = "jam_cleared"

    # Opening attempts
    TOO_WEAK = "too_weak"
    OPENED = "opened"

    @property
    def is_rejection(self) -> bool:
        """The move was discarded and nothing was charged."""
        return self in {MoveOutcome.INVALID_MOVE, MoveOutcome.INSUFFICIENT_TIME}


@dataclass(frozen=True)
class Move:
    """
    A well-typed move, ready for the resolver.

    direction may be None when a caller builds a move by hand; the resolver
    rejects it. duration is None in the simple variant.
    """
    direction: Direction | None
    force: float
    duration: float | None = None

    @classmethod
    def cw(cls, force: float, duration: float | None = None) -> Move:
        """Factory for a clockwise move."""
        return cls(direction=Direction.CLOCKWISE, force=force, duration=duration)

    @classmethod
    def acw(cls, force: float, duration: float | None = None) -> Move:
        """Factory for an anticlockwise move."""
        return cls(direction=Direction.ANTICLOCKWISE, force=force, duration=duration)

    def describe(self) -> str:
        direction = self.direction.value if self.direction else "?"
        text = f"{direction} {self.force:g}N"
        if self.duration is not None:
            text += f" for {self.duration:g}s"
        return text


@dataclass(frozen=True)
class MoveRecord:
    """A resolved move kept in the run history."""
    move: Move
    outcome: MoveOutcome
    energy_cost: int = 0


@dataclass
class MoveResult:
    """
    Result of resolving a move.

    Contains:
    - The outcome tag
    - The bottle and run state after the move (unchanged objects on rejection)
    - The energy charged
    - A reason for rejections
    """
    outcome: MoveOutcome
    bottle: Bottle
    state: RunState
    energy_cost: int = 0
    reason: str | None = None

    @property
    def accepted(self) -> bool:
        return not self.outcome.is_rejection

    @classmethod
    def rejected(
        cls,
        outcome: MoveOutcome,
        bottle: Bottle,
        state: RunState,
        reason: str,
    ) -> MoveResult:
        """Create a rejection that leaves bottle and state untouched."""
        return cls(outcome=outcome, bottle=bottle, state=state, reason=reason)
