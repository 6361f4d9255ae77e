"""
Run State - The bottle under the player's hands and the run around it.

Design principles:
- Immutable-friendly: all mutations return new state
- Hidden physics: lock direction, required force and capacity never change
  after generation; only the resolver touches tightness and the open flag
- One live bottle per run; it is replaced when the level advances
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any
from enum import Enum


class Direction(Enum):
    """Twist directions. The value is the command token."""
    CLOCKWISE = "CW"
    ANTICLOCKWISE = "ACW"

    @property
    def opposite(self) -> Direction:
        if self is Direction.CLOCKWISE:
            return Direction.ANTICLOCKWISE
        return Direction.CLOCKWISE


class RunPhase(Enum):
    """High-level run phases."""
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


class FailureReason(Enum):
    """Why a run ended in failure."""
    EXHAUSTED = "exhausted"
    SHATTERED = "shattered"
    TIME_EXPIRED = "time_expired"


@dataclass
class Bottle:
    """
    One sealed cap puzzle.

    locked_direction is the way that TIGHTENS the cap; the player has to
    twist the opposite way. max_capacity is the force above which the glass
    breaks, whichever way the force is applied.
    """
    locked_direction: Direction
    required_force: int
    max_capacity: int
    current_tightness: float = 0
    is_open: bool = False

    @property
    def opening_direction(self) -> Direction:
        return self.locked_direction.opposite

    @property
    def is_jammed(self) -> bool:
        return self.current_tightness > 0

    def with_tightness(self, tightness: float) -> Bottle:
        """Return new bottle with a different jam."""
        return self._copy_with(current_tightness=tightness)

    def opened(self) -> Bottle:
        """Return new bottle with the cap off and no jam."""
        return self._copy_with(current_tightness=0, is_open=True)

    def _copy_with(self, **kwargs) -> Bottle:
        return Bottle(
            locked_direction=self.locked_direction,
            required_force=self.required_force,
            max_capacity=self.max_capacity,
            current_tightness=kwargs.get("current_tightness", self.current_tightness),
            is_open=kwargs.get("is_open", self.is_open),
        )


@dataclass
class RunState:
    """
    The budgets and progress of one run across all levels.

    Time is shared by the whole run, not per level. Energy is kept within
    [0, max_energy] by whoever changes it.
    """
    level: int = 1
    energy: float = 100
    time_budget: float = 300
    elapsed_time: float = 0

    phase: RunPhase = RunPhase.IN_PROGRESS
    failure_reason: FailureReason | None = None

    # Moves made against the current bottle (cleared on level advance)
    history: list[Any] = field(default_factory=list)

    @property
    def remaining_time(self) -> float:
        return max(0, self.time_budget - self.elapsed_time)

    @property
    def is_over(self) -> bool:
        return self.phase != RunPhase.IN_PROGRESS

    @property
    def time_expired(self) -> bool:
        return self.elapsed_time >= self.time_budget

    def failed(self, reason: FailureReason) -> RunState:
        """Return new state ended in failure."""
        return self._copy_with(phase=RunPhase.FAILED, failure_reason=reason)

    def with_move(self, record: Any) -> RunState:
        """Return new state with a move appended to the history."""
        return self._copy_with(history=self.history + [record])

    def _copy_with(self, **kwargs) -> RunState:
        """Create a copy with some fields replaced."""
        return RunState(
            level=kwargs.get("level", self.level),
            energy=kwargs.get("energy", self.energy),
            time_budget=kwargs.get("time_budget", self.time_budget),
            elapsed_time=kwargs.get("elapsed_time", self.elapsed_time),
            phase=kwargs.get("phase", self.phase),
            failure_reason=kwargs.get("failure_reason", self.failure_reason),
            history=kwargs.get("history", self.history),
        )
