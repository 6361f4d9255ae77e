"""
Scoring Policies - Final score for a completed run.

Both reward time left on the clock and energy left in the tank:
- Simple: whole seconds left x 10, plus whole energy. A second only
  counts as used once it has fully passed.
- Time-weighted: time left x 100, plus energy x 10
"""

from __future__ import annotations
import math
from abc import ABC, abstractmethod

from .state import RunState


def whole_seconds_left(time_budget: float, elapsed_time: float) -> int:
    """Seconds left on the clock, counting only fully elapsed seconds as used."""
    return max(0, math.floor(time_budget - math.floor(elapsed_time)))


class ScoringPolicy(ABC):
    """Interface for scoring a completed run."""

    @abstractmethod
    def score(self, state: RunState) -> int:
        pass


class SimpleScoring(ScoringPolicy):
    def score(self, state: RunState) -> int:
        time_left = whole_seconds_left(state.time_budget, state.elapsed_time)
        return time_left * 10 + math.floor(state.energy)


class TimeWeightedScoring(ScoringPolicy):
    def score(self, state: RunState) -> int:
        time_left = max(0, state.time_budget - state.elapsed_time)
        return math.floor(time_left * 100) + math.floor(state.energy * 10)
