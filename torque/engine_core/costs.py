"""
Cost Models - How much energy a move burns.

Two models exist:
- Simple: half the force, rounded up
- Time-weighted: holding a force longer is cheaper, short violent bursts
  carry a danger surcharge
"""

from __future__ import annotations
import math
from abc import ABC, abstractmethod

from .move import Move


class CostModel(ABC):
    """Interface for move energy cost."""

    requires_duration: bool = False

    @abstractmethod
    def energy_cost(self, move: Move) -> int:
        """Energy charged for a move. The move is already validated."""
        pass


class SimpleCostModel(CostModel):
    """ceil(force / 2). 50N costs 25 energy."""

    def energy_cost(self, move: Move) -> int:
        return math.ceil(move.force / 2)


class TimeWeightedCostModel(CostModel):
    """
    Duration-scaled cost.

    The half-force base is divided by max(0.5, duration / 10): a 20s hold
    halves the cost, anything under 5s doubles it. Forces above 50N held
    for under 5s pay an extra ceil(force / 10).
    """

    requires_duration = True

    MIN_TIME_SCALING = 0.5
    DURATION_UNIT = 10
    DANGER_FORCE = 50
    DANGER_DURATION = 5

    def energy_cost(self, move: Move) -> int:
        duration = move.duration or 0
        scaling = max(self.MIN_TIME_SCALING, duration / self.DURATION_UNIT)
        base = math.ceil(move.force / 2)
        cost = math.ceil(base / scaling)
        if move.force > self.DANGER_FORCE and duration < self.DANGER_DURATION:
            cost += math.ceil(move.force / 10)
        return cost
