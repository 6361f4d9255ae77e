"""
Game configuration.

A run is configured by picking a variant preset and optionally overriding
pieces of it. Environment variables:
    TORQUE_VARIANT       simple | time_weighted (default: simple)
    TORQUE_SEED          integer seed for bottle generation
    TORQUE_TIME_BUDGET   total time for the run (default: 300)
    TORQUE_LOG_LEVEL     logging level (default: WARNING)
"""

from __future__ import annotations
import os
from dataclasses import dataclass, field
from enum import Enum

from .engine_core.costs import CostModel, SimpleCostModel, TimeWeightedCostModel
from .engine_core.scoring import ScoringPolicy, SimpleScoring, TimeWeightedScoring

TOTAL_LEVELS = 10
TIME_BUDGET = 300
MAX_ENERGY = 100
LEVEL_BONUS = 20
TIME_WEIGHTED_REGEN_RATE = 0.5

LOG_LEVEL = os.getenv("TORQUE_LOG_LEVEL", "WARNING")


class Variant(Enum):
    """Game variants."""
    SIMPLE = "simple"
    TIME_WEIGHTED = "time_weighted"


@dataclass
class GameConfig:
    """
    Configuration for one run.

    In the simple variant time is the wall clock. In the time-weighted
    variant time only passes by holding force, and every move carries a
    hold time.
    """
    variant: Variant = Variant.SIMPLE
    total_levels: int = TOTAL_LEVELS
    time_budget: float = TIME_BUDGET
    starting_energy: float = MAX_ENERGY
    max_energy: float = MAX_ENERGY
    level_bonus: float = LEVEL_BONUS

    # Energy regained per unit of elapsed time
    passive_regen_rate: float = 0.0

    cost_model: CostModel = field(default_factory=SimpleCostModel)
    scoring: ScoringPolicy = field(default_factory=SimpleScoring)

    random_seed: int | None = None

    def __post_init__(self):
        if self.total_levels < 1:
            raise ValueError("total_levels must be at least 1")
        if self.time_budget <= 0:
            raise ValueError("time_budget must be positive")
        if not 0 < self.starting_energy <= self.max_energy:
            raise ValueError("starting_energy must be in (0, max_energy]")

    @property
    def timed_moves(self) -> bool:
        """Moves carry a hold time that is charged to the clock."""
        return self.cost_model.requires_duration

    @classmethod
    def simple(cls, **overrides) -> GameConfig:
        """Half-force energy cost, wall clock, energy back only on level clear."""
        return cls(variant=Variant.SIMPLE, **overrides)

    @classmethod
    def time_weighted(cls, **overrides) -> GameConfig:
        """Hold-time energy cost, time spent by moves, passive regeneration."""
        options = {
            "cost_model": TimeWeightedCostModel(),
            "scoring": TimeWeightedScoring(),
            "passive_regen_rate": TIME_WEIGHTED_REGEN_RATE,
        }
        options.update(overrides)
        return cls(variant=Variant.TIME_WEIGHTED, **options)

    @classmethod
    def for_variant(cls, variant: Variant | str, **overrides) -> GameConfig:
        """Build the preset for a variant name."""
        try:
            variant = Variant(variant)
        except ValueError:
            names = ", ".join(v.value for v in Variant)
            raise ValueError(f"Unknown variant '{variant}'. Choose one of: {names}")

        if variant == Variant.TIME_WEIGHTED:
            return cls.time_weighted(**overrides)
        return cls.simple(**overrides)

    @classmethod
    def from_env(cls, **overrides) -> GameConfig:
        """Build a config from TORQUE_* environment variables."""
        variant = overrides.pop("variant", None) or os.getenv(
            "TORQUE_VARIANT", Variant.SIMPLE.value
        )

        options = {}
        seed = os.getenv("TORQUE_SEED")
        if seed:
            options["random_seed"] = int(seed)
        time_budget = os.getenv("TORQUE_TIME_BUDGET")
        if time_budget:
            options["time_budget"] = float(time_budget)

        options.update({k: v for k, v in overrides.items() if v is not None})
        return cls.for_variant(variant, **options)
