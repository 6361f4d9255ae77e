"""
Bottle Generator - Fresh hidden physics for each level.

Difficulty curve:
- Required force grows 5N per level, plus up to 19N of random offset
- Safety margin (capacity / required force) shrinks from 1.92 at level 1
  to 1.20 at level 10, so later bottles break close to the opening force

The random source is injected so tests and replays are deterministic.
Anything with random.Random's choice() and randrange() works.
"""

from __future__ import annotations
import logging
import random
from dataclasses import dataclass, field
from typing import Any

from .state import Bottle, Direction

logger = logging.getLogger(__name__)

BASE_FORCE = 20
FORCE_PER_LEVEL = 5
FORCE_OFFSET_RANGE = 20

# Margin in whole percent keeps floor() exact
MARGIN_BASE_PERCENT = 200
MARGIN_STEP_PERCENT = 8
MIN_MARGIN_PERCENT = 100


def base_force(level: int) -> int:
    """Minimum required force before the random offset."""
    return BASE_FORCE + FORCE_PER_LEVEL * level


def _margin_percent(level: int) -> int:
    # Clamped so capacity never drops below required force at high levels
    return max(MIN_MARGIN_PERCENT, MARGIN_BASE_PERCENT - MARGIN_STEP_PERCENT * level)


def safety_margin(level: int) -> float:
    """Ratio of breaking capacity to required force for a level."""
    return _margin_percent(level) / 100


def generate_bottle(level: int, rng: Any = None) -> Bottle:
    """
    Generate a sealed bottle for a level.

    Args:
        level: Level number, starting at 1
        rng: Random source (defaults to the module-level random generator)

    Returns:
        Bottle with no jam, still closed
    """
    if level < 1:
        raise ValueError(f"Level must be at least 1, got {level}")

    rng = rng or random
    locked = rng.choice([Direction.CLOCKWISE, Direction.ANTICLOCKWISE])
    required = base_force(level) + rng.randrange(FORCE_OFFSET_RANGE)
    capacity = required * _margin_percent(level) // 100

    bottle = Bottle(
        locked_direction=locked,
        required_force=required,
        max_capacity=capacity,
    )
    logger.debug(
        "Generated level %d bottle: locked=%s required=%d capacity=%d",
        level, locked.value, required, capacity,
    )
    return bottle


@dataclass
class BottleGenerator:
    """
    Seedable bottle factory owned by a session.

    Usage:
        generator = BottleGenerator(seed=42)
        bottle = generator.generate(level=1)
    """
    seed: int | None = None
    rng: random.Random = field(init=False, repr=False)

    def __post_init__(self):
        self.rng = random.Random(self.seed)

    def generate(self, level: int) -> Bottle:
        return generate_bottle(level, self.rng)
