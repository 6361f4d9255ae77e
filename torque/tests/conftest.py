"""
Pytest fixtures for Torque tests.
"""

import pytest

from ..config import GameConfig
from ..engine_core.state import Bottle, Direction, RunState
from ..session import GameLoop, SessionManager


class StubRandom:
    """Random source with fixed picks."""

    def __init__(self, pick: int = 0, offset: int = 0):
        self.pick = pick
        self.offset = offset

    def choice(self, seq):
        return seq[self.pick]

    def randrange(self, stop):
        assert 0 <= self.offset < stop
        return self.offset


class FixedGenerator:
    """Generates the same clockwise-locked bottle for every level."""

    def __init__(self, required_force: int = 30, max_capacity: int = 60):
        self.required_force = required_force
        self.max_capacity = max_capacity
        self.levels: list[int] = []

    def generate(self, level: int) -> Bottle:
        self.levels.append(level)
        return Bottle(
            locked_direction=Direction.CLOCKWISE,
            required_force=self.required_force,
            max_capacity=self.max_capacity,
        )


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def bottle() -> Bottle:
    """Clockwise-locked bottle needing 30N, breaking above 50N."""
    return Bottle(
        locked_direction=Direction.CLOCKWISE,
        required_force=30,
        max_capacity=50,
    )


@pytest.fixture
def run_state() -> RunState:
    """Fresh run at level 1 with full energy."""
    return RunState(level=1, energy=100, time_budget=300)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def manager() -> SessionManager:
    return SessionManager()


@pytest.fixture
def simple_loop(manager, clock) -> GameLoop:
    """Started simple-variant loop with predictable bottles."""
    session = manager.create_session(GameConfig.simple())
    session.generator = FixedGenerator()
    loop = GameLoop(session, clock=clock)
    loop.start()
    return loop


@pytest.fixture
def timed_loop(manager, clock) -> GameLoop:
    """Started time-weighted loop with a 30s budget and predictable bottles."""
    session = manager.create_session(GameConfig.time_weighted(time_budget=30))
    session.generator = FixedGenerator()
    loop = GameLoop(session, clock=clock)
    loop.start()
    return loop
