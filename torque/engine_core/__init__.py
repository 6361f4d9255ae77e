"""
Engine Core - Bottle physics and move resolution.

The engine is the runtime that:
1. Generates a bottle for a level
2. Parses player commands into moves
3. Charges the energy cost of a move
4. Resolves the move against the bottle
"""

from .state import Bottle, Direction, FailureReason, RunPhase, RunState
from .move import Move, MoveOutcome, MoveRecord, MoveResult
from .generator import BottleGenerator, base_force, generate_bottle, safety_margin
from .costs import CostModel, SimpleCostModel, TimeWeightedCostModel
from .resolver import MoveResolver, resolve_move
from .parser import ParseResult, parse_move
from .scoring import ScoringPolicy, SimpleScoring, TimeWeightedScoring

__all__ = [
    "Bottle",
    "Direction",
    "FailureReason",
    "MoveRecord",
    "RunPhase",
    "RunState",
    "Move",
    "MoveOutcome",
    "MoveResult",
    "BottleGenerator",
    "base_force",
    "generate_bottle",
    "safety_margin",
    "CostModel",
    "SimpleCostModel",
    "TimeWeightedCostModel",
    "MoveResolver",
    "resolve_move",
    "ParseResult",
    "parse_move",
    "ScoringPolicy",
    "SimpleScoring",
    "TimeWeightedScoring",
]
