"""
Session Module - Manages one play-through of the bottles.

A session represents one run:
- Created when the player starts a game
- Owns the run state and exactly one live bottle
- Replaces the bottle each time a level is cleared
- Discarded when the run ends or the player restarts

Sessions are EPHEMERAL: nothing is written to disk.
"""

from .manager import SessionManager, Session
from .game_loop import GameLoop, LoopState, TurnResult, Snapshot

__all__ = [
    "SessionManager",
    "Session",
    "GameLoop",
    "LoopState",
    "TurnResult",
    "Snapshot",
]
