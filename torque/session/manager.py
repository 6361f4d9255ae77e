"""
Session Manager - Creates and tracks runs.

LIFECYCLE:
1. Player starts a run -> session created with a fresh RunState
2. Game loop generates the level 1 bottle
3. Each cleared level discards the bottle and generates the next one
4. Run completes or fails -> session ended and dropped
5. Restart -> new session with the same configuration
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
import uuid
import time

from ..config import GameConfig
from ..engine_core.state import Bottle, RunState
from ..engine_core.generator import BottleGenerator

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """
    One run of the game.

    The run state and bottle are mutated only by the game loop, which
    takes them from the resolver. Everything else reads them.
    """
    session_id: str
    config: GameConfig
    created_at: float
    state: RunState
    generator: BottleGenerator

    player_name: str = "Player"
    bottle: Bottle | None = None

    # Set when the run completes
    score: int | None = None

    def is_active(self) -> bool:
        """Check if the run is still being played."""
        return not self.state.is_over


class SessionManager:
    """
    Manages sessions.

    Responsibilities:
    - Create sessions from a configuration
    - Track live sessions
    - Restart and clean up

    No persistence - sessions are in-memory only.
    """

    def __init__(self):
        self._sessions: dict[str, Session] = {}

    def create_session(
        self,
        config: GameConfig | None = None,
        player_name: str = "Player",
    ) -> Session:
        """
        Create a new session.

        Args:
            config: Run configuration (simple variant if omitted)
            player_name: Display name, also the score record key

        Returns:
            Session waiting for its game loop to start
        """
        config = config or GameConfig.simple()

        session = Session(
            session_id=str(uuid.uuid4()),
            config=config,
            created_at=time.time(),
            state=RunState(
                level=1,
                energy=config.starting_energy,
                time_budget=config.time_budget,
            ),
            generator=BottleGenerator(seed=config.random_seed),
            player_name=player_name,
        )

        self._sessions[session.session_id] = session
        logger.info(
            "Created session %s (%s variant)", session.session_id, config.variant.value
        )
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "completed") -> bool:
        """
        End a session and forget it.

        Returns False if the session did not exist.
        """
        session = self._sessions.pop(session_id, None)
        if not session:
            return False

        logger.info("Ended session %s: %s", session_id, reason)
        session.bottle = None
        return True

    def restart_session(self, session_id: str) -> Session:
        """Replace a session with a fresh one using the same configuration."""
        session = self._sessions.get(session_id)
        if not session:
            raise ValueError(f"Session {session_id} not found")

        self.end_session(session_id, reason="restarted")
        return self.create_session(session.config, player_name=session.player_name)

    def list_active_sessions(self) -> list[str]:
        """List IDs of sessions still in play."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]
