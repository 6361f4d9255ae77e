"""
Pydantic Schemas - Serializable records of a run.

These models are the contract with anything outside the engine that
stores or shows results, e.g. a high-score file or leaderboard.

ScoreRecord serializes with camelCase keys (timeUsed, energyRemaining)
when dumped with by_alias=True.
"""

from datetime import date as Date
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class RunStatus(str, Enum):
    """Run status values."""
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


class ScoreRecord(BaseModel):
    """One completed run, keyed by player."""
    player_id: str = Field(..., alias="playerId", description="Player name or id")
    score: int
    time_used: float = Field(..., alias="timeUsed", ge=0, description="Seconds used")
    energy_remaining: float = Field(..., alias="energyRemaining", ge=0)
    date: Date = Field(default_factory=Date.today)

    model_config = {"populate_by_name": True}


class RunSummary(BaseModel):
    """End-of-run (or in-progress) summary for display."""
    session_id: str
    player_name: str = "Player"
    status: RunStatus
    variant: str
    level_reached: int = Field(..., ge=1)
    total_levels: int = Field(..., ge=1)
    failure_reason: Optional[str] = Field(
        None, description="exhausted, shattered or time_expired"
    )
    score: Optional[int] = None
    time_used: float = Field(0.0, ge=0)
    energy_remaining: float = Field(0.0, ge=0)
