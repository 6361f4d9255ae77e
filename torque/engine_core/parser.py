"""
Move Parser - Turns one line of player input into a Move.

Grammar (case-insensitive):
- Direction: "ACW" anywhere in the line, otherwise "CW" anywhere
- Simple form: "<direction> <force>", e.g. "cw 25"
- Timed form: direction plus "<number>s" (hold time) and "<number>n"
  (force) in any order, e.g. "cw 20s 10n" or "10n acw 20s"

Failures never raise; they come back as a ParseResult carrying the
outcome tag the resolver would use and a reason for the player.
"""

from __future__ import annotations
import math
import re
from dataclasses import dataclass

from .state import Direction
from .move import MAX_FORCE, Move, MoveOutcome

_NUMBER = r"(-?\d+(?:\.\d+)?)"
_DURATION_RE = re.compile(_NUMBER + r"S")
_FORCE_RE = re.compile(_NUMBER + r"N")


@dataclass
class ParseResult:
    """Result of parsing a command line."""
    success: bool
    move: Move | None = None
    outcome: MoveOutcome | None = None
    error: str | None = None

    @classmethod
    def ok(cls, move: Move) -> ParseResult:
        return cls(success=True, move=move)

    @classmethod
    def failure(
        cls, error: str, outcome: MoveOutcome = MoveOutcome.INVALID_MOVE
    ) -> ParseResult:
        return cls(success=False, outcome=outcome, error=error)


def find_direction(text: str) -> Direction | None:
    """Direction token in a line. ACW is checked first since it contains CW."""
    upper = text.upper()
    if "ACW" in upper:
        return Direction.ANTICLOCKWISE
    if "CW" in upper:
        return Direction.CLOCKWISE
    return None


def parse_move(
    text: str,
    timed: bool = False,
    remaining_time: float | None = None,
) -> ParseResult:
    """
    Parse a command line.

    Args:
        text: Raw player input
        timed: Expect the timed form with hold time and force
        remaining_time: If given, hold times above it are rejected

    Returns:
        ParseResult with the move or an error
    """
    if timed:
        return _parse_timed(text, remaining_time)
    return _parse_simple(text)


def _parse_simple(text: str) -> ParseResult:
    parts = text.strip().split()
    if len(parts) < 2:
        return ParseResult.failure("Invalid command. Use 'cw 10' or 'acw 20'.")

    token = parts[0].upper()
    if token not in {d.value for d in Direction}:
        return ParseResult.failure(f"Unknown direction '{parts[0]}'. Use CW or ACW.")

    try:
        force = int(parts[1])
    except ValueError:
        return ParseResult.failure(f"Force must be a whole number, got '{parts[1]}'.")

    if force <= 0:
        return ParseResult.failure("Force must be greater than zero.")
    if force > MAX_FORCE:
        return ParseResult.failure(f"Force must be at most {MAX_FORCE}.")

    return ParseResult.ok(Move(direction=Direction(token), force=force))


def _parse_timed(text: str, remaining_time: float | None) -> ParseResult:
    upper = text.upper()

    direction = find_direction(upper)
    if direction is None:
        return ParseResult.failure("Missing direction. Include CW or ACW.")

    duration_match = _DURATION_RE.search(upper)
    if not duration_match:
        return ParseResult.failure("Missing time. Add a hold time like '20s'.")

    force_match = _FORCE_RE.search(upper)
    if not force_match:
        return ParseResult.failure("Missing force. Add a force like '10n'.")

    duration = float(duration_match.group(1))
    force = float(force_match.group(1))

    if not (math.isfinite(duration) and math.isfinite(force)):
        return ParseResult.failure("Time and force must be finite numbers.")
    if duration <= 0:
        return ParseResult.failure("Time must be greater than zero.")
    if force <= 0:
        return ParseResult.failure("Force must be greater than zero.")
    if force > MAX_FORCE:
        return ParseResult.failure(f"Force must be at most {MAX_FORCE}N.")

    if remaining_time is not None and duration > remaining_time:
        return ParseResult.failure(
            f"Not enough time: {duration:g}s requested, {remaining_time:g}s left.",
            outcome=MoveOutcome.INSUFFICIENT_TIME,
        )

    return ParseResult.ok(Move(direction=direction, force=force, duration=duration))
