"""
Player-facing text for outcomes.

Text is derived from outcome tags, never the other way round.
"""

from __future__ import annotations

from .engine_core.move import MoveOutcome
from .engine_core.state import FailureReason
from .session.game_loop import TurnResult

OUTCOME_MESSAGES = {
    MoveOutcome.INVALID_MOVE: "Invalid command.",
    MoveOutcome.INSUFFICIENT_TIME: "Not enough time left for that.",
    MoveOutcome.EXHAUSTED: "EXHAUSTED! You passed out before opening the bottle.",
    MoveOutcome.SHATTERED: "CRACK! You applied {force}N force. The bottle shattered!",
    MoveOutcome.JAMMED: "Applied {force}N. The cap feels tighter...",
    MoveOutcome.JAM_REDUCED: "Applied {force}N {direction}. Something gave a little.",
    MoveOutcome.JAM_CLEARED: "Applied {force}N {direction}. The jam cleared, but the cap held.",
    MoveOutcome.TOO_WEAK: "Applied {force}N {direction}. Not enough to budge it.",
    MoveOutcome.OPENED: "POP! The bottle opens.",
}

FAILURE_MESSAGES = {
    FailureReason.EXHAUSTED: "You ran out of energy.",
    FailureReason.SHATTERED: "The bottle shattered.",
    FailureReason.TIME_EXPIRED: "TIME'S UP! The bottle remained closed.",
}

RULES_TEXT = """\
THE TORQUE PARADOX

Open {levels} sealed bottles within {time_budget} seconds.

HOW BOTTLES WORK:
- Each cap is locked in one direction: CW or ACW
- Twist it the OPPOSITE way to open it
- Twisting the wrong way tightens the cap; that jam has to be undone first
- A twist only opens the cap if, after undoing the jam, it alone meets
  the force the bottle needs. Weak twists are wasted.

ENERGY & FORCE:
- Every twist costs energy: force / 2 (50N costs 25 energy)
- Not enough energy for a twist and you collapse: GAME OVER
- Clearing a level restores +20 energy (max 100)

BREAKAGE:
- Too much force shatters the bottle, whichever way you twist: GAME OVER
- Early bottles are forgiving, by level 10 the breaking point is close to
  the force needed

COMMANDS:
  cw <force>     e.g. 'cw 25'
  acw <force>    e.g. 'acw 30'
"""

TIMED_COMMANDS_TEXT = """\
TIMED COMMANDS:
  direction, hold time and force in any order, e.g. 'cw 20s 10n'
  Holding longer costs less energy; time is spent by holding.
  Over 50N held under 5s costs extra.
"""


def describe_turn(result: TurnResult) -> str:
    """Message for the player about one submitted command."""
    if result.outcome is None:
        return result.reason or FAILURE_MESSAGES[FailureReason.TIME_EXPIRED]

    if result.outcome.is_rejection:
        return result.reason or OUTCOME_MESSAGES[result.outcome]

    move = result.move
    text = OUTCOME_MESSAGES[result.outcome].format(
        force=f"{move.force:g}" if move else "?",
        direction=move.direction.value if move and move.direction else "",
    )
    if result.level_completed:
        text += f" LEVEL {result.level} COMPLETE!"
    return text


def describe_failure(reason: FailureReason | None) -> str:
    if reason is None:
        return ""
    return FAILURE_MESSAGES[reason]


def rules_text(levels: int, time_budget: float, timed: bool = False) -> str:
    text = RULES_TEXT.format(levels=levels, time_budget=f"{time_budget:g}")
    if timed:
        text += "\n" + TIMED_COMMANDS_TEXT
    return text
