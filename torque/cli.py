"""
Torque CLI - Play The Torque Paradox in a terminal.

Usage:
    torque play [--variant simple|time_weighted] [--seed N]   Play a run
    torque rules [--variant ...]                               Show the rules

One command per line on standard input; end of input abandons the run.
"""

import argparse
import sys

from .config import GameConfig, Variant
from .logger_config import configure_logging
from .messages import describe_failure, describe_turn, rules_text
from .session import GameLoop, LoopState, SessionManager


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="The Torque Paradox - open ten stuck bottles",
        prog="torque",
    )
    parser.add_argument("--log-level", help="Logging level (default: TORQUE_LOG_LEVEL or WARNING)")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    variants = [v.value for v in Variant]

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a run")
    play_parser.add_argument("--variant", choices=variants, help="Game variant")
    play_parser.add_argument("--seed", type=int, help="Seed for bottle generation")
    play_parser.add_argument("--time-budget", type=float, help="Seconds for the whole run")
    play_parser.add_argument("--player", default="Player", help="Player name")
    play_parser.add_argument("--json", action="store_true", help="Print the score record as JSON")

    # Rules command
    rules_parser = subparsers.add_parser("rules", help="Show the rules")
    rules_parser.add_argument("--variant", choices=variants, help="Game variant")

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.command == "play":
        cmd_play(args)
    elif args.command == "rules":
        cmd_rules(args)
    else:
        parser.print_help()
        sys.exit(1)


def _load_config(args) -> GameConfig:
    try:
        return GameConfig.from_env(
            variant=getattr(args, "variant", None),
            random_seed=getattr(args, "seed", None),
            time_budget=getattr(args, "time_budget", None),
        )
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)


def cmd_rules(args):
    """Print the rules."""
    config = _load_config(args)
    print(rules_text(config.total_levels, config.time_budget, timed=config.timed_moves))


def cmd_play(args):
    """Play one run reading commands from stdin."""
    config = _load_config(args)
    manager = SessionManager()
    session = manager.create_session(config, player_name=args.player)
    loop = GameLoop(session)

    loop.start()
    print(f"Level {session.state.level} started. Good luck.")

    while loop.check_time():
        print(_status_line(loop))
        print("Action > ", end="", flush=True)
        line = sys.stdin.readline()
        if not line:
            print()
            print("Run abandoned.")
            manager.end_session(session.session_id, reason="abandoned")
            return

        if not line.strip():
            continue

        result = loop.submit(line)
        print(describe_turn(result))
        if result.level_completed and loop.is_running:
            print(f"Level {session.state.level} started.")

    _print_ending(loop, args)
    manager.end_session(session.session_id, reason=loop.state.value)

    if sys.stdin.isatty():
        print("\nPress ENTER to exit...")
        sys.stdin.readline()


def _status_line(loop: GameLoop) -> str:
    snap = loop.snapshot()
    return (
        f"Level {snap.level}/{snap.total_levels} | "
        f"Time left: {snap.seconds_left}s | "
        f"Energy: {int(snap.energy)}/{int(snap.max_energy)}"
    )


def _print_ending(loop: GameLoop, args):
    summary = loop.summary()

    if loop.state == LoopState.COMPLETED:
        print("CONGRATULATIONS! YOU OPENED ALL BOTTLES!")
        print(f"Final Score: {summary.score}")
        if args.json:
            print(loop.score_record().model_dump_json(by_alias=True))
        return

    print("GAME OVER")
    print(f"Reason: {describe_failure(loop.session.state.failure_reason)}")
    print(f"You reached Level {summary.level_reached}")


if __name__ == "__main__":
    main()
