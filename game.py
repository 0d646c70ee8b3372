#!/usr/bin/env python3
"""Planet Wars - Match engine entry point.

Plays one match between two or more player programs that talk to the
engine over their standard streams, then prints the replay on stdout.
"""

import argparse
import logging
import sys

from pydantic import ValidationError

from planetwars.errors import PlanetWarsError
from planetwars.server import MatchConfig, MatchOrchestrator


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Planet Wars - referee a match between player programs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s maps/map1.txt 1000 200 match.log "python -m planetwars.bot.starter" "./mybot"
  %(prog)s maps/map1.txt 1000 200 "" bot1 bot2 bot3     # no match log
  %(prog)s --parallel maps/map1.txt 500 100 match.log bot1 bot2
        """,
    )
    parser.add_argument("map_file", help="Map in Point-in-Time format")
    parser.add_argument("max_turn_time", type=int, help="Time per turn per player, in ms")
    parser.add_argument("max_num_turns", type=int, help="Turn limit")
    parser.add_argument("log_filename", help="Match log file (empty string to disable)")
    parser.add_argument("players", nargs="+", help="Player commands, in seat order (at least 2)")
    parser.add_argument(
        "--parallel",
        action="store_true",
        help="Exchange with all players at once each turn",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    # stdout carries the replay, so diagnostics go to stderr
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="[%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    try:
        config = MatchConfig(
            map_path=args.map_file,
            turn_timeout_ms=args.max_turn_time,
            max_turns=args.max_num_turns,
            log_path=args.log_filename or None,
            player_commands=args.players,
            parallel_exchanges=args.parallel,
        )
    except ValidationError as e:
        print(f"ERROR: invalid arguments\n{e}", file=sys.stderr)
        return 1

    orchestrator = MatchOrchestrator(config, replay_stream=sys.stdout)
    try:
        orchestrator.run()
    except PlanetWarsError as e:
        print(f"ERROR: failed to start game: {e}", file=sys.stderr)
        return 1

    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
