"""
Skull CLI - Command-line interface for the engine.

Usage:
    skull new [--players N] [--seed S] [--viewer P]   Start a game and show its state
    skull limits                                     Show the rule limits
"""

import argparse
import json
import logging
import random
import sys

from . import config


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Skull - bluffing card game rules engine",
        prog="skull",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # New game command
    new_parser = subparsers.add_parser("new", help="Start a game and show its state")
    new_parser.add_argument("--players", type=int, default=3, help="Number of players (3-6)")
    new_parser.add_argument("--seed", type=int, help="Random seed for discards")
    new_parser.add_argument("--viewer", type=int, help="Show the game from this seat")

    # Limits command
    subparsers.add_parser("limits", help="Show the rule limits")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=config.SKULL_LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "new":
        cmd_new(args)
    elif args.command == "limits":
        cmd_limits(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_new(args):
    """Start a game and print the view and the first expected input."""
    from .engine_core import Game
    from .schemas import build_game_state, event_info

    rng = random.Random(args.seed) if args.seed is not None else None
    try:
        game = Game(args.players, rng=rng)
        view = build_game_state(game, viewer=args.viewer)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(view.model_dump_json(indent=2))
    print(f"Next: {event_info(game.what_next()).model_dump_json()}")


def cmd_limits(args):
    """Print the rule limits."""
    from .engine_core import (
        Hand, MIN_PLAYERS, MAX_PLAYERS, WINNING_SCORE, PILE_CAPACITY,
    )

    print(json.dumps({
        "players": [MIN_PLAYERS, MAX_PLAYERS],
        "starting_hand": [card.value for card in Hand.full().as_list()],
        "pile_capacity": PILE_CAPACITY,
        "winning_score": WINNING_SCORE,
    }, indent=2))


if __name__ == "__main__":
    main()
