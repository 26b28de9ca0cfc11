"""Command line entrypoint: generate boards and inspect campaign progress."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import List, Tuple

from squart.components.orientation import Orientation
from squart.constants import DEFAULT_COLS, DEFAULT_ROWS
from squart.events.bus import EventBus
from squart.exceptions import SquartError
from squart.systems.board_generator import GenerationConfig
from squart.systems.board_system import BoardSystem
from squart.systems.campaign_progress_system import CampaignProgressSystem
from squart.utils.logger import configure_logging
from squart.utils.pretty import print_board_stats
from squart.world import create_world


def parse_position(text: str) -> Tuple[int, int]:
    """Parse ``ROW,COL`` into a coordinate pair."""
    try:
        row, col = (int(part) for part in text.split(","))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected ROW,COL, got {text!r}") from exc
    return row, col


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Squart domino tiling boards")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    generate = commands.add_parser("generate", help="Generate a board and print it")
    generate.add_argument("--rows", type=int, default=DEFAULT_ROWS, help="Board height in cells")
    generate.add_argument("--cols", type=int, default=DEFAULT_COLS, help="Board width in cells")
    generate.add_argument("--seed", type=str, default=None, help="Seed for a reproducible board")
    generate.add_argument(
        "--inactive",
        type=float,
        default=None,
        help="Inactive percentage of playable cells (default: random 17-19%%)",
    )
    generate.add_argument(
        "--balanced",
        action="store_true",
        help="Retry unseeded boards until move counts are balanced",
    )
    generate.add_argument(
        "--place",
        type=parse_position,
        action="append",
        default=[],
        metavar="ROW,COL",
        help="Place a domino for the player to move (repeatable)",
    )
    generate.add_argument("--json", action="store_true", help="Print a JSON snapshot instead of the grid")

    campaign = commands.add_parser("campaign", help="Inspect or edit campaign progress")
    campaign.add_argument("--save-path", type=Path, default=None, help="Progress file")
    actions = campaign.add_subparsers(dest="action", required=True)
    actions.add_parser("show", help="Print campaign status")
    complete = actions.add_parser("complete", help="Record a mission result")
    complete.add_argument("city")
    complete.add_argument("neighborhood")
    complete.add_argument(
        "--winner",
        type=str,
        choices=[orientation.value for orientation in Orientation],
        default=None,
        help="Winning orientation (omit for a draw)",
    )
    actions.add_parser("reset", help="Forget all campaign progress")
    return parser


def _run_generate(args: argparse.Namespace) -> None:
    event_bus = EventBus()
    world = create_world(event_bus)
    board_system = BoardSystem(world, event_bus)
    config = GenerationConfig(
        rows=args.rows,
        cols=args.cols,
        seed=args.seed or None,
        inactive_percentage=args.inactive,
    )
    board_system.generate(config, balanced=args.balanced)

    rejected: List[Tuple[int, int]] = []
    for row, col in args.place:
        if board_system.place(row, col) is None:
            rejected.append((row, col))

    snapshot = board_system.snapshot()
    if args.json:
        print(json.dumps(snapshot, indent=2))
    else:
        print_board_stats(snapshot)
    for row, col in rejected:
        print(f"Rejected placement at {row},{col}")


def _run_campaign(args: argparse.Namespace) -> None:
    event_bus = EventBus()
    world = create_world(event_bus)
    system = CampaignProgressSystem(world, event_bus, save_path=args.save_path)

    if args.action == "reset":
        system.reset_progress()
    elif args.action == "complete":
        system.complete_mission(args.city, args.neighborhood, args.winner)

    state = system.state()
    for city in state["cities"]:
        flags = []
        if not city["unlocked"]:
            flags.append("locked")
        if city["completed"]:
            flags.append(f"completed, winner {city['city_winner'] or 'none'}")
        suffix = f" ({'; '.join(flags)})" if flags else ""
        print(f"{city['name']} [{city['id']}] {city['completed_count']}/{city['total_count']}{suffix}")
        for hood in city["neighborhoods"]:
            winner = f" -> {hood['winner']}" if hood["winner"] else ""
            print(f"  {hood['status']:<9} {hood['id']}{winner}")
    extra = state["extra_mission"]
    winner = f" -> {extra['winner']}" if extra["winner"] else ""
    print(f"Extra mission [{extra['id']}]: {extra['status']}{winner}")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.WARNING)
    configure_logging(level)

    try:
        if args.command == "generate":
            _run_generate(args)
        else:
            _run_campaign(args)
    except SquartError as exc:
        parser.error(str(exc))
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
