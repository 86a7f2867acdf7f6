#!/usr/bin/env python3
"""
Minefield engine - command line entry point.

Usage:
    python main.py presets
    python main.py simulate [--preset NAME | --width W --height H --mines M]
                            [--games N] [--seed S]
"""
import argparse
import logging

from src.minefield.settings import (
    BoardSettings,
    InvalidConfiguration,
    PRESETS,
    preset,
)
from src.minefield.agents import RandomAgent, Evaluator


logger = logging.getLogger(__name__)


def list_presets(args: argparse.Namespace) -> None:
    """Print the description of every preset."""
    for settings in PRESETS:
        print(settings.description)


def settings_from_args(
    parser: argparse.ArgumentParser, args: argparse.Namespace
) -> BoardSettings:
    """Resolve board settings from either a preset name or custom values."""
    custom = (args.width, args.height, args.mines)
    if any(value is not None for value in custom):
        if any(value is None for value in custom):
            parser.error("--width, --height and --mines must be given together")
        try:
            return BoardSettings.custom(args.width, args.height, args.mines)
        except InvalidConfiguration as exc:
            parser.error(str(exc))
    try:
        return preset(args.preset)
    except KeyError:
        parser.error(f"Unknown preset: {args.preset}")


def simulate(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    """Play random games and print the outcome metrics."""
    if args.games < 1:
        parser.error("--games must be at least 1")
    settings = settings_from_args(parser, args)
    agent = RandomAgent(settings.height, settings.width, seed=args.seed)
    evaluator = Evaluator(settings, num_episodes=args.games, seed=args.seed)

    logger.info("Simulating %d games on %s", args.games, settings.description)
    results = evaluator.evaluate(agent)

    print(f"Results on {settings.description}:")
    print(f"  Win rate: {results['win_rate']:.1%}")
    print(f"  Avg reward: {results['avg_reward']:.2f}")
    print(f"  Avg steps: {results['avg_steps']:.1f}")
    print(f"  Avg revealed: {results['avg_revealed']:.1f} tiles")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Minefield engine - presets and game simulation"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    subparsers.add_parser("presets", help="List the board presets")

    simulate_parser = subparsers.add_parser(
        "simulate", help="Play random games and report win rate"
    )
    simulate_parser.add_argument(
        "--preset", default="beginner", help="Preset name (beginner, intermediate, expert)"
    )
    simulate_parser.add_argument("--width", type=int, help="Custom board width")
    simulate_parser.add_argument("--height", type=int, help="Custom board height")
    simulate_parser.add_argument("--mines", type=int, help="Custom mine count")
    simulate_parser.add_argument(
        "--games", type=int, default=100, help="Number of games to play"
    )
    simulate_parser.add_argument(
        "--seed", type=int, default=None, help="Random seed"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "presets":
        list_presets(args)
    elif args.command == "simulate":
        simulate(simulate_parser, args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
