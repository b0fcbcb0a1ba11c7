# Command-line launcher for the Snake window.
from __future__ import annotations

import argparse
import logging

try:
    from .game_logic import APPLE_STRATEGIES, Direction, GameConfig
    from .snake_gui import run_player_gui
except ImportError:
    from game_logic import APPLE_STRATEGIES, Direction, GameConfig
    from snake_gui import run_player_gui


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play Snake")
    defaults = GameConfig()
    parser.add_argument("--width", type=int, default=defaults.width, help="Grid width in cells")
    parser.add_argument("--height", type=int, default=defaults.height, help="Grid height in cells")
    parser.add_argument(
        "--interval",
        type=float,
        default=defaults.move_interval,
        help="Seconds between snake moves",
    )
    parser.add_argument(
        "--apple-strategy",
        choices=APPLE_STRATEGIES,
        default=defaults.apple_strategy,
        help="How new apples are placed",
    )
    parser.add_argument(
        "--direction",
        type=Direction.parse,
        default=defaults.initial_direction,
        help="Starting heading: up, down, left or right",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible apples")
    parser.add_argument("--verbose", action="store_true", help="Log game events")
    return parser.parse_args(argv)


def config_from_args(args: argparse.Namespace) -> GameConfig:
    try:
        return GameConfig(
            width=args.width,
            height=args.height,
            move_interval=args.interval,
            apple_strategy=args.apple_strategy,
            initial_direction=args.direction,
            seed=args.seed,
        )
    except ValueError as exc:
        raise SystemExit(f"Invalid settings: {exc}")


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    run_player_gui(config_from_args(args))


if __name__ == "__main__":
    main()
