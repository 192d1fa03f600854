from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from . import __version__
from .app import print_maze, run_auto, run_gui, run_headless
from .errors import ConfigError
from .settings import Settings


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    level_name = os.getenv("GM_LOG_LEVEL")
    if level_name:
        level = getattr(logging, level_name.upper(), level)
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="ghost-maze",
        description="Ghost Maze - reach the goal before the clock runs out",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--gui", action="store_true", help="Force GUI mode (Arcade)")
    mode.add_argument("--headless", action="store_true", help="Force headless mode (autopilot in the console)")
    mode.add_argument(
        "--ascii",
        nargs=2,
        type=int,
        metavar=("WIDTH", "HEIGHT"),
        help="Print a single generated maze and exit",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible mazes")
    parser.add_argument("--config", type=Path, default=None, help="YAML settings overlay")
    parser.add_argument("--max-steps", type=int, default=None, help="Stop after N ticks (for testing)")
    parser.add_argument("--tick-rate", type=float, default=0.0, help="Headless tick rate in Hz (0 = unthrottled)")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")

    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    if args.ascii:
        width, height = args.ascii
        if width < 1 or height < 1:
            parser.error("--ascii dimensions must be positive")
        return print_maze(width, height, seed=args.seed)

    try:
        settings = Settings.load(args.config)
    except ConfigError as exc:
        print(f"Invalid settings: {exc}", file=sys.stderr)
        return 2

    # Honor CLI over env vars
    if args.gui:
        os.environ.pop("GM_HEADLESS", None)
        return run_gui(settings=settings, seed=args.seed, max_steps=args.max_steps, tick_rate=args.tick_rate)

    if args.headless:
        os.environ["GM_HEADLESS"] = "1"
        return run_headless(settings=settings, seed=args.seed, max_steps=args.max_steps, tick_rate=args.tick_rate)

    return run_auto(settings=settings, seed=args.seed, max_steps=args.max_steps, tick_rate=args.tick_rate)


if __name__ == "__main__":
    sys.exit(main())
