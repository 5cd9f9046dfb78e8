#!/usr/bin/env python3
"""
Command line entry point.

  python -m fallpy [--seed N] [--width W] [--height H] play [--db PATH]
  python -m fallpy --seed 7 simulate --frames 600 --flap-every 18
"""

import argparse
import json
import logging
import sqlite3
import sys

from .config import ConfigError, GameConfig, default_db_path
from .data_models import InputEvent
from .driver import FrameDriver
from .engine import GameEngine
from .logger import setup_logging
from .record_db import MemoryRecordStore

log = logging.getLogger("fallpy.cli")


def parse_args(argv=None):
    p = argparse.ArgumentParser(prog="fallpy", description="Flap through the pipes.")
    p.add_argument("--seed", type=int, default=None,
                   help="Spawn seed. Omit for a random sequence each launch.")
    p.add_argument("--width", type=float, default=None, help="Playfield width")
    p.add_argument("--height", type=float, default=None, help="Playfield height")
    p.add_argument("--log-level", default="info", help="debug, info, warning, error")

    sub = p.add_subparsers(dest="command")

    play = sub.add_parser("play", help="Open the game window (default)")
    play.add_argument("--db", default=None, help="SQLite file for the best score")

    sim = sub.add_parser("simulate", help="Run headless and print the final state as JSON")
    sim.add_argument("--frames", type=int, default=600, help="Maximum frames to run")
    sim.add_argument("--flap-every", type=int, default=0,
                     help="Flap every N frames (0 = only the starting flap)")
    sim.add_argument("--best", type=int, default=0, help="Record to compare against")

    args = p.parse_args(argv)
    if args.command is None:
        args.command = "play"
        args.db = None
    return args


def flap_schedule(frames: int, every: int) -> dict:
    """Loop index -> events. Index 0 always flaps so the run starts."""
    schedule = {0: [InputEvent.FLAP]}
    if every > 0:
        for index in range(every, frames, every):
            schedule[index] = [InputEvent.FLAP]
    return schedule


def simulate(config: GameConfig, frames: int, flap_every: int, best: int) -> dict:
    records = MemoryRecordStore(best)
    engine = GameEngine(config, records=records)
    driver = FrameDriver(engine)
    state = driver.run(flap_schedule(frames, flap_every), max_frames=frames)
    return state.to_snapshot()


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level)

    try:
        config = GameConfig().with_overrides(
            seed=args.seed, width=args.width, height=args.height).validate()
    except ConfigError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    if args.command == "simulate":
        print(json.dumps(simulate(config, args.frames, args.flap_every, args.best), indent=2))
        return 0

    from .client import FallpyClient

    db_file = args.db or default_db_path()
    try:
        client = FallpyClient(config, db_file)
        client.run()
    except sqlite3.Error as e:
        log.error("Record database %s failed: %s", db_file, e)
        return 1
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())
