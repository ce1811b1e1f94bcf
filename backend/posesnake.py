#!/usr/bin/env python3
"""
PoseSnake headless runner.

Wires the snake engine to an input source and a fixed-tick game loop:
  - recorded pose frames (JSON Lines) through the debounced classifier, or
  - an autopilot player (random / greedy)

Usage:
    python posesnake.py --player greedy --seed 7 --fast
    python posesnake.py --poses recording.jsonl --dwell-ms 220 --show-board
"""

import argparse
import json
import logging
import random
import sys
import time
from typing import Any, Dict, List, Optional

from config import Settings, load_settings
from controls import apply_direction
from domain.game_state import GameState
from players import PLAYERS, make_player
from pose.classifier import DirectionClassifier, EMISSION_POLICIES
from pose.providers import JsonlPoseProvider
from pose.sampler import PoseSampler
from services.game_loop import GameLoop, VirtualClock
from services.session_stats import POSE, SessionStats
from snake_engine import SnakeEngine

logger = logging.getLogger(__name__)

DEFAULT_MAX_TICKS = 1000


def print_board(state: GameState) -> None:
    print(f"\nScore: {state.score}  Length: {state.length}  Heading: {state.direction}")
    print(state.print_board())


def run_session(settings: Settings, game_params: argparse.Namespace) -> Dict[str, Any]:
    """
    Runs a single headless session.

    Args:
        settings: grid, timing and classifier settings.
        game_params: An object (like argparse.Namespace) with player, poses,
                     seed, max_ticks, fast and show_board.

    Returns:
        A dictionary summarizing the session (final state, ticks, stats).
    """
    seed = getattr(game_params, "seed", None)
    rng = random.Random(seed)

    if getattr(game_params, "fast", False):
        virtual = VirtualClock()
        clock, sleep = virtual, virtual.sleep
    else:
        clock, sleep = time.monotonic, time.sleep

    engine = SnakeEngine(settings.grid_width, settings.grid_height, rng=rng)
    stats = SessionStats(clock=clock)
    engine.subscribe(stats.on_state)
    if getattr(game_params, "show_board", False):
        engine.subscribe(print_board)

    sampler: Optional[PoseSampler] = None
    player = None
    poses_path = getattr(game_params, "poses", None)

    if poses_path:
        provider = JsonlPoseProvider(poses_path)
        classifier = DirectionClassifier(
            min_score=settings.pose_min_score,
            dwell_ms=settings.pose_dwell_ms,
            policy=settings.pose_emission_policy,
        )

        def on_direction(direction: str) -> None:
            if apply_direction(engine, direction):
                stats.record_command(direction, POSE)

        sampler = PoseSampler(
            provider,
            on_direction,
            classifier=classifier,
            target_fps=settings.pose_target_fps,
        )
    else:
        player = make_player(getattr(game_params, "player", "greedy"), rng=rng)
        engine.start()

    loop = GameLoop(
        engine,
        tick_ms=settings.tick_ms,
        sampler=sampler,
        player=player,
        clock=clock,
        sleep=sleep,
    )
    ticks = loop.run(max_ticks=getattr(game_params, "max_ticks", DEFAULT_MAX_TICKS))

    state = engine.get_state()
    return {
        "status": state.status,
        "score": state.score,
        "length": state.length,
        "ticks": ticks,
        "death_reason": engine.death_reason,
        "grid": {"width": state.width, "height": state.height},
        "stats": stats.as_dict(),
    }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run a headless PoseSnake session from recorded poses or an autopilot."
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--poses", type=str, default=None,
                        help="JSON Lines file of recorded keypoint frames")
    source.add_argument("--player", type=str, default="greedy", choices=sorted(PLAYERS),
                        help="Autopilot used when no pose recording is given")
    parser.add_argument("--width", type=int, default=None, help="Grid width in cells")
    parser.add_argument("--height", type=int, default=None, help="Grid height in cells")
    parser.add_argument("--tick-ms", type=int, default=None, help="Milliseconds between steps")
    parser.add_argument("--min-score", type=float, default=None,
                        help="Keypoint confidence threshold")
    parser.add_argument("--dwell-ms", type=float, default=None,
                        help="How long a posture must be held before it counts")
    parser.add_argument("--fps", type=float, default=None, help="Pose sampling rate")
    parser.add_argument("--emission-policy", type=str, default=None, choices=sorted(EMISSION_POLICIES),
                        help="Re-emit a held posture every frame (repeat) or only once")
    parser.add_argument("--max-ticks", type=int, default=DEFAULT_MAX_TICKS,
                        help="Stop after this many ticks")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for food and autopilot")
    parser.add_argument("--fast", action="store_true",
                        help="Use a virtual clock instead of real time")
    parser.add_argument("--show-board", action="store_true", help="Print the board after every change")
    parser.add_argument("--log-level", type=str, default=None, help="Logging level (DEBUG, INFO, ...)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings().override(
            grid_width=args.width,
            grid_height=args.height,
            tick_ms=args.tick_ms,
            pose_min_score=args.min_score,
            pose_dwell_ms=args.dwell_ms,
            pose_target_fps=args.fps,
            pose_emission_policy=args.emission_policy,
            log_level=args.log_level.upper() if args.log_level else None,
        )
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    try:
        result = run_session(settings, args)
    except (ValueError, OSError) as e:
        logger.error("Session failed: %s", e)
        return 1

    print("\nSession Summary:")
    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
