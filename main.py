"""
Entry point for the falling-block engine.

Supports two headless modes:
  - simulate: Play seeded games with a random-placement policy.
  - clock:    Run a live GameSession and let gravity play out for a while.

Usage:
    python main.py --mode simulate --games 5 --seed 7
    python main.py --mode simulate --config config/engine.yaml
    python main.py --mode clock --duration 3
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
import time

from tetris_engine.autoplay import play_game
from tetris_engine.clock import GameSession
from tetris_engine.config import EngineConfig, load_config
from tetris_engine.game.tetris import TetrisEngine


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Namespace with mode, config, seed and per-mode options.
    """
    parser = argparse.ArgumentParser(
        description="Falling-block puzzle engine: headless simulation and clock demo.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--mode",
        type=str,
        choices=["simulate", "clock"],
        default="simulate",
        help="Run mode: 'simulate' (autoplay games), 'clock' (gravity-only live session).",
    )
    parser.add_argument(
        "--config",
        type=str,
        default="config/engine.yaml",
        help="Path to the YAML configuration file.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the piece randomizer and the placement policy (overrides config).",
    )
    parser.add_argument(
        "--games",
        type=int,
        default=1,
        help="Number of games to play in 'simulate' mode.",
    )
    parser.add_argument(
        "--max-pieces",
        type=int,
        default=0,
        help="Stop each simulated game after N pieces (0 = play until game over).",
    )
    parser.add_argument(
        "--duration",
        type=float,
        default=5.0,
        help="Seconds to let the session run in 'clock' mode.",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level.",
    )
    return parser.parse_args(argv)


def run_simulation(config: EngineConfig, games: int, max_pieces: int) -> None:
    rng = random.Random(config.seed)
    engine = TetrisEngine(config, rng=random.Random(config.seed))
    for game_num in range(1, games + 1):
        result = play_game(engine, rng, max_pieces=max_pieces)
        print(
            f"Game {game_num}/{games}"
            + f" | Score: {result.score.score} | Lines: {result.score.lines}"
            + f" | Level: {result.score.level} | Pieces: {result.pieces}"
            + (" | GAME OVER" if result.game_over else "")
        )


def run_clock(config: EngineConfig, duration: float) -> None:
    with GameSession(config=config) as session:
        session.start()
        deadline = time.monotonic() + duration
        while time.monotonic() < deadline and session.ticking:
            time.sleep(0.05)
        snapshot = session.snapshot()
    print(
        f"State: {snapshot.game_state.name} | Score: {snapshot.score.score}"
        + f" | Filled cells: {snapshot.board.filled_count()}"
        + f" | Tick interval: {snapshot.tick_interval_ms} ms"
    )


def main(argv: list[str] | None = None) -> None:
    """Main entry point: parse args, load config, and dispatch to the selected mode."""
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config).with_overrides(seed=args.seed)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.mode == "simulate":
        run_simulation(config, args.games, args.max_pieces)

    elif args.mode == "clock":
        run_clock(config, args.duration)

    else:
        print(f"Unknown mode: {args.mode}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
