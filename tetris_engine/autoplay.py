"""
Headless random-placement player.

Plays whole games through the public command surface only: for each piece it
rotates a random number of times, shifts a random distance, then hard-drops.
Useful for smoke-testing the engine and for the `simulate` CLI mode.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional

from tetris_engine.game.score import Score
from tetris_engine.game.tetris import Action, GameState, TetrisEngine


@dataclass(frozen=True)
class GameResult:
    score: Score
    pieces: int
    game_over: bool


def random_placement(engine: TetrisEngine, rng: random.Random) -> None:
    """Place the current piece at a random rotation and column."""
    for _ in range(rng.randrange(4)):
        engine.apply(Action.ROTATE)
    half = engine.locked_board.width // 2
    shift = rng.randint(-half, half)
    action = Action.LEFT if shift < 0 else Action.RIGHT
    for _ in range(abs(shift)):
        if not engine.apply(action):
            break
    engine.apply(Action.HARD_DROP)


def play_game(
    engine: TetrisEngine,
    rng: Optional[random.Random] = None,
    max_pieces: int = 0,
) -> GameResult:
    """Play one game from a fresh start until game over.

    Args:
        engine: Engine to drive. It is reset first.
        rng: Random source for the placement policy.
        max_pieces: Stop after this many pieces (0 = no limit).

    Returns:
        The final score, pieces placed, and whether the game ended.
    """
    rng = rng or random.Random()
    engine.reset()
    engine.start()

    pieces = 0
    while engine.game_state == GameState.PLAYING:
        random_placement(engine, rng)
        pieces += 1
        if max_pieces and pieces >= max_pieces:
            break

    return GameResult(
        score=engine.score,
        pieces=pieces,
        game_over=engine.game_state == GameState.GAME_OVER,
    )
