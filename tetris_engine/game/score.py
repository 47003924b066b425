"""
Scoring, level progression and the tick-speed curve.

  - Line clears score SCORE_TABLE[lines] * level, using the level held
    before the clear.
  - The level is 1 + total_lines // lines_per_level.
  - The tick interval shrinks geometrically with the level:
    int(initial_delay_ms * speed_factor ** (level - 1)).
"""

from __future__ import annotations

from dataclasses import dataclass

# Base points per simultaneous line clear, multiplied by the current level.
SCORE_TABLE: dict[int, int] = {
    1: 100,
    2: 300,
    3: 500,
    4: 800,
}

INITIAL_DELAY_MS = 800
SPEED_FACTOR = 0.8
LINES_PER_LEVEL = 10


@dataclass(frozen=True)
class Score:
    """Immutable score snapshot.

    Attributes:
        lines: Total lines cleared this game.
        score: Points earned this game.
        level: Current level, starting at 1.
    """

    lines: int = 0
    score: int = 0
    level: int = 1


def points_for_lines(lines_cleared: int, level: int) -> int:
    """Points awarded for clearing `lines_cleared` rows at `level`."""
    return SCORE_TABLE.get(lines_cleared, 0) * level


def level_for_lines(total_lines: int, lines_per_level: int = LINES_PER_LEVEL) -> int:
    return 1 + total_lines // lines_per_level


def tick_interval_ms(
    level: int,
    initial_delay_ms: int = INITIAL_DELAY_MS,
    speed_factor: float = SPEED_FACTOR,
) -> int:
    """Milliseconds between gravity ticks at `level`, truncated to int."""
    return int(initial_delay_ms * speed_factor ** (level - 1))


def update_score(
    current: Score,
    lines_cleared: int,
    lines_per_level: int = LINES_PER_LEVEL,
) -> Score:
    """Return the score after a clear of `lines_cleared` rows.

    Args:
        current: Score before the clear.
        lines_cleared: Rows removed by the last lock (1-4).
        lines_per_level: Lines needed per level-up.

    Returns:
        A new Score. `current` is left untouched.
    """
    points = points_for_lines(lines_cleared, current.level)
    new_lines = current.lines + lines_cleared
    return Score(
        lines=new_lines,
        score=current.score + points,
        level=level_for_lines(new_lines, lines_per_level),
    )
