from __future__ import annotations

import pytest

from tetris_engine.game.score import (
    Score,
    level_for_lines,
    points_for_lines,
    tick_interval_ms,
    update_score,
)


def test_default_score():
    assert Score() == Score(lines=0, score=0, level=1)


@pytest.mark.parametrize(
    "lines, level, expected",
    [
        (1, 1, 100),
        (2, 1, 300),
        (3, 1, 500),
        (4, 1, 800),
        (1, 2, 200),
        (4, 3, 2400),
        (0, 5, 0),
    ],
)
def test_points_scale_with_level(lines, level, expected):
    assert points_for_lines(lines, level) == expected


def test_level_every_ten_lines():
    assert level_for_lines(0) == 1
    assert level_for_lines(9) == 1
    assert level_for_lines(10) == 2
    assert level_for_lines(35) == 4


def test_multiplier_uses_level_before_update():
    after = update_score(Score(lines=9, score=1000, level=1), 1)
    assert after == Score(lines=10, score=1100, level=2)


def test_update_does_not_mutate_input():
    before = Score(lines=2, score=300, level=1)
    update_score(before, 2)
    assert before == Score(lines=2, score=300, level=1)


def test_tick_interval_curve():
    assert tick_interval_ms(1) == 800
    assert tick_interval_ms(2) == 640
    assert tick_interval_ms(3) == 512
    assert tick_interval_ms(4) == 409


def test_tick_interval_strictly_decreasing_and_positive():
    intervals = [tick_interval_ms(level) for level in range(1, 25)]
    assert all(a > b for a, b in zip(intervals, intervals[1:]))
    assert intervals[-1] > 0
