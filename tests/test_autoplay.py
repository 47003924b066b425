from __future__ import annotations

import random

from conftest import DEFAULT_CONFIG_PATH
from main import main
from tetris_engine.autoplay import play_game
from tetris_engine.config import EngineConfig
from tetris_engine.game.tetris import GameState, TetrisEngine


def test_random_play_ends_in_game_over():
    engine = TetrisEngine(EngineConfig(seed=11))
    result = play_game(engine, random.Random(11), max_pieces=2000)
    assert result.game_over
    assert engine.game_state == GameState.GAME_OVER
    assert result.pieces > 0
    assert result.score.level == 1 + result.score.lines // 10


def test_max_pieces_stops_early():
    engine = TetrisEngine(EngineConfig(seed=11))
    result = play_game(engine, random.Random(11), max_pieces=3)
    assert result.pieces == 3
    assert not result.game_over
    assert result.score.lines > 0 or engine.locked_board.filled_count() == 12


def test_seeded_games_repeat():
    results = [
        play_game(TetrisEngine(EngineConfig(seed=4)), random.Random(4))
        for _ in range(2)
    ]
    assert results[0] == results[1]


def test_simulate_cli(capsys):
    main(["--mode", "simulate", "--config", str(DEFAULT_CONFIG_PATH), "--seed", "3", "--games", "2"])
    out = capsys.readouterr().out
    assert "Game 1/2" in out
    assert "Game 2/2" in out
    assert "GAME OVER" in out


def test_clock_cli(capsys, tmp_path):
    path = tmp_path / "fast.yaml"
    path.write_text("initial_delay_ms: 2\nstart_delay_ms: 0\nseed: 1\n")
    main(["--mode", "clock", "--config", str(path), "--duration", "0.2"])
    assert "State:" in capsys.readouterr().out
