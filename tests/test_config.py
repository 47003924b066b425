from __future__ import annotations

import pytest

from conftest import DEFAULT_CONFIG_PATH
from tetris_engine.config import EngineConfig, load_config


def test_default_yaml_matches_defaults():
    assert load_config(DEFAULT_CONFIG_PATH) == EngineConfig()


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(path) == EngineConfig()


def test_partial_file_overrides(tmp_path):
    path = tmp_path / "fast.yaml"
    path.write_text("initial_delay_ms: 400\nseed: 3\n")
    config = load_config(path)
    assert config.initial_delay_ms == 400
    assert config.seed == 3
    assert config.board_width == 10


def test_unknown_key_raises(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("board_depth: 4\n")
    with pytest.raises(ValueError, match="board_depth"):
        load_config(path)


def test_non_mapping_raises(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n")
    with pytest.raises(ValueError):
        load_config(path)


@pytest.mark.parametrize(
    "overrides",
    [
        {"board_width": 0},
        {"board_width": 3},
        {"board_height": -1},
        {"initial_delay_ms": 0},
        {"lines_per_level": 0},
        {"speed_factor": 0.0},
        {"speed_factor": 1.5},
        {"start_delay_ms": -5},
    ],
)
def test_invalid_values_raise(overrides):
    with pytest.raises(ValueError):
        EngineConfig(**overrides)


def test_with_overrides_skips_none():
    config = EngineConfig(seed=1).with_overrides(seed=None, initial_delay_ms=100)
    assert config.seed == 1
    assert config.initial_delay_ms == 100
