"""
Engine configuration and YAML loading.

Usage:
    config = load_config("config/engine.yaml")
    engine = TetrisEngine(config)
"""

from __future__ import annotations

import dataclasses
import pathlib
from dataclasses import dataclass
from typing import Any, Optional

import yaml


@dataclass(frozen=True)
class EngineConfig:
    """Tunable engine parameters.

    Attributes:
        board_width: Number of columns.
        board_height: Number of rows.
        initial_delay_ms: Tick interval at level 1.
        speed_factor: Per-level multiplier applied to the tick interval.
        lines_per_level: Cleared lines needed to gain a level.
        start_delay_ms: Pause before the first tick after (re)starting play.
        seed: Seed for the piece randomizer (None = nondeterministic).
    """

    board_width: int = 10
    board_height: int = 20
    initial_delay_ms: int = 800
    speed_factor: float = 0.8
    lines_per_level: int = 10
    start_delay_ms: int = 200
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        for name in ("board_width", "board_height", "initial_delay_ms", "lines_per_level"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if self.board_width < 4:
            raise ValueError(f"board_width must be at least 4, got {self.board_width}")
        if not 0.0 < self.speed_factor <= 1.0:
            raise ValueError(f"speed_factor must be in (0, 1], got {self.speed_factor}")
        if self.start_delay_ms < 0:
            raise ValueError(f"start_delay_ms must be >= 0, got {self.start_delay_ms}")

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "EngineConfig":
        """Build a config from a plain dict, rejecting unknown keys."""
        data = dict(data or {})
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**data)

    def with_overrides(self, **overrides: Any) -> "EngineConfig":
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return dataclasses.replace(self, **changes)


def load_config(config_path: str | pathlib.Path) -> EngineConfig:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML config file.

    Returns:
        The parsed EngineConfig. An empty file yields the defaults.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ValueError: If the file holds unknown keys or invalid values.
    """
    config_path = pathlib.Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    with open(config_path, "r") as f:
        data = yaml.safe_load(f)
    if data is not None and not isinstance(data, dict):
        raise ValueError(f"Config file must hold a mapping: {config_path}")
    return EngineConfig.from_dict(data)
