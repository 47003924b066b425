"""Host-agnostic falling-block puzzle engine."""

from tetris_engine.config import EngineConfig, load_config
from tetris_engine.clock import GameSession, TickLoop
from tetris_engine.game import Action, GameState, TetrisEngine

__all__ = [
    "EngineConfig",
    "load_config",
    "GameSession",
    "TickLoop",
    "Action",
    "GameState",
    "TetrisEngine",
]
