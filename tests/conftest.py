"""Shared fixtures for the engine tests."""

from __future__ import annotations

import pathlib
import random

import pytest

from tetris_engine.config import EngineConfig
from tetris_engine.game.pieces import Piece, PieceKind, Position
from tetris_engine.game.tetris import TetrisEngine

REPO_ROOT = pathlib.Path(__file__).resolve().parent.parent
DEFAULT_CONFIG_PATH = REPO_ROOT / "config" / "engine.yaml"


class FixedKindRandom(random.Random):
    """Random source whose choice() always returns the same piece kind."""

    def __init__(self, kind: PieceKind) -> None:
        super().__init__(0)
        self.kind = kind

    def choice(self, seq):
        return self.kind


def place(engine: TetrisEngine, kind: PieceKind, x: int, y: int, rotation: int = 0) -> Piece:
    """Replace the active piece with a fixture piece."""
    engine.current_piece = Piece(kind, Position(x, y), rotation)
    return engine.current_piece


@pytest.fixture
def engine() -> TetrisEngine:
    return TetrisEngine(EngineConfig(seed=1234))


@pytest.fixture
def playing_engine(engine: TetrisEngine) -> TetrisEngine:
    engine.start()
    return engine


@pytest.fixture
def o_engine() -> TetrisEngine:
    """Started engine that only ever spawns O pieces."""
    eng = TetrisEngine(EngineConfig(), rng=FixedKindRandom(PieceKind.O))
    eng.start()
    return eng
