"""Game logic: board, pieces, scoring, and the engine."""

from tetris_engine.game.pieces import Color, Piece, PieceKind, Position, PIECE_TYPES, SHAPES
from tetris_engine.game.board import Board, Cell, DisplayBoard
from tetris_engine.game.score import Score
from tetris_engine.game.tetris import (
    BOARD_HEIGHT,
    BOARD_WIDTH,
    INITIAL_DELAY_MS,
    Action,
    EngineSnapshot,
    GameState,
    TetrisEngine,
)

__all__ = [
    "Color",
    "Piece",
    "PieceKind",
    "Position",
    "PIECE_TYPES",
    "SHAPES",
    "Board",
    "Cell",
    "DisplayBoard",
    "Score",
    "BOARD_HEIGHT",
    "BOARD_WIDTH",
    "INITIAL_DELAY_MS",
    "Action",
    "EngineSnapshot",
    "GameState",
    "TetrisEngine",
]
