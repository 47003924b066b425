"""
Tetromino definitions: rotation states, colors, and the active piece model.

Each piece kind has 4 rotation states stored as small 0/1 matrices (the
smallest bounding box of that state) and one fixed display color. The matrices
are converted once at import time into lists of relative (x, y) positions,
which is the form the engine works with.

Coordinate convention:
  - x is the column offset (increases rightward).
  - y is the row offset (increases downward).
  - (0, 0) is the top-left corner of the rotation state's bounding box.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from typing import NamedTuple

import numpy as np


class Position(NamedTuple):
    """Integer board-relative coordinate."""

    x: int
    y: int


class Color(NamedTuple):
    """RGBA color. Channels are 0-255, alpha is 0.0-1.0."""

    red: int
    green: int
    blue: int
    alpha: float = 1.0

    def with_alpha(self, alpha: float) -> "Color":
        return self._replace(alpha=alpha)


TRANSPARENT = Color(0, 0, 0, 0.0)


class PieceKind(enum.IntEnum):
    """The seven tetromino kinds. Values double as board cell ids (0 = empty)."""
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


# =============================================================================
# Piece Colors
# =============================================================================

COLOR_CYAN   = Color(0, 240, 240)    # I
COLOR_YELLOW = Color(240, 240, 0)    # O
COLOR_PURPLE = Color(160, 0, 240)    # T
COLOR_GREEN  = Color(0, 240, 0)      # S
COLOR_RED    = Color(240, 0, 0)      # Z
COLOR_BLUE   = Color(0, 0, 240)      # J
COLOR_ORANGE = Color(240, 160, 0)    # L

# =============================================================================
# Rotation States
# =============================================================================
# Rows are y, columns are x. Rotation order is clockwise: 0 -> 1 -> 2 -> 3.

I_PIECE: dict = {
    "kind": PieceKind.I,
    "color": COLOR_CYAN,
    "rotations": [
        np.array([[1], [1], [1], [1]], dtype=np.int8),
        np.array([[1, 1, 1, 1]], dtype=np.int8),
        np.array([[1], [1], [1], [1]], dtype=np.int8),
        np.array([[1, 1, 1, 1]], dtype=np.int8),
    ],
}

O_PIECE: dict = {
    "kind": PieceKind.O,
    "color": COLOR_YELLOW,
    "rotations": [
        # All 4 rotations are identical for O-piece
        np.array([[1, 1], [1, 1]], dtype=np.int8),
        np.array([[1, 1], [1, 1]], dtype=np.int8),
        np.array([[1, 1], [1, 1]], dtype=np.int8),
        np.array([[1, 1], [1, 1]], dtype=np.int8),
    ],
}

T_PIECE: dict = {
    "kind": PieceKind.T,
    "color": COLOR_PURPLE,
    "rotations": [
        np.array([
            [1, 1, 1],
            [0, 1, 0],
        ], dtype=np.int8),
        np.array([
            [0, 1],
            [1, 1],
            [0, 1],
        ], dtype=np.int8),
        np.array([
            [0, 1, 0],
            [1, 1, 1],
        ], dtype=np.int8),
        np.array([
            [1, 0],
            [1, 1],
            [1, 0],
        ], dtype=np.int8),
    ],
}

S_PIECE: dict = {
    "kind": PieceKind.S,
    "color": COLOR_GREEN,
    "rotations": [
        np.array([
            [0, 1, 1],
            [1, 1, 0],
        ], dtype=np.int8),
        np.array([
            [1, 0],
            [1, 1],
            [0, 1],
        ], dtype=np.int8),
        np.array([
            [0, 1, 1],
            [1, 1, 0],
        ], dtype=np.int8),
        np.array([
            [1, 0],
            [1, 1],
            [0, 1],
        ], dtype=np.int8),
    ],
}

Z_PIECE: dict = {
    "kind": PieceKind.Z,
    "color": COLOR_RED,
    "rotations": [
        np.array([
            [1, 1, 0],
            [0, 1, 1],
        ], dtype=np.int8),
        np.array([
            [0, 1],
            [1, 1],
            [1, 0],
        ], dtype=np.int8),
        np.array([
            [1, 1, 0],
            [0, 1, 1],
        ], dtype=np.int8),
        np.array([
            [0, 1],
            [1, 1],
            [1, 0],
        ], dtype=np.int8),
    ],
}

J_PIECE: dict = {
    "kind": PieceKind.J,
    "color": COLOR_BLUE,
    "rotations": [
        np.array([
            [1, 0, 0],
            [1, 1, 1],
        ], dtype=np.int8),
        np.array([
            [0, 1, 1],
            [0, 1, 0],
            [0, 1, 0],
        ], dtype=np.int8),
        np.array([
            [1, 1, 1],
            [0, 0, 1],
        ], dtype=np.int8),
        np.array([
            [1, 1],
            [1, 0],
            [1, 0],
        ], dtype=np.int8),
    ],
}

L_PIECE: dict = {
    "kind": PieceKind.L,
    "color": COLOR_ORANGE,
    "rotations": [
        np.array([
            [0, 0, 1],
            [1, 1, 1],
        ], dtype=np.int8),
        np.array([
            [1, 1],
            [0, 1],
            [0, 1],
        ], dtype=np.int8),
        np.array([
            [1, 1, 1],
            [1, 0, 0],
        ], dtype=np.int8),
        np.array([
            [1, 0],
            [1, 0],
            [1, 1],
        ], dtype=np.int8),
    ],
}

PIECE_TYPES: list[dict] = [I_PIECE, O_PIECE, T_PIECE, S_PIECE, Z_PIECE, J_PIECE, L_PIECE]


def _matrix_to_cells(matrix: np.ndarray) -> tuple[Position, ...]:
    """Convert a 0/1 rotation matrix into relative (x, y) positions."""
    return tuple(Position(int(c), int(r)) for r, c in np.argwhere(matrix != 0))


# Lookup tables built from PIECE_TYPES, keyed by kind.
SHAPES: dict[PieceKind, tuple[tuple[Position, ...], ...]] = {
    piece["kind"]: tuple(_matrix_to_cells(m) for m in piece["rotations"])
    for piece in PIECE_TYPES
}
COLORS: dict[PieceKind, Color] = {piece["kind"]: piece["color"] for piece in PIECE_TYPES}


@dataclass(frozen=True)
class Piece:
    """An active piece instance.

    Pieces are immutable; moving or rotating returns a new Piece, so a failed
    move can never leave a half-updated anchor behind.

    Attributes:
        kind: Which tetromino this is.
        position: Top-left anchor on the board.
        rotation_index: Rotation state (0-3).
    """

    kind: PieceKind
    position: Position = Position(0, 0)
    rotation_index: int = 0

    @property
    def color(self) -> Color:
        return COLORS[self.kind]

    def get_current_shape(self) -> tuple[Position, ...]:
        """Return the 4 relative cells of the current rotation state."""
        return SHAPES[self.kind][self.rotation_index % 4]

    def get_absolute_positions(self) -> list[Position]:
        """Return the board cells this piece occupies at its anchor."""
        x0, y0 = self.position
        return [Position(x0 + dx, y0 + dy) for dx, dy in self.get_current_shape()]

    def moved(self, dx: int, dy: int) -> "Piece":
        return replace(self, position=Position(self.position.x + dx, self.position.y + dy))

    def rotated(self) -> "Piece":
        """Return this piece rotated one step clockwise."""
        return replace(self, rotation_index=(self.rotation_index + 1) % 4)
