"""
Board logic for a 10x20 grid of locked cells.

The board is a 2D numpy array (height x width) of int8 values:
  - 0 = empty cell
  - 1-7 = PieceKind of the piece that was locked there (used for coloring)

Row 0 is the top of the board. Pieces may hang above it (negative y) while
they spawn; those cells are never written to the grid.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

import numpy as np

from tetris_engine.game.pieces import COLORS, TRANSPARENT, Color, Piece, PieceKind, Position


@dataclass(frozen=True)
class Cell:
    """One board cell as seen by a renderer.

    Attributes:
        filled: Whether anything is drawn in this cell.
        color: RGBA color of the cell (transparent when empty).
        ghost: True for ghost-piece preview cells, which also carry a
            translucent color.
    """

    filled: bool = False
    color: Color = TRANSPARENT
    ghost: bool = False


EMPTY_CELL = Cell()

# Alpha used for ghost-piece cells.
GHOST_ALPHA = 0.3


class Board:
    """Board of locked cells with collision checks and line clearing.

    Attributes:
        width: Number of columns (default 10).
        height: Number of rows (default 20).
        grid: 2D numpy array of shape (height, width), dtype int8.
    """

    def __init__(self, width: int = 10, height: int = 20) -> None:
        self.width = width
        self.height = height
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def is_valid_position(self, cells: Iterable[Position]) -> bool:
        """Check whether a set of absolute cells fits on the board.

        A cell is valid if:
          - 0 <= x < width and y < height.
          - y < 0 (above the board), or the grid cell at (x, y) is empty.

        Args:
            cells: Absolute board positions, e.g. from
                Piece.get_absolute_positions().

        Returns:
            True if every cell is valid, False otherwise.
        """
        for x, y in cells:
            if x < 0 or x >= self.width or y >= self.height:
                return False
            if y >= 0 and self.grid[y, x] != 0:
                return False
        return True

    def fits(self, piece: Piece) -> bool:
        return self.is_valid_position(piece.get_absolute_positions())

    def lock(self, piece: Piece) -> None:
        """Write a piece into the grid as locked cells.

        Cells outside the board (including those above row 0) are clipped.
        Does NOT check validity first; the caller must ensure the piece fits.

        Args:
            piece: The piece to commit.
        """
        for x, y in piece.get_absolute_positions():
            if 0 <= y < self.height and 0 <= x < self.width:
                self.grid[y, x] = int(piece.kind)

    def clear_lines(self) -> int:
        """Remove all fully filled rows and let the rows above fall.

        Full rows are collected in one bottom-to-top scan and removed
        together, so a multi-line clear is a single event.

        Returns:
            The number of lines cleared (0-4).
        """
        full_rows = [r for r in range(self.height - 1, -1, -1) if np.all(self.grid[r] != 0)]
        if not full_rows:
            return 0

        lines_cleared = len(full_rows)
        mask = np.ones(self.height, dtype=bool)
        mask[full_rows] = False
        remaining = self.grid[mask]
        empty_rows = np.zeros((lines_cleared, self.width), dtype=np.int8)
        self.grid = np.vstack([empty_rows, remaining])
        return lines_cleared

    def cell(self, x: int, y: int) -> Cell:
        """Return the locked cell at (x, y)."""
        value = int(self.grid[y, x])
        if value == 0:
            return EMPTY_CELL
        return Cell(filled=True, color=COLORS[PieceKind(value)])

    def filled_count(self) -> int:
        return int(np.count_nonzero(self.grid))

    def get_grid(self) -> np.ndarray:
        """Return a copy of the board grid.

        Returns:
            A numpy array of shape (height, width), dtype int8.
        """
        return self.grid.copy()

    def reset(self) -> None:
        """Clear the entire board, setting all cells to 0."""
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)


class DisplayBoard:
    """Read-only board for renderers: locked cells, ghost, and active piece.

    Built fresh by the engine after every mutation. Indexing follows the grid:
    ``display[y][x]`` is the Cell at column x, row y.
    """

    __slots__ = ("_rows",)

    def __init__(self, rows: tuple[tuple[Cell, ...], ...]) -> None:
        self._rows = rows

    @classmethod
    def compose(
        cls,
        board: Board,
        active: Piece | None = None,
        ghost: Piece | None = None,
    ) -> "DisplayBoard":
        """Overlay the ghost and the active piece on the locked cells.

        Ghost cells are only drawn where no locked cell is, using the active
        piece's color at alpha 0.3. The active piece is drawn last.
        """
        rows = [[board.cell(x, y) for x in range(board.width)] for y in range(board.height)]

        if ghost is not None:
            ghost_cell = Cell(filled=True, color=ghost.color.with_alpha(GHOST_ALPHA), ghost=True)
            for x, y in ghost.get_absolute_positions():
                if 0 <= y < board.height and 0 <= x < board.width and not rows[y][x].filled:
                    rows[y][x] = ghost_cell

        if active is not None:
            active_cell = Cell(filled=True, color=active.color)
            for x, y in active.get_absolute_positions():
                if 0 <= y < board.height and 0 <= x < board.width:
                    rows[y][x] = active_cell

        return cls(tuple(tuple(row) for row in rows))

    @property
    def height(self) -> int:
        return len(self._rows)

    @property
    def width(self) -> int:
        return len(self._rows[0]) if self._rows else 0

    def __getitem__(self, y: int) -> tuple[Cell, ...]:
        return self._rows[y]

    def __iter__(self) -> Iterator[tuple[Cell, ...]]:
        return iter(self._rows)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DisplayBoard):
            return NotImplemented
        return self._rows == other._rows

    def __hash__(self) -> int:
        return hash(self._rows)

    def __repr__(self) -> str:
        return f"DisplayBoard({self.width}x{self.height}, filled={self.filled_count()})"

    def filled_count(self, include_ghost: bool = False) -> int:
        return sum(
            1
            for row in self._rows
            for c in row
            if c.filled and (include_ghost or not c.ghost)
        )

    def ghost_positions(self) -> list[Position]:
        return [
            Position(x, y)
            for y, row in enumerate(self._rows)
            for x, c in enumerate(row)
            if c.ghost
        ]

