"""
Game orchestrator: state machine, piece control, locking, scoring, and ghost.

This module ties the Board and Piece definitions into a full game with a
READY / PLAYING / PAUSED / GAME_OVER state machine, simple wall kicks,
level-based gravity speed, and a display board that overlays the ghost and
active piece on the locked cells.

The engine never sleeps and never starts threads. Something outside it (see
tetris_engine.clock) calls tick() on a timer, and every command must be
serialized by the caller.
"""

from __future__ import annotations

import enum
import logging
import random
from dataclasses import dataclass
from typing import Callable, Optional

from tetris_engine.config import EngineConfig
from tetris_engine.game.board import Board, DisplayBoard
from tetris_engine.game.pieces import Piece, PieceKind, Position
from tetris_engine.game.score import Score, tick_interval_ms, update_score

logger = logging.getLogger(__name__)

BOARD_WIDTH = 10
BOARD_HEIGHT = 20
INITIAL_DELAY_MS = 800

# Offsets tried, in order, when an in-place rotation collides.
KICK_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, 0),  # left
    (1, 0),   # right
    (0, -1),  # up
)


class GameState(enum.Enum):
    READY = "ready"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class Action(enum.IntEnum):
    """Discrete player inputs accepted by TetrisEngine.apply()."""
    LEFT = 0
    RIGHT = 1
    DOWN = 2
    ROTATE = 3
    HARD_DROP = 4


@dataclass(frozen=True)
class EngineSnapshot:
    """Everything a renderer needs, captured after one committed command."""

    game_state: GameState
    board: DisplayBoard
    score: Score
    next_piece: Optional[Piece]
    tick_interval_ms: int


Listener = Callable[[EngineSnapshot], None]


class TetrisEngine:
    """Single-player falling-block game engine.

    Attributes:
        config: Engine parameters.
        rng: Random source for piece selection; seed it for reproducible games.
        locked_board: Board holding only locked cells (never the active piece).
        current_piece: The falling piece, or None outside of play.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.rng = rng or random.Random(self.config.seed)
        self.locked_board = Board(self.config.board_width, self.config.board_height)
        self.current_piece: Optional[Piece] = None

        self._next_piece: Optional[Piece] = None
        self._score = Score()
        self._game_state = GameState.READY
        self._tick_interval_ms = self.config.initial_delay_ms
        self._listeners: list[Listener] = []
        self._display = DisplayBoard.compose(self.locked_board)

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------

    @property
    def game_state(self) -> GameState:
        return self._game_state

    @property
    def board(self) -> DisplayBoard:
        """Display board: locked cells plus ghost and active piece."""
        return self._display

    @property
    def score(self) -> Score:
        return self._score

    @property
    def next_piece(self) -> Optional[Piece]:
        return self._next_piece

    @property
    def tick_interval_ms(self) -> int:
        """Current gravity interval in milliseconds."""
        return self._tick_interval_ms

    def snapshot(self) -> EngineSnapshot:
        return EngineSnapshot(
            game_state=self._game_state,
            board=self._display,
            score=self._score,
            next_piece=self._next_piece,
            tick_interval_ms=self._tick_interval_ms,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called with a snapshot after each committed command.

        Listeners are not called for commands that were ignored or failed
        without changing state.

        Returns:
            A callable that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Lifecycle commands
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start a new game from READY/GAME_OVER, or resume from PAUSED."""
        if self._game_state in (GameState.READY, GameState.GAME_OVER):
            self.locked_board.reset()
            self._score = Score()
            self._tick_interval_ms = self.config.initial_delay_ms
            self.current_piece = self._spawn()
            self._next_piece = self._spawn()
            self._set_state(GameState.PLAYING)
        elif self._game_state == GameState.PAUSED:
            self._set_state(GameState.PLAYING)
        else:
            return
        self._commit()

    def pause(self) -> None:
        if self._game_state != GameState.PLAYING:
            return
        self._set_state(GameState.PAUSED)
        self._commit()

    def reset(self) -> None:
        """Return to READY from any state, clearing board, score and pieces."""
        self._set_state(GameState.READY)
        self.locked_board.reset()
        self._score = Score()
        self._tick_interval_ms = self.config.initial_delay_ms
        self.current_piece = None
        self._next_piece = None
        self._commit()

    # ------------------------------------------------------------------
    # Piece commands
    # ------------------------------------------------------------------

    def move_left(self) -> bool:
        return self._move_command(-1, 0)

    def move_right(self) -> bool:
        return self._move_command(1, 0)

    def move_down(self) -> bool:
        return self._move_command(0, 1)

    def rotate(self) -> bool:
        """Rotate clockwise, trying wall kicks if the rotation collides.

        Returns:
            True if the piece rotated (possibly kicked), False otherwise.
        """
        if not self._can_act():
            return False
        if not self._try_rotate():
            return False
        self._commit()
        return True

    def hard_drop(self) -> None:
        """Drop the piece as far as it goes and lock it, as one command."""
        if not self._can_act():
            return
        while self._try_move(0, 1):
            pass
        self._lock_piece()
        self._commit()

    def tick(self) -> None:
        """Advance the game clock one step: descend, or lock if blocked."""
        if not self._can_act():
            return
        if not self._try_move(0, 1):
            self._lock_piece()
        self._commit()

    def apply(self, action: Action) -> bool:
        """Dispatch a discrete input.

        Args:
            action: An Action enum value.

        Returns:
            Whether the action was accepted. HARD_DROP counts as accepted
            whenever a piece was in play.
        """
        if action == Action.LEFT:
            return self.move_left()
        elif action == Action.RIGHT:
            return self.move_right()
        elif action == Action.DOWN:
            return self.move_down()
        elif action == Action.ROTATE:
            return self.rotate()
        elif action == Action.HARD_DROP:
            if not self._can_act():
                return False
            self.hard_drop()
            return True
        raise ValueError(f"Unknown action: {action!r}")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _can_act(self) -> bool:
        if self._game_state != GameState.PLAYING:
            return False
        assert self.current_piece is not None, "PLAYING without an active piece"
        return True

    def _move_command(self, dx: int, dy: int) -> bool:
        if not self._can_act():
            return False
        if not self._try_move(dx, dy):
            return False
        self._commit()
        return True

    def _spawn(self) -> Piece:
        """Create a uniformly random piece at the top-center spawn point."""
        kind = self.rng.choice(list(PieceKind))
        return Piece(kind=kind, position=Position(self.locked_board.width // 2 - 1, 0))

    def _try_move(self, dx: int, dy: int) -> bool:
        """Try to move the current piece by (dx, dy).

        Returns:
            True if the move succeeded, False if blocked (piece unchanged).
        """
        candidate = self.current_piece.moved(dx, dy)
        if not self.locked_board.fits(candidate):
            return False
        self.current_piece = candidate
        return True

    def _try_rotate(self) -> bool:
        """Rotate in place, else try each kick offset. Reverts fully on failure."""
        rotated = self.current_piece.rotated()
        if self.locked_board.fits(rotated):
            self.current_piece = rotated
            return True
        for dx, dy in KICK_OFFSETS:
            kicked = rotated.moved(dx, dy)
            if self.locked_board.fits(kicked):
                self.current_piece = kicked
                return True
        return False

    def _lock_piece(self) -> None:
        """Lock the current piece, clear lines, and bring in the next piece.

        Goes to GAME_OVER when the promoted piece collides at its spawn
        position; the board is left as it is in that case.
        """
        piece = self.current_piece
        self.locked_board.lock(piece)
        logger.debug("Locked %s at %s rotation %d", piece.kind.name, tuple(piece.position), piece.rotation_index)

        lines_cleared = self.locked_board.clear_lines()
        if lines_cleared > 0:
            self._update_score(lines_cleared)

        self.current_piece = self._next_piece
        self._next_piece = self._spawn()

        if not self.locked_board.fits(self.current_piece):
            self._set_state(GameState.GAME_OVER)
            logger.info(
                "Game over: score=%d lines=%d level=%d",
                self._score.score,
                self._score.lines,
                self._score.level,
            )

    def _update_score(self, lines_cleared: int) -> None:
        previous_level = self._score.level
        self._score = update_score(self._score, lines_cleared, self.config.lines_per_level)
        self._tick_interval_ms = tick_interval_ms(
            self._score.level,
            self.config.initial_delay_ms,
            self.config.speed_factor,
        )
        logger.debug("Cleared %d line(s), score now %s", lines_cleared, self._score)
        if self._score.level != previous_level:
            logger.debug("Level %d, tick interval %d ms", self._score.level, self._tick_interval_ms)

    def _ghost_piece(self) -> Optional[Piece]:
        """Project the active piece down to where it would land.

        Returns:
            The landed copy, or None when not playing or when the piece is
            already resting (the ghost would sit under the piece itself).
        """
        if self._game_state != GameState.PLAYING or self.current_piece is None:
            return None
        ghost = self.current_piece
        while self.locked_board.fits(ghost.moved(0, 1)):
            ghost = ghost.moved(0, 1)
        if ghost.position.y == self.current_piece.position.y:
            return None
        return ghost

    def _set_state(self, state: GameState) -> None:
        if state != self._game_state:
            logger.debug("Game state %s -> %s", self._game_state.name, state.name)
        self._game_state = state

    def _commit(self) -> None:
        """Rebuild the display board and notify listeners once."""
        self._display = DisplayBoard.compose(
            self.locked_board,
            active=self.current_piece,
            ghost=self._ghost_piece(),
        )
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)
