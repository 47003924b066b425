"""
Game clock: a cancellable tick thread and the session that drives it.

GameSession is the controlling layer a front end talks to. It serializes
every engine command behind one re-entrant lock and runs a TickLoop while the
game is PLAYING. A loop is stopped (its event set) while the lock is held, and
the loop checks that event under the same lock right before each tick, so no
tick can run once pause() or reset() has returned.

Snapshots from ticks are delivered to listeners on the tick thread.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from tetris_engine.config import EngineConfig
from tetris_engine.game.tetris import Action, EngineSnapshot, GameState, Listener, TetrisEngine

logger = logging.getLogger(__name__)


class TickLoop:
    """Calls engine.tick() on a daemon thread until stopped.

    Waits `start_delay_ms` first, then ticks and sleeps for the engine's
    current tick interval, re-reading it after every tick so level-ups take
    effect immediately.
    """

    def __init__(self, engine: TetrisEngine, lock: threading.RLock, start_delay_ms: int) -> None:
        self._engine = engine
        self._lock = lock
        self._start_delay_s = start_delay_ms / 1000.0
        self._stop_event = threading.Event()
        self._thread = threading.Thread(target=self._run, name="tetris-tick", daemon=True)
        self.ticks = 0

    def start(self) -> None:
        self._thread.start()

    def stop(self) -> None:
        """Request the loop to end. Callers hold the session lock."""
        self._stop_event.set()

    def join(self, timeout: Optional[float] = None) -> None:
        if self._thread is not threading.current_thread() and self._thread.is_alive():
            self._thread.join(timeout)

    @property
    def running(self) -> bool:
        return self._thread.is_alive() and not self._stop_event.is_set()

    def _run(self) -> None:
        if self._stop_event.wait(self._start_delay_s):
            return
        while True:
            with self._lock:
                if self._stop_event.is_set() or self._engine.game_state != GameState.PLAYING:
                    return
                self._engine.tick()
                self.ticks += 1
                interval_s = self._engine.tick_interval_ms / 1000.0
            if self._stop_event.wait(interval_s):
                return


class GameSession:
    """Thread-safe front for a TetrisEngine with automatic gravity.

    All commands take the session lock, so input handlers and the tick thread
    never interleave inside the engine. Drive the game through these methods
    rather than through `engine` directly.

    Attributes:
        engine: The wrapped engine.
    """

    def __init__(
        self,
        engine: Optional[TetrisEngine] = None,
        config: Optional[EngineConfig] = None,
    ) -> None:
        self.engine = engine or TetrisEngine(config)
        self._lock = threading.RLock()
        self._loop: Optional[TickLoop] = None
        self._last_state = self.engine.game_state
        self._unsubscribe = self.engine.subscribe(self._on_snapshot)

    @property
    def ticking(self) -> bool:
        with self._lock:
            return self._loop is not None and self._loop.running

    # Commands -----------------------------------------------------------

    def start(self) -> None:
        with self._lock:
            self.engine.start()

    def pause(self) -> None:
        with self._lock:
            self.engine.pause()

    def reset(self) -> None:
        with self._lock:
            self._stop_loop()
            self.engine.reset()

    def move_left(self) -> bool:
        with self._lock:
            return self.engine.move_left()

    def move_right(self) -> bool:
        with self._lock:
            return self.engine.move_right()

    def move_down(self) -> bool:
        with self._lock:
            return self.engine.move_down()

    def rotate(self) -> bool:
        with self._lock:
            return self.engine.rotate()

    def hard_drop(self) -> None:
        with self._lock:
            self.engine.hard_drop()

    def apply(self, action: Action) -> bool:
        with self._lock:
            return self.engine.apply(action)

    # Observation --------------------------------------------------------

    def snapshot(self) -> EngineSnapshot:
        with self._lock:
            return self.engine.snapshot()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        with self._lock:
            return self.engine.subscribe(listener)

    def close(self) -> None:
        """Stop gravity, detach from the engine, and wait for the tick thread."""
        with self._lock:
            loop = self._loop
            self._stop_loop()
            self._unsubscribe()
        if loop is not None:
            loop.join(timeout=5)

    def __enter__(self) -> "GameSession":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # Internals ----------------------------------------------------------

    def _on_snapshot(self, snapshot: EngineSnapshot) -> None:
        # Runs inside an engine command, so the session lock is held.
        if snapshot.game_state == GameState.PLAYING:
            if self._last_state != GameState.PLAYING:
                self._start_loop()
        else:
            self._stop_loop()
        self._last_state = snapshot.game_state

    def _start_loop(self) -> None:
        self._stop_loop()
        self._loop = TickLoop(self.engine, self._lock, self.engine.config.start_delay_ms)
        self._loop.start()
        logger.debug("Tick loop started")

    def _stop_loop(self) -> None:
        if self._loop is None:
            return
        self._loop.stop()
        self._loop = None
        logger.debug("Tick loop stopped")
