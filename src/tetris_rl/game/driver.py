from __future__ import annotations

import queue
import threading
import time
from typing import Callable, Optional, Tuple

from .core import Action, TetrisGame
from .engine import Snapshot


class GameDriver:
    """Single consumer for a `TetrisGame`.

    Producers (gravity timer, key handlers, other threads) only call `submit`
    or `advance`; commands are applied in arrival order by `pump` or `run`,
    one at a time under `_lock`. Commands are stamped with the game
    generation, so anything queued before a `restart` never reaches the new game.
    """

    def __init__(self, game: TetrisGame, drop_interval_ms: Optional[int] = None) -> None:
        self.game = game
        if drop_interval_ms is None:
            drop_interval_ms = game.config.drop_interval_ms
        assert drop_interval_ms > 0, "drop interval must be positive"
        self.drop_interval_ms = drop_interval_ms
        self._commands: "queue.SimpleQueue[Tuple[int, Action]]" = queue.SimpleQueue()
        self._lock = threading.Lock()
        self._generation = 0
        self._last_drop_ms: Optional[float] = None

    def submit(self, action: Action) -> None:
        self._commands.put((self._generation, Action(action)))

    def advance(self, now_ms: float) -> int:
        """Queue one TICK per full drop interval elapsed since the last one."""
        with self._lock:
            if self._last_drop_ms is None:
                self._last_drop_ms = now_ms
                return 0
            due = int((now_ms - self._last_drop_ms) // self.drop_interval_ms)
            for _ in range(due):
                self.submit(Action.TICK)
            self._last_drop_ms += due * self.drop_interval_ms
            return due

    def restart(self, seed: Optional[int] = None) -> Snapshot:
        with self._lock:
            self._generation += 1
            while True:
                try:
                    self._commands.get_nowait()
                except queue.Empty:
                    break
            self.game.reset(seed)
            self._last_drop_ms = None
            return self.game.snapshot()

    def _apply(self, item: Tuple[int, Action]) -> bool:
        # Caller holds _lock
        generation, action = item
        if generation != self._generation:
            return False
        self.game.step(action)
        return True

    def pump(self) -> int:
        """Apply every queued command; returns how many were applied."""
        applied = 0
        while True:
            with self._lock:
                try:
                    item = self._commands.get_nowait()
                except queue.Empty:
                    return applied
                if self._apply(item):
                    applied += 1

    def snapshot(self) -> Snapshot:
        with self._lock:
            return self.game.snapshot()

    def run(
        self,
        stop: threading.Event,
        clock: Callable[[], float] = time.monotonic,
        poll_s: float = 0.05,
    ) -> Snapshot:
        """Blocking consumer loop for threaded front-ends.

        Waits for commands until the next gravity deadline, then drops. Returns
        on game over, or once `stop` is set and the queue has been drained.
        """
        self.advance(clock() * 1000.0)
        while not self.game.game_over:
            try:
                item = self._commands.get(timeout=poll_s)
            except queue.Empty:
                item = None
            if item is not None:
                with self._lock:
                    self._apply(item)
            self.advance(clock() * 1000.0)
            if stop.is_set() and self._commands.empty():
                break
        self.pump()
        return self.snapshot()
