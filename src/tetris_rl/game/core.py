from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

import numpy as np

from . import engine
from .engine import GameState, Snapshot
from .spawner import PieceSpawner


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    DOWN = 2
    ROTATE = 3
    NONE = 4
    TICK = 5


# (d_row, d_col) for the translating actions
MOVES = {
    Action.LEFT: (0, -1),
    Action.RIGHT: (0, 1),
    Action.DOWN: (1, 0),
}


@dataclass
class GameConfig:
    rows: int = 20
    cols: int = 10
    drop_interval_ms: int = 500
    spawn_row: int = 0
    random_seed: Optional[int] = None

    def __post_init__(self) -> None:
        assert self.rows > 0 and self.cols > 0, "grid dimensions must be positive"
        assert self.drop_interval_ms > 0, "drop interval must be positive"


class TetrisGame:
    """Stateful owner of a single `GameState`.

    All mutation goes through `tick`, `move`, `rotate` (or `step`, which
    dispatches an `Action` to one of them). Each returns the new state.
    """

    def __init__(self, config: Optional[GameConfig] = None) -> None:
        self.config = config or GameConfig()
        self.spawner = PieceSpawner(
            self.config.cols,
            spawn_row=self.config.spawn_row,
            rng=random.Random(self.config.random_seed),
        )
        self.pieces_locked = 0
        self.step_count = 0
        self.state = engine.init_game(self.config.rows, self.config.cols, self.spawner)

    @property
    def game_over(self) -> bool:
        return self.state.game_over

    def reset(self, seed: Optional[int] = None) -> GameState:
        if seed is not None:
            self.spawner.seed(seed)
        self.pieces_locked = 0
        self.step_count = 0
        self.state = engine.init_game(self.config.rows, self.config.cols, self.spawner)
        return self.state

    def tick(self) -> GameState:
        if self.state.game_over:
            return self.state
        landed = self.state.is_landed()
        self.state = engine.tick(self.state, self.spawner)
        self.step_count += 1
        if landed:
            self.pieces_locked += 1
        return self.state

    def move(self, d_row: int, d_col: int) -> GameState:
        self.state = engine.move(self.state, d_row, d_col)
        return self.state

    def rotate(self) -> GameState:
        self.state = engine.rotate(self.state)
        return self.state

    def step(self, action: Action) -> GameState:
        if action == Action.TICK:
            return self.tick()
        if action == Action.ROTATE:
            return self.rotate()
        if action in MOVES:
            return self.move(*MOVES[action])
        return self.state

    def would_change(self, action: Action) -> bool:
        """Whether `action` would be accepted in the current state."""
        if self.state.game_over:
            return False
        if action == Action.ROTATE:
            return engine.rotate(self.state) is not self.state
        if action in MOVES:
            return engine.move(self.state, *MOVES[action]) is not self.state
        return action == Action.TICK

    def snapshot(self) -> Snapshot:
        return engine.snapshot(self.state)

    def get_state(self) -> np.ndarray:
        return self.snapshot().board()

    def get_game_stats(self) -> dict:
        return {
            "pieces_locked": self.pieces_locked,
            "steps_taken": self.step_count,
            "filled_cells": int(np.count_nonzero(self.state.grid)),
            "game_over": self.state.game_over,
        }


def print_grid(board: np.ndarray) -> None:
    glyphs = {0: "·", 1: "█", engine.ACTIVE: "▒"}
    for row in board:
        print("".join(glyphs.get(int(cell), "?") for cell in row))


def run_game_demo(seed: int = 0, max_ticks: int = 5000) -> None:  # pragma: no cover
    game = TetrisGame(GameConfig(random_seed=seed))
    print("=== Tetris Engine Demo ===")
    print(f"First piece: {game.state.active.kind.name}")
    print_grid(game.get_state())
    for _ in range(max_ticks):
        if game.game_over:
            break
        game.tick()
    print("\nFinal grid:")
    print_grid(game.get_state())
    print(f"Stats: {game.get_game_stats()}")


if __name__ == "__main__":  # pragma: no cover
    run_game_demo()
