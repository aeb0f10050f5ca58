"""Pure step machine for the falling-block game.

Every operation takes a `GameState` and returns the next one; the input state
is never modified. A rejected move or rotation returns the very same state
object, and nothing changes once `game_over` is set.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .grid import Grid, clear_lines, collides, empty_grid, lock
from .pieces import ActivePiece, Position, Shape, TetrominoType
from .spawner import PieceSpawner


ACTIVE = 2


@dataclass(frozen=True)
class GameState:
    grid: Grid
    active: ActivePiece
    game_over: bool = False

    def is_landed(self) -> bool:
        """Whether the next gravity step would lock the active piece."""
        return collides(self.active.shape, self.active.position.shifted(1, 0), self.grid)


@dataclass(frozen=True)
class Snapshot:
    """Read-only view handed to renderers and agents."""

    grid: Grid
    kind: TetrominoType
    shape: Shape
    position: Position
    game_over: bool

    def board(self) -> np.ndarray:
        # Overlay the falling piece on a copy of the grid
        board = self.grid.copy()
        if self.game_over:
            return board
        rows, cols = board.shape
        for r, c in zip(*np.nonzero(self.shape)):
            y = self.position.row + int(r)
            x = self.position.col + int(c)
            if 0 <= y < rows and 0 <= x < cols:
                board[y, x] = ACTIVE
        return board


def init_game(rows: int, cols: int, spawner: PieceSpawner) -> GameState:
    grid = empty_grid(rows, cols)
    active = spawner.spawn()
    return GameState(grid=grid, active=active, game_over=collides(active.shape, active.position, grid))


def tick(state: GameState, spawner: PieceSpawner) -> GameState:
    """Gravity: drop one row, or lock, clear and spawn the next piece."""
    if state.game_over:
        return state
    dropped = state.active.moved(1, 0)
    if not collides(dropped.shape, dropped.position, state.grid):
        return GameState(grid=state.grid, active=dropped)

    grid = clear_lines(lock(state.grid, state.active.shape, state.active.position))
    active = spawner.spawn()
    # Spawn is tested against the grid after the lock and clear
    game_over = collides(active.shape, active.position, grid)
    return GameState(grid=grid, active=active, game_over=game_over)


def move(state: GameState, d_row: int, d_col: int) -> GameState:
    if state.game_over:
        return state
    moved = state.active.moved(d_row, d_col)
    if collides(moved.shape, moved.position, state.grid):
        return state
    return GameState(grid=state.grid, active=moved)


def rotate(state: GameState) -> GameState:
    """Rotate clockwise in place; no kicks, rejected if the result collides."""
    if state.game_over:
        return state
    rotated = state.active.rotated()
    if collides(rotated.shape, rotated.position, state.grid):
        return state
    return GameState(grid=state.grid, active=rotated)


def snapshot(state: GameState) -> Snapshot:
    grid = state.grid.copy()
    grid.setflags(write=False)
    return Snapshot(
        grid=grid,
        kind=state.active.kind,
        shape=state.active.shape,
        position=state.active.position,
        game_over=state.game_over,
    )
