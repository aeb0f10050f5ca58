from __future__ import annotations

import numpy as np

from .pieces import Position, Shape


FILLED = 1

Grid = np.ndarray


def empty_grid(rows: int, cols: int) -> Grid:
    assert rows > 0 and cols > 0, "grid dimensions must be positive"
    grid = np.zeros((rows, cols), dtype=np.int8)
    grid.setflags(write=False)
    return grid


def collides(shape: Shape, position: Position, grid: Grid) -> bool:
    """Whether `shape` anchored at `position` hits a wall, the floor or a settled cell.

    Cells above row 0 are only checked against the side walls, so a piece may
    sit partly above the visible field while it spawns.
    """
    rows, cols = grid.shape
    for r, c in zip(*np.nonzero(shape)):
        y = position.row + int(r)
        x = position.col + int(c)
        if y >= rows or x < 0 or x >= cols:
            return True
        if y >= 0 and grid[y, x] != 0:
            return True
    return False


def lock(grid: Grid, shape: Shape, position: Position) -> Grid:
    """Return a copy of `grid` with the shape's cells written in as settled.

    Cells above row 0 are dropped; any other cell outside the grid is a
    caller error.
    """
    rows, cols = grid.shape
    locked = grid.copy()
    for r, c in zip(*np.nonzero(shape)):
        y = position.row + int(r)
        x = position.col + int(c)
        if y < 0:
            continue
        assert y < rows and 0 <= x < cols, f"cell ({y}, {x}) outside {rows}x{cols} grid"
        locked[y, x] = FILLED
    locked.setflags(write=False)
    return locked


def full_rows(grid: Grid) -> np.ndarray:
    return np.where(np.all(grid != 0, axis=1))[0]


def clear_lines(grid: Grid) -> Grid:
    """Drop every full row and pad the top with as many empty rows."""
    rows_to_clear = full_rows(grid)
    if rows_to_clear.size == 0:
        return grid
    num = int(rows_to_clear.size)
    kept = np.delete(grid, rows_to_clear, axis=0)
    new_rows = np.zeros((num, grid.shape[1]), dtype=grid.dtype)
    cleared = np.vstack((new_rows, kept))
    assert cleared.shape == grid.shape
    cleared.setflags(write=False)
    return cleared
