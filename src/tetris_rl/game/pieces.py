from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


Shape = np.ndarray


def _frozen(rows: List[List[int]]) -> Shape:
    arr = np.array(rows, dtype=np.int8)
    arr.setflags(write=False)
    return arr


BASE_SHAPES: Dict[TetrominoType, Shape] = {
    TetrominoType.I: _frozen([[1, 1, 1, 1]]),
    TetrominoType.O: _frozen([[1, 1], [1, 1]]),
    TetrominoType.T: _frozen([[0, 1, 0], [1, 1, 1]]),
    TetrominoType.S: _frozen([[0, 1, 1], [1, 1, 0]]),
    TetrominoType.Z: _frozen([[1, 1, 0], [0, 1, 1]]),
    TetrominoType.J: _frozen([[1, 0, 0], [1, 1, 1]]),
    TetrominoType.L: _frozen([[0, 0, 1], [1, 1, 1]]),
}


def shape_names() -> List[str]:
    return [kind.name for kind in TetrominoType]


def get_shape(kind: TetrominoType | str) -> Shape:
    """Catalog lookup by enum member or letter."""
    if isinstance(kind, str):
        kind = TetrominoType[kind]
    return BASE_SHAPES[kind]


def rotate(shape: Shape) -> Shape:
    """Return the 90 degree clockwise rotation of `shape` as a new array.

    Row i of the result is column i of the input read bottom to top, so an
    R x C shape becomes C x R. The input is never modified.
    """
    rotated = np.ascontiguousarray(np.rot90(shape, 1, axes=(1, 0)))
    rotated.setflags(write=False)
    return rotated


@dataclass(frozen=True)
class Position:
    row: int
    col: int

    def shifted(self, d_row: int, d_col: int) -> "Position":
        return Position(self.row + d_row, self.col + d_col)


@dataclass(frozen=True)
class ActivePiece:
    kind: TetrominoType
    shape: Shape
    position: Position

    def moved(self, d_row: int, d_col: int) -> "ActivePiece":
        return ActivePiece(self.kind, self.shape, self.position.shifted(d_row, d_col))

    def rotated(self) -> "ActivePiece":
        return ActivePiece(self.kind, rotate(self.shape), self.position)

    def cells(self) -> List[Tuple[int, int]]:
        """Absolute (row, col) of every occupied cell, including ones above the grid."""
        rows, cols = np.nonzero(self.shape)
        return [
            (self.position.row + int(r), self.position.col + int(c))
            for r, c in zip(rows, cols)
        ]
