from __future__ import annotations

import random
from typing import Optional

from .pieces import ActivePiece, Position, TetrominoType, get_shape


class PieceSpawner:
    """Uniform, independent draw over the seven tetrominoes.

    There is no bag or repeat protection; the same kind may come up twice in a row.
    """

    def __init__(self, cols: int, spawn_row: int = 0, rng: Optional[random.Random] = None) -> None:
        assert cols > 0
        self.cols = cols
        self.spawn_row = spawn_row
        self.rng = rng or random.Random()

    @property
    def spawn_position(self) -> Position:
        return Position(self.spawn_row, self.cols // 2 - 1)

    def seed(self, seed: Optional[int]) -> None:
        self.rng.seed(seed)

    def spawn(self) -> ActivePiece:
        kind = self.rng.choice(list(TetrominoType))
        return ActivePiece(kind=kind, shape=get_shape(kind), position=self.spawn_position)
