from __future__ import annotations

from typing import List

import numpy as np
import pytest

from tetris_rl.game import ActivePiece, PieceSpawner, TetrominoType, get_shape


class FixedSpawner(PieceSpawner):
    """Spawns a scripted sequence of kinds, repeating the last one."""

    def __init__(self, cols: int, kinds: List[TetrominoType]) -> None:
        super().__init__(cols)
        self.kinds = list(kinds)

    def spawn(self) -> ActivePiece:
        kind = self.kinds.pop(0) if len(self.kinds) > 1 else self.kinds[0]
        return ActivePiece(kind=kind, shape=get_shape(kind), position=self.spawn_position)


@pytest.fixture
def fixed_spawner():
    def factory(cols: int, *kinds: TetrominoType) -> FixedSpawner:
        return FixedSpawner(cols, list(kinds))
    return factory


def grid_from(rows: List[str]) -> np.ndarray:
    """Build a grid from strings of '.' (empty) and '#' (settled)."""
    return np.array([[1 if ch == "#" else 0 for ch in row] for row in rows], dtype=np.int8)
