from __future__ import annotations

from typing import Tuple

import numpy as np
import pygame

from tetris_rl.game.engine import ACTIVE


def _color_for_value(v: int) -> Tuple[int, int, int]:
    palette = {
        0: (20, 20, 26),
        1: (70, 200, 120),      # settled
        ACTIVE: (0, 240, 240),  # falling piece
    }
    return palette.get(v, (200, 200, 200))


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 20) -> None:
        self.cell_size = cell_size
        self.margin = margin

    def window_size(self, board: np.ndarray) -> Tuple[int, int]:
        h, w = board.shape
        return w * self.cell_size + self.margin * 2, h * self.cell_size + self.margin * 2

    def _grid_surface(self, board: np.ndarray) -> pygame.Surface:
        h, w = board.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((30, 30, 36))
        for y in range(h):
            for x in range(w):
                rect = pygame.Rect(
                    x * self.cell_size,
                    y * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(surf, _color_for_value(int(board[y, x])), rect)
        return surf

    def draw(self, screen: pygame.Surface, board: np.ndarray) -> None:
        screen.fill((10, 10, 14))
        screen.blit(self._grid_surface(board), (self.margin, self.margin))
