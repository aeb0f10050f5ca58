from __future__ import annotations

from typing import Dict

import pygame

from tetris_rl.game import Action, GameDriver, TetrisGame
from .renderer import Renderer


KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_DOWN: Action.DOWN,
    pygame.K_UP: Action.ROTATE,
    pygame.K_a: Action.LEFT,
    pygame.K_d: Action.RIGHT,
    pygame.K_s: Action.DOWN,
    pygame.K_w: Action.ROTATE,
}


def run() -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = TetrisGame()
        driver = GameDriver(game)
        renderer = Renderer(cell_size=28)

        screen = pygame.display.set_mode(renderer.window_size(game.get_state()))
        pygame.display.set_caption("Tetris - Human Play")
        font = pygame.font.SysFont(None, 36)

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_r and game.game_over:
                        driver.restart()
                    else:
                        action = KEY_TO_ACTION.get(event.key)
                        if action is not None:
                            driver.submit(action)

            # Gravity on the configured cadence; stops once the game is over
            if not game.game_over:
                driver.advance(pygame.time.get_ticks())
            driver.pump()

            snap = driver.snapshot()
            renderer.draw(screen, snap.board())
            if snap.game_over:
                text = font.render("Game Over - R to restart, ESC to quit", True, (255, 255, 255))
                rect = text.get_rect(center=(screen.get_width() // 2, 30))
                screen.blit(text, rect)
            pygame.display.flip()

            clock.tick(60)
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
