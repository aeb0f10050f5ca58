from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from tetris_rl.game import Action, GameConfig, TetrisGame
from tetris_rl.game.engine import ACTIVE


# Agent-facing actions; gravity is applied by the env after each one
AGENT_ACTIONS = (Action.LEFT, Action.RIGHT, Action.DOWN, Action.ROTATE, Action.NONE)


def _compute_action_mask(game: TetrisGame) -> np.ndarray:
    mask = np.zeros((len(AGENT_ACTIONS),), dtype=np.bool_)
    if game.game_over:
        return mask
    for idx, action in enumerate(AGENT_ACTIONS):
        mask[idx] = action == Action.NONE or game.would_change(action)
    return mask


def _visible_cells(game: TetrisGame) -> int:
    piece = game.state.active
    return sum(1 for y, _ in piece.cells() if y >= 0)


class TetrisEnv(gym.Env):
    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 reward_weights: Optional[Dict[str, float]] = None,
                 max_episode_steps: int = 10000,
                 terminal_penalty: float = -1.0) -> None:
        super().__init__()
        self.game = TetrisGame(config)
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)
        self.terminal_penalty = float(terminal_penalty)
        self.reward_weights: Dict[str, float] = {
            "survive": 0.01,   # reward per gravity step survived
            "lines": 1.0,      # reward per cleared row
            "lines_sq": 0.5,   # extra for multiple rows at once (quadratic)
        }
        if reward_weights:
            self.reward_weights.update({k: float(v) for k, v in reward_weights.items()})

        rows, cols = self.game.config.rows, self.game.config.cols
        self.observation_space = spaces.Box(low=0, high=ACTIVE, shape=(rows, cols), dtype=np.int8)
        self.action_space = spaces.Discrete(len(AGENT_ACTIONS))

        self._last_obs: Optional[np.ndarray] = None
        self._steps = 0

    def _get_obs(self) -> np.ndarray:
        return self.game.get_state().astype(np.int8)

    def _get_info(self) -> Dict[str, Any]:
        return {
            "action_mask": _compute_action_mask(self.game),
            "pieces_locked": self.game.pieces_locked,
            "steps": self._steps,
        }

    def get_action_mask(self) -> np.ndarray:
        return _compute_action_mask(self.game)

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.reset(seed)
        self._steps = 0
        obs = self._get_obs()
        self._last_obs = obs
        return obs, self._get_info()

    def step(self, action: int):
        self.game.step(AGENT_ACTIONS[int(action)])

        # Rows cleared by this gravity step, counted from the occupied-cell delta
        locked_before = self.game.pieces_locked
        filled_before = int(np.count_nonzero(self.game.state.grid))
        piece_cells = _visible_cells(self.game)
        self.game.tick()
        lines = 0
        if self.game.pieces_locked > locked_before:
            filled_after = int(np.count_nonzero(self.game.state.grid))
            lines = (filled_before + piece_cells - filled_after) // self.game.config.cols

        reward_components: Dict[str, float] = {
            "survive": self.reward_weights["survive"],
            "lines": self.reward_weights["lines"] * float(lines),
            "lines_sq": self.reward_weights["lines_sq"] * float(lines * lines),
        }
        terminated = bool(self.game.game_over)
        if terminated:
            reward_components["terminal"] = self.terminal_penalty
        self._steps += 1
        truncated = (not terminated) and self._steps >= self.max_episode_steps
        reward = float(sum(reward_components.values()))

        obs = self._get_obs()
        info = self._get_info()
        info["reward_components"] = reward_components
        info["lines_cleared"] = lines
        self._last_obs = obs
        return obs, reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            board = self._last_obs if self._last_obs is not None else self._get_obs()
            cell = 12
            h, w = board.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            palette = {0: (30, 30, 36), 1: (70, 200, 120), ACTIVE: (200, 180, 60)}
            for y in range(h):
                for x in range(w):
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = palette[int(board[y, x])]
            return img
        return None

    def close(self) -> None:
        pass
