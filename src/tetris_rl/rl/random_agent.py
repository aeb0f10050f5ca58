from __future__ import annotations

import argparse

import numpy as np
import gymnasium as gym

import tetris_rl.env  # noqa: F401
from tetris_rl.env.wrappers import ResampleInvalidActionWrapper


def run_random(steps: int = 2000, seed: int | None = None) -> float:
    env = ResampleInvalidActionWrapper(gym.make("Tetris-20x10-v0"))
    obs, info = env.reset(seed=seed)
    rng = np.random.default_rng(seed)
    total_reward = 0.0
    episodes = 0
    for _ in range(steps):
        # Prefer actions the engine would accept
        valid = np.flatnonzero(info.get("action_mask", []))
        if valid.size > 0:
            action = int(rng.choice(valid))
        else:
            action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            episodes += 1
            print(f"episode {episodes} ended after {info['steps']} steps, {info['pieces_locked']} pieces locked")
            obs, info = env.reset()
    env.close()
    print(f"Random agent total reward: {total_reward:.2f}")
    return total_reward


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--steps", type=int, default=2000)
    p.add_argument("--seed", type=int, default=None)
    return p


if __name__ == "__main__":  # pragma: no cover
    args = build_parser().parse_args()
    run_random(steps=args.steps, seed=args.seed)
