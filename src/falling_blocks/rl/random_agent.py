from __future__ import annotations

import argparse
import random

import gymnasium as gym

import falling_blocks.env  # noqa: F401
from falling_blocks.env.wrappers import ActionMaskWrapper


def run_random(steps: int = 2000, seed: int = 0) -> tuple[float, int]:
    rng = random.Random(seed)
    env = ActionMaskWrapper(gym.make("FallingBlocks-10x20-v0"))
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    sessions = 0
    for _ in range(steps):
        # Prefer actions that actually move the piece
        valid = [i for i, ok in enumerate(info["action_mask"]) if ok]
        action = rng.choice(valid) if valid else env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            sessions += int(terminated)
            obs, info = env.reset()
    env.close()
    return total_reward, sessions


def main() -> None:
    p = argparse.ArgumentParser()
    p.add_argument("--steps", type=int, default=2000)
    p.add_argument("--seed", type=int, default=0)
    args = p.parse_args()
    total_reward, sessions = run_random(args.steps, args.seed)
    print(f"Random agent total reward: {total_reward:.2f} over {sessions} finished game(s)")


if __name__ == "__main__":  # pragma: no cover
    main()
