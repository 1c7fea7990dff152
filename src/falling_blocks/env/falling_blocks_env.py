from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import Action, GameConfig, GameSession, PieceCatalog


def _hex_to_rgb(color: str) -> Tuple[int, int, int]:
    color = color.lstrip("#")
    return int(color[0:2], 16), int(color[2:4], 16), int(color[4:6], 16)


class FallingBlocksEnv(gym.Env):
    """One action per step; gravity only moves the piece on SOFT_DROP.

    An episode ends when a piece cannot spawn. The underlying session has
    already restarted at that point, so the terminal observation is the
    fresh board.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 max_episode_steps: int = 10000) -> None:
        super().__init__()
        self.game = GameSession(config)
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)

        rows, cols = self.game.board.rows, self.game.board.cols
        n_kinds = len(PieceCatalog.ENTRIES)
        # Board cells are 0..7, the falling piece shows as -7..-1
        self.observation_space = spaces.Box(low=-n_kinds, high=n_kinds, shape=(rows, cols), dtype=np.int8)
        self.action_space = spaces.Discrete(len(Action))

        self._steps = 0

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.game.score,
            "lines_cleared": self.game.lines_cleared,
            "drop_interval": self.game.drop_interval,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.game.rng.seed(seed)
        self.game.reset()
        self._steps = 0
        return self.game.get_state(), self._get_info()

    def step(self, action):
        obs, gained, done, step_info = self.game.step(Action(int(action)))
        self._steps += 1
        terminated = bool(done)
        truncated = not terminated and self._steps >= self.max_episode_steps
        info = self._get_info()
        info["final_score"] = step_info["final_score"]
        return obs, float(gained), terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        state = self.game.get_state()
        cell = 12
        h, w = state.shape
        img = np.full((h * cell, w * cell, 3), 30, dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                v = int(state[y, x])
                if v:
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = _hex_to_rgb(PieceCatalog.color_for(v))
        return img

    def close(self) -> None:
        self.game.stop()
