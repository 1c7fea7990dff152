from __future__ import annotations

import numpy as np
import gymnasium as gym

from falling_blocks.game import Action
from falling_blocks.game.collision import piece_fits, try_move, try_rotate


def compute_action_mask(game) -> np.ndarray:
    """Boolean mask over ``Action`` marking actions that change the piece.

    Drops always do something (fall or lock). NONE is always allowed so the
    mask is never empty.
    """
    mask = np.zeros((len(Action),), dtype=np.bool_)
    mask[Action.NONE] = True
    piece = game.piece
    if piece is None or not piece_fits(game.board, piece):
        return mask
    mask[Action.LEFT] = try_move(game.board, piece, -1, 0) is not None
    mask[Action.RIGHT] = try_move(game.board, piece, 1, 0) is not None
    mask[Action.ROTATE] = try_rotate(game.board, piece) is not None
    mask[Action.SOFT_DROP] = True
    mask[Action.HARD_DROP] = True
    return mask


class ActionMaskWrapper(gym.Wrapper):
    """Exposes ``get_action_mask()`` and adds it to ``info`` as ``action_mask``."""

    def reset(self, **kwargs):  # type: ignore[override]
        obs, info = self.env.reset(**kwargs)
        info["action_mask"] = self.get_action_mask()
        return obs, info

    def step(self, action):  # type: ignore[override]
        obs, reward, terminated, truncated, info = self.env.step(action)
        info["action_mask"] = self.get_action_mask()
        return obs, reward, terminated, truncated, info

    def get_action_mask(self) -> np.ndarray:
        return compute_action_mask(self.env.unwrapped.game)
