from __future__ import annotations

import numpy as np
import gymnasium as gym
from gymnasium import spaces


class PooledObservationWrapper(gym.ObservationWrapper):
    """Pools the raw (rows, cols) grid into a coarse (2, rows/f, cols/f) float image.

    Channel 0 is the fraction of each block filled with sand, channel 1 the
    fraction covered by the falling piece. Trailing rows/columns that do not
    fill a whole block are dropped.
    """

    def __init__(self, env: gym.Env, factor: int = 4):
        super().__init__(env)
        assert isinstance(env.observation_space, spaces.Box)
        assert len(env.observation_space.shape) == 2, "Expected a 2D grid observation"
        if factor < 1:
            raise ValueError("factor must be >= 1")
        height, width = env.observation_space.shape
        self.factor = int(factor)
        self.out_h = height // self.factor
        self.out_w = width // self.factor
        if self.out_h == 0 or self.out_w == 0:
            raise ValueError(f"factor {factor} is larger than the grid")
        self.observation_space = spaces.Box(
            low=0.0, high=1.0, shape=(2, self.out_h, self.out_w), dtype=np.float32
        )

    def _pool(self, mask: np.ndarray) -> np.ndarray:
        f = self.factor
        cropped = mask[: self.out_h * f, : self.out_w * f].astype(np.float32)
        return cropped.reshape(self.out_h, f, self.out_w, f).mean(axis=(1, 3))

    def observation(self, observation: np.ndarray) -> np.ndarray:  # type: ignore[override]
        sand = self._pool(observation > 0)
        piece = self._pool(observation < 0)
        return np.stack((sand, piece)).astype(np.float32)
