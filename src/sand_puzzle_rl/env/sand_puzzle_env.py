from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from sand_puzzle_rl.game import Action, GameConfig, GameMode, SandPuzzleGame
from sand_puzzle_rl.game.rules import PALETTE_RGB, PALETTE_SIZE


class SandPuzzleEnv(gym.Env):
    """One agent step = one intent followed by ``frames_per_step`` simulation frames."""

    metadata = {"render_modes": ["rgb_array"], "render_fps": 60}

    def __init__(self, config: Optional[GameConfig] = None, mode: str = "classic",
                 render_mode: Optional[str] = None,
                 frames_per_step: int = 1,
                 max_episode_steps: int = 20000,
                 terminal_penalty: float = 0.0) -> None:
        super().__init__()
        if frames_per_step < 1:
            raise ValueError("frames_per_step must be >= 1")
        self.game = SandPuzzleGame(config)
        self.mode = GameMode(mode)
        self.render_mode = render_mode
        self.frames_per_step = int(frames_per_step)
        self.max_episode_steps = int(max_episode_steps)
        self.terminal_penalty = float(terminal_penalty)

        width, height = self.game.grid.dimensions()
        # Sand is 1..N, the falling piece is overlaid as -1..-N
        self.observation_space = spaces.Box(
            low=-PALETTE_SIZE, high=PALETTE_SIZE, shape=(height, width), dtype=np.int8
        )
        self.action_space = spaces.Discrete(len(Action))

        self._last_obs: Optional[np.ndarray] = None
        self._steps = 0

    def _get_info(self) -> Dict[str, Any]:
        session = self.game.session
        return {
            "score": session.score,
            "level": session.level,
            "clear_events": session.clear_events,
            "frame": session.frame_count,
            "stack_height": self.game.grid.get_max_height(),
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.game.rng.seed(seed)
        mode = (options or {}).get("mode", self.mode)
        self.game.start(mode)
        self._steps = 0
        obs = self.game.get_state()
        self._last_obs = obs
        return obs, self._get_info()

    def step(self, action: int):
        score_before = self.game.score
        self.game.step(Action(int(action)))
        for _ in range(self.frames_per_step):
            if self.game.game_over:
                break
            self.game.tick()

        self._steps += 1
        terminated = bool(self.game.game_over)
        truncated = self._steps >= self.max_episode_steps and not terminated

        reward = float(self.game.score - score_before)
        if terminated:
            reward += self.terminal_penalty

        obs = self.game.get_state()
        self._last_obs = obs
        return obs, reward, terminated, truncated, self._get_info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            # human rendering delegated to the pygame front end; noop
            return None
        state = self._last_obs if self._last_obs is not None else self.game.get_state()
        lut = np.zeros((PALETTE_SIZE + 1, 3), dtype=np.uint8)
        lut[1:] = np.array(PALETTE_RGB, dtype=np.uint8)
        codes = np.abs(state.astype(np.int16))
        img = lut[codes]
        # Dim the sand slightly so the falling piece stands out
        img[state > 0] = (img[state > 0] * 0.8).astype(np.uint8)
        return img

    def close(self) -> None:
        pass
