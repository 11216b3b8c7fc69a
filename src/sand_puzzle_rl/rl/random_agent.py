from __future__ import annotations

import gymnasium as gym

import sand_puzzle_rl.env  # noqa: F401


def run_random(steps: int = 2000, env_id: str = "SandPuzzle-v0", seed: int | None = None) -> float:
    env = gym.make(env_id, frames_per_step=4)
    env.action_space.seed(seed)
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    for _ in range(steps):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            obs, info = env.reset()
    env.close()
    print(f"Random agent total reward: {total_reward:.2f} (last score {info['score']}, level {info['level']})")
    return total_reward


if __name__ == "__main__":  # pragma: no cover
    run_random()
