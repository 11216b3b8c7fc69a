from __future__ import annotations

import argparse
import os

import gymnasium as gym

# Ensure envs are registered
import sand_puzzle_rl.env  # noqa: F401
from sand_puzzle_rl.env.wrappers import PooledObservationWrapper


def make_env(env_id: str, pool: int, frames_per_step: int, seed: int | None = None) -> gym.Env:
    env = gym.make(env_id, frames_per_step=frames_per_step)
    # Raw 120x80 grid is too large for an MLP policy
    env = PooledObservationWrapper(env, factor=pool)
    if seed is not None:
        env.reset(seed=seed)
    return env


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--mode", choices=["classic", "arcade"], default="classic")
    p.add_argument("--timesteps", type=int, default=200_000)
    p.add_argument("--pool", type=int, default=4)
    p.add_argument("--frames_per_step", type=int, default=4)
    p.add_argument("--logdir", type=str, default="./logs/ppo")
    p.add_argument("--save_path", type=str, default="./models/ppo_sandpuzzle.zip")
    p.add_argument("--n_envs", type=int, default=4)
    return p


def main() -> None:
    args = build_parser().parse_args()

    env_id = "SandPuzzleArcade-v0" if args.mode == "arcade" else "SandPuzzle-v0"

    from stable_baselines3 import PPO
    from stable_baselines3.common.vec_env import SubprocVecEnv, VecMonitor

    def make_env_idx(i: int):
        def thunk():
            return make_env(env_id, args.pool, args.frames_per_step, seed=i)
        return thunk

    vec_env = SubprocVecEnv([make_env_idx(i) for i in range(args.n_envs)])
    vec_env = VecMonitor(vec_env)
    model = PPO(
        policy="MlpPolicy",
        env=vec_env,
        verbose=1,
        tensorboard_log=args.logdir,
    )

    os.makedirs(os.path.dirname(args.save_path), exist_ok=True)
    model.learn(total_timesteps=args.timesteps)
    model.save(args.save_path)


if __name__ == "__main__":  # pragma: no cover
    main()
