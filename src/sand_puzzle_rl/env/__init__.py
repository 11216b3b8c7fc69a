"""Gymnasium environments for Sand Puzzle RL."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Register default (classic) Sand Puzzle environment
register(
    id="SandPuzzle-v0",
    entry_point="sand_puzzle_rl.env.sand_puzzle_env:SandPuzzleEnv",
    kwargs={"mode": "classic"},
)

# Arcade: full palette from the start, faster drops
register(
    id="SandPuzzleArcade-v0",
    entry_point="sand_puzzle_rl.env.sand_puzzle_env:SandPuzzleEnv",
    kwargs={"mode": "arcade"},
)

__all__ = ["SandPuzzle-v0", "SandPuzzleArcade-v0"]
