from __future__ import annotations

import random
from typing import Callable, List

import pytest

from sand_puzzle_rl.game import GameConfig, GameListener, Piece, SandPuzzleGame, TetrominoType, scale_shape
from sand_puzzle_rl.game.pieces import BASE_SHAPES


class RecordingListener(GameListener):
    def __init__(self) -> None:
        self.clears: List[list] = []
        self.scores: List[int] = []
        self.levels: List[int] = []
        self.game_overs: List[int] = []
        self.spawns: List[tuple] = []

    def on_clear(self, cells) -> None:
        self.clears.append(list(cells))

    def on_score_changed(self, score: int) -> None:
        self.scores.append(score)

    def on_level_changed(self, level: int) -> None:
        self.levels.append(level)

    def on_game_over(self, final_score: int) -> None:
        self.game_overs.append(final_score)

    def on_piece_spawned(self, current, next_piece) -> None:
        self.spawns.append((current, next_piece))


def fixed_piece(kind: TetrominoType, color: int, scale: int) -> Callable[[], Piece]:
    def factory() -> Piece:
        return Piece(kind=kind, shape=scale_shape(BASE_SHAPES[kind], scale), color=color)
    return factory


@pytest.fixture
def listener() -> RecordingListener:
    return RecordingListener()


@pytest.fixture
def small_game(listener: RecordingListener) -> SandPuzzleGame:
    config = GameConfig(width=16, height=40, block_scale=2, danger_row=20)
    game = SandPuzzleGame(config, rng=random.Random(7), piece_factory=fixed_piece(TetrominoType.I, 1, 2))
    game.add_listener(listener)
    game.start("classic")
    return game


def fill_stripes(game: SandPuzzleGame) -> None:
    """Fill every cell with column-alternating colors; no component spans the board."""
    for y in range(game.grid.height):
        for x in range(game.grid.width):
            game.grid.set(x, y, 1 if x % 2 == 0 else 2)
