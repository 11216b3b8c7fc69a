from __future__ import annotations

import random
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    L = 4
    J = 5
    S = 6
    Z = 7


Shape = np.ndarray


BASE_SHAPES = {
    TetrominoType.I: np.array([[1, 1, 1, 1]], dtype=np.int8),
    TetrominoType.O: np.array([[1, 1], [1, 1]], dtype=np.int8),
    TetrominoType.T: np.array([[0, 1, 0], [1, 1, 1]], dtype=np.int8),
    TetrominoType.L: np.array([[1, 0], [1, 0], [1, 1]], dtype=np.int8),
    TetrominoType.J: np.array([[0, 1], [0, 1], [1, 1]], dtype=np.int8),
    TetrominoType.S: np.array([[0, 1, 1], [1, 1, 0]], dtype=np.int8),
    TetrominoType.Z: np.array([[1, 1, 0], [0, 1, 1]], dtype=np.int8),
}

# Each abstract block is drawn as a square of grains this wide
DEFAULT_BLOCK_SCALE = 6


def scale_shape(shape: Shape, scale: int) -> Shape:
    if scale < 1:
        raise ValueError(f"block scale must be >= 1, got {scale}")
    return np.kron(shape, np.ones((scale, scale), dtype=np.int8)).astype(np.int8)


def rotate_clockwise(shape: Shape) -> Shape:
    """Quarter turn clockwise: ``new[i][j] = old[n-1-j][i]`` for an n-row source."""
    return np.ascontiguousarray(np.rot90(shape, 1, axes=(1, 0)))


@dataclass(eq=False)
class Piece:
    kind: TetrominoType
    shape: Shape
    color: int
    x: int = 0
    y: int = 0

    @property
    def width(self) -> int:
        return int(self.shape.shape[1])

    @property
    def height(self) -> int:
        return int(self.shape.shape[0])

    def rotated(self) -> "Piece":
        return replace(self, shape=rotate_clockwise(self.shape))

    def cells_at(self, origin_x: int, origin_y: int) -> List[Tuple[int, int]]:
        ys, xs = np.nonzero(self.shape)
        return [(origin_x + int(dx), origin_y + int(dy)) for dy, dx in zip(ys, xs)]

    def cells(self) -> List[Tuple[int, int]]:
        return self.cells_at(self.x, self.y)


PieceFactory = Callable[[], Piece]


def random_piece(rng: random.Random, palette: Sequence[int], scale: int = DEFAULT_BLOCK_SCALE) -> Piece:
    kind = rng.choice(list(TetrominoType))
    color = rng.choice(list(palette))
    return Piece(kind=kind, shape=scale_shape(BASE_SHAPES[kind], scale), color=color)


class PieceQueue:
    """Two-slot lookahead: the falling piece and the preview piece.

    ``next`` is filled by :meth:`prime` and refilled on every :meth:`advance`;
    ``current`` only ever receives the promoted preview piece.
    """

    def __init__(self, factory: PieceFactory) -> None:
        self.factory = factory
        self.current: Optional[Piece] = None
        self.next: Optional[Piece] = None

    def prime(self) -> None:
        self.current = None
        self.next = self.factory()

    def advance(self) -> Piece:
        if self.next is None:
            self.prime()
        promoted = self.next
        assert promoted is not None
        self.current = promoted
        self.next = self.factory()
        return promoted

    def discard_current(self) -> None:
        self.current = None
