from __future__ import annotations

import random

import numpy as np
import pytest

from sand_puzzle_rl.game import Piece, PieceQueue, TetrominoType, rotate_clockwise, scale_shape
from sand_puzzle_rl.game.pieces import BASE_SHAPES, random_piece


@pytest.mark.parametrize("kind", list(TetrominoType))
@pytest.mark.parametrize("scale", [1, 3])
def test_four_rotations_restore_shape(kind, scale):
    shape = scale_shape(BASE_SHAPES[kind], scale)
    rotated = shape
    for _ in range(4):
        rotated = rotate_clockwise(rotated)
    assert np.array_equal(rotated, shape)


def test_rotate_clockwise_layout():
    l_shape = np.array([[1, 0], [1, 0], [1, 1]], dtype=np.int8)
    expected = np.array([[1, 1, 1], [1, 0, 0]], dtype=np.int8)
    assert np.array_equal(rotate_clockwise(l_shape), expected)


def test_rotate_clockwise_index_mapping():
    source = np.arange(6).reshape(3, 2)
    rotated = rotate_clockwise(source)
    n = source.shape[0]
    for i in range(rotated.shape[0]):
        for j in range(rotated.shape[1]):
            assert rotated[i, j] == source[n - 1 - j, i]


def test_scale_shape_blocks():
    scaled = scale_shape(BASE_SHAPES[TetrominoType.T], 2)
    assert scaled.shape == (4, 6)
    assert int(scaled.sum()) == 16
    assert scaled[0, 2] == 1 and scaled[1, 3] == 1
    assert scaled[0, 0] == 0
    with pytest.raises(ValueError):
        scale_shape(BASE_SHAPES[TetrominoType.O], 0)


def test_piece_cells():
    piece = Piece(TetrominoType.O, scale_shape(BASE_SHAPES[TetrominoType.O], 1), color=2, x=3, y=4)
    assert sorted(piece.cells()) == [(3, 4), (3, 5), (4, 4), (4, 5)]
    assert sorted(piece.cells_at(0, 0)) == [(0, 0), (0, 1), (1, 0), (1, 1)]


def test_rotated_piece_keeps_pose_and_color():
    piece = Piece(TetrominoType.I, scale_shape(BASE_SHAPES[TetrominoType.I], 1), color=5, x=2, y=1)
    turned = piece.rotated()
    assert turned.shape.shape == (4, 1)
    assert (turned.x, turned.y, turned.color) == (2, 1, 5)
    assert piece.shape.shape == (1, 4)


def test_random_piece_uses_enabled_palette():
    rng = random.Random(3)
    colors = {random_piece(rng, [1, 2], scale=2).color for _ in range(50)}
    assert colors == {1, 2}


def test_random_piece_is_reproducible():
    rng_a, rng_b = random.Random(11), random.Random(11)
    for _ in range(10):
        a = random_piece(rng_a, [1, 2, 3])
        b = random_piece(rng_b, [1, 2, 3])
        assert (a.kind, a.color) == (b.kind, b.color)
        assert np.array_equal(a.shape, b.shape)


def test_piece_queue_promotes_preview():
    counter = iter(range(100))

    def factory() -> Piece:
        return Piece(TetrominoType.O, BASE_SHAPES[TetrominoType.O].copy(), color=next(counter) % 6 + 1)

    queue = PieceQueue(factory)
    queue.prime()
    assert queue.current is None
    preview = queue.next
    assert preview is not None

    promoted = queue.advance()
    assert promoted is preview
    assert queue.current is preview
    assert queue.next is not None and queue.next is not preview

    queue.discard_current()
    assert queue.current is None
    assert queue.next is not None
