from __future__ import annotations

import random

import numpy as np

from .grid import SandGrid


def settle_step(grid: SandGrid, rng: random.Random) -> int:
    """Advance the sand one cellular-automaton step and return the number of grains moved.

    Rows are processed bottom-up starting at the row above the floor. The
    occupied columns of a row are captured before any grain in that row moves
    and visited in a freshly shuffled order. Every move lands in the row below,
    which has already been processed, so no grain moves twice in one step.

    A grain falls straight down when it can; otherwise it picks a side at
    random and slides diagonally down to that side, or to the other side if
    the preferred one is blocked.
    """
    cells = grid.grid
    width = grid.width
    moved = 0
    for y in range(grid.height - 2, -1, -1):
        row = cells[y]
        below = cells[y + 1]
        columns = np.flatnonzero(row).tolist()
        if not columns:
            continue
        rng.shuffle(columns)
        for x in columns:
            color = row[x]
            if below[x] == 0:
                below[x] = color
                row[x] = 0
                moved += 1
                continue
            sides = (-1, 1) if rng.random() < 0.5 else (1, -1)
            for dx in sides:
                nx = x + dx
                if 0 <= nx < width and below[nx] == 0:
                    below[nx] = color
                    row[x] = 0
                    moved += 1
                    break
    return moved
