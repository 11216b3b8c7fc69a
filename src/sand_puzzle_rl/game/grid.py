from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

import numpy as np

from .rules import PALETTE_SIZE


Coordinate = Tuple[int, int]


class SandGrid:
    """Dense 2D field of sand grains.

    The grid uses 0 for empty cells and positive integers for grains.
    Integer values are 1-based color codes into the game palette.
    Cells are stored as ``grid[y, x]`` with ``y = 0`` at the top.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(0)

    def dimensions(self) -> Tuple[int, int]:
        return self.width, self.height

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _check_bounds(self, x: int, y: int) -> None:
        # numpy would silently wrap negative indices
        if not self.is_inside(x, y):
            raise IndexError(f"cell ({x}, {y}) outside {self.width}x{self.height} grid")

    def get(self, x: int, y: int) -> Optional[int]:
        self._check_bounds(x, y)
        value = int(self.grid[y, x])
        return value if value else None

    def set(self, x: int, y: int, color: int) -> None:
        self._check_bounds(x, y)
        if not 1 <= color <= PALETTE_SIZE:
            raise ValueError(f"invalid color code {color}; expected 1..{PALETTE_SIZE}, use clear() to empty a cell")
        self.grid[y, x] = color

    def clear(self, x: int, y: int) -> None:
        self._check_bounds(x, y)
        self.grid[y, x] = 0

    def collides(self, origin_x: int, origin_y: int, shape: np.ndarray) -> bool:
        """Return True if ``shape`` placed at the origin hits a wall, the floor or sand.

        Sub-cells above the top edge (negative y) never collide.
        """
        ys, xs = np.nonzero(shape)
        for dy, dx in zip(ys.tolist(), xs.tolist()):
            x = origin_x + dx
            y = origin_y + dy
            if x < 0 or x >= self.width or y >= self.height:
                return True
            if y >= 0 and self.grid[y, x] != 0:
                return True
        return False

    def stamp(self, cells: Iterable[Coordinate], color: int) -> List[Coordinate]:
        """Write ``color`` into every in-bounds cell and return the cells written."""
        written: List[Coordinate] = []
        for x, y in cells:
            if self.is_inside(x, y):
                self.set(x, y, color)
                written.append((x, y))
        return written

    def occupied_count(self) -> int:
        return int(np.count_nonzero(self.grid))

    def get_max_height(self) -> int:
        # y=0 is top; find first non-empty from top
        non_empty_rows = np.where(np.any(self.grid != 0, axis=1))[0]
        if non_empty_rows.size == 0:
            return 0
        return self.height - int(non_empty_rows[0])

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
