from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import List, NamedTuple, Tuple

import numpy as np

from .grid import Coordinate, SandGrid


# Orthogonal and diagonal neighbours; diagonal chains of grains count as connected
NEIGHBOURS: Tuple[Tuple[int, int], ...] = (
    (0, 1), (0, -1), (1, 0), (-1, 0),
    (-1, -1), (-1, 1), (1, -1), (1, 1),
)


class ClearedCell(NamedTuple):
    x: int
    y: int
    color: int


@dataclass
class ClearResult:
    cells: List[ClearedCell] = field(default_factory=list)
    components: int = 0

    @property
    def removed(self) -> int:
        return len(self.cells)

    def __bool__(self) -> bool:
        return bool(self.cells)


def _flood(grid: np.ndarray, start: Coordinate, visited: np.ndarray) -> List[Coordinate]:
    height, width = grid.shape
    sx, sy = start
    color = grid[sy, sx]
    visited[sy, sx] = True
    queue = deque([start])
    component: List[Coordinate] = []
    while queue:
        x, y = queue.popleft()
        component.append((x, y))
        for dx, dy in NEIGHBOURS:
            nx, ny = x + dx, y + dy
            if 0 <= nx < width and 0 <= ny < height and not visited[ny, nx] and grid[ny, nx] == color:
                visited[ny, nx] = True
                queue.append((nx, ny))
    return component


def find_spanning_components(sand: SandGrid) -> List[List[Coordinate]]:
    """Return every same-color component that touches both the left and right edge.

    Seeds are taken from column 0, top to bottom. A single visited mask is
    shared by all searches, so each cell is explored at most once per pass.
    """
    grid = sand.grid
    visited = np.zeros(grid.shape, dtype=bool)
    right = sand.width - 1
    spanning: List[List[Coordinate]] = []
    for y in range(sand.height):
        if grid[y, 0] == 0 or visited[y, 0]:
            continue
        component = _flood(grid, (0, y), visited)
        if any(x == right for x, _ in component):
            spanning.append(component)
    return spanning


def clear_spanning(sand: SandGrid) -> ClearResult:
    """Remove all spanning components from the grid in one pass."""
    components = find_spanning_components(sand)
    result = ClearResult(components=len(components))
    for component in components:
        for x, y in component:
            color = sand.get(x, y)
            assert color is not None
            result.cells.append(ClearedCell(x, y, color))
            sand.clear(x, y)
    return result
