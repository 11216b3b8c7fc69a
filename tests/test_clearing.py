from __future__ import annotations

from sand_puzzle_rl.game import ClearedCell, SandGrid, clear_spanning, find_spanning_components


def _staircase(grid: SandGrid, color: int, top: int) -> list:
    """Diagonal path touching only at corners, from column 0 to the last column."""
    cells = []
    for x in range(grid.width):
        y = top + (x % 2)
        grid.set(x, y, color)
        cells.append((x, y))
    return cells


def test_diagonal_path_is_removed_exactly():
    grid = SandGrid(9, 6)
    path = _staircase(grid, 2, top=3)
    result = clear_spanning(grid)
    assert result
    assert result.components == 1
    assert sorted((c.x, c.y) for c in result.cells) == sorted(path)
    assert all(c.color == 2 for c in result.cells)
    assert grid.occupied_count() == 0


def test_only_the_spanning_component_is_removed():
    grid = SandGrid(9, 8)
    path = _staircase(grid, 1, top=6)
    # Same color but not connected to the path
    grid.set(4, 1, 1)
    # Touching the path but a different color
    grid.set(4, 5, 3)
    result = clear_spanning(grid)
    assert result.removed == len(path)
    assert grid.get(4, 1) == 1
    assert grid.get(4, 5) == 3
    assert grid.occupied_count() == 2


def test_component_not_reaching_right_edge_stays():
    grid = SandGrid(6, 4)
    for x in range(5):
        grid.set(x, 3, 1)
    result = clear_spanning(grid)
    assert not result
    assert result.removed == 0
    assert grid.occupied_count() == 5


def test_component_must_touch_left_edge():
    grid = SandGrid(6, 4)
    for x in range(1, 6):
        grid.set(x, 3, 1)
    assert find_spanning_components(grid) == []


def test_two_colors_spanning_in_one_pass():
    grid = SandGrid(5, 6)
    for x in range(5):
        grid.set(x, 5, 1)
        grid.set(x, 4, 2)
    grid.set(0, 3, 2)
    result = clear_spanning(grid)
    assert result.components == 2
    assert result.removed == 11
    assert grid.occupied_count() == 0


def test_large_blob_counts_as_one_component():
    grid = SandGrid(4, 4)
    for y in range(2, 4):
        for x in range(4):
            grid.set(x, y, 5)
    components = find_spanning_components(grid)
    assert len(components) == 1
    assert len(components[0]) == 8


def test_cleared_cells_report_colors():
    grid = SandGrid(2, 2)
    grid.set(0, 1, 4)
    grid.set(1, 0, 4)
    result = clear_spanning(grid)
    assert sorted(result.cells) == [ClearedCell(0, 1, 4), ClearedCell(1, 0, 4)]
