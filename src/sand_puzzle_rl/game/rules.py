from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence, Tuple


class GameMode(str, Enum):
    CLASSIC = "classic"
    ARCADE = "arcade"


# Global palette; grid color codes are 1-based indexes into it
PALETTE_HEX: Tuple[str, ...] = ("#FF5555", "#55FF55", "#5555FF", "#FFFF55", "#FF55FF", "#55FFFF")


def _hex_to_rgb(value: str) -> Tuple[int, int, int]:
    value = value.lstrip("#")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


PALETTE_RGB: Tuple[Tuple[int, int, int], ...] = tuple(_hex_to_rgb(h) for h in PALETTE_HEX)
PALETTE_SIZE = len(PALETTE_HEX)


def color_rgb(code: int) -> Tuple[int, int, int]:
    if not 1 <= code <= PALETTE_SIZE:
        raise ValueError(f"unknown color code {code}")
    return PALETTE_RGB[code - 1]


@dataclass
class ScoringRules:
    points_per_cell: int = 10
    hard_drop_bonus: int = 2

    def score_for_clear(self, cells: int) -> int:
        if cells <= 0:
            return 0
        return cells * self.points_per_cell


@dataclass
class ProgressionRules:
    """Level, drop speed and palette growth.

    Drop intervals are measured in frames per automatic one-cell descent.
    """

    base_drop_interval: int = 30
    clears_per_level: int = 2
    palette_unlock_every: int = 3
    classic_start_colors: int = 3
    classic_min_interval: int = 5
    arcade_min_interval: int = 1

    def level_for_clears(self, clear_events: int) -> int:
        return clear_events // self.clears_per_level + 1

    def drop_interval(self, level: int, mode: GameMode) -> int:
        if mode == GameMode.ARCADE:
            return max(self.arcade_min_interval, self.base_drop_interval - level * 2)
        return max(self.classic_min_interval, self.base_drop_interval - level)

    def initial_palette(self, mode: GameMode) -> List[int]:
        if mode == GameMode.ARCADE:
            return list(range(1, PALETTE_SIZE + 1))
        return list(range(1, min(self.classic_start_colors, PALETTE_SIZE) + 1))

    def grow_palette(self, palette: Sequence[int], level: int, mode: GameMode) -> List[int]:
        """Return the palette after reaching ``level``; it only ever gains colors."""
        grown = list(palette)
        if mode != GameMode.CLASSIC:
            return grown
        if level % self.palette_unlock_every == 0 and len(grown) < PALETTE_SIZE:
            grown.append(len(grown) + 1)
        return grown
