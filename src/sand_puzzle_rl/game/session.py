from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from .rules import GameMode


class GamePhase(str, Enum):
    IDLE = "idle"
    PLAYING = "playing"
    GAME_OVER = "game_over"


@dataclass
class Session:
    """Mutable per-session state, owned by a single game instance."""

    mode: GameMode = GameMode.CLASSIC
    phase: GamePhase = GamePhase.IDLE
    score: int = 0
    level: int = 1
    clear_events: int = 0
    frame_count: int = 0
    palette: List[int] = field(default_factory=list)
    # Statistics
    cells_placed: int = 0
    cells_cleared: int = 0
    hard_drop_cells: int = 0

    @property
    def playing(self) -> bool:
        return self.phase is GamePhase.PLAYING
