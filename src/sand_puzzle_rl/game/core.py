from __future__ import annotations

import logging
import random
from collections import deque
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Callable, Deque, Optional, Union

import numpy as np

from .clearing import ClearResult, clear_spanning
from .events import GameListener, ListenerSet
from .grid import SandGrid
from .physics import settle_step
from .pieces import DEFAULT_BLOCK_SCALE, Piece, PieceQueue, random_piece
from .rules import GameMode, ProgressionRules, ScoringRules
from .session import GamePhase, Session


logger = logging.getLogger(__name__)


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE_CW = 2
    SOFT_DROP = 3
    HARD_DROP = 4
    NONE = 5


@dataclass
class GameConfig:
    width: int = 80
    height: int = 120
    block_scale: int = DEFAULT_BLOCK_SCALE
    # Melting a piece with any grain above this row ends the session
    danger_row: int = 20
    clear_check_interval: int = 10
    spawn_y: int = 0
    random_seed: Optional[int] = None

    def validate(self) -> None:
        if self.width <= 0 or self.height <= 1:
            raise ValueError(f"grid must be at least 1x2, got {self.width}x{self.height}")
        if self.block_scale < 1:
            raise ValueError(f"block_scale must be >= 1, got {self.block_scale}")
        # The I piece spans 4 blocks in either orientation
        if 4 * self.block_scale > self.width or 4 * self.block_scale > self.height:
            raise ValueError("block_scale too large for the grid")
        if self.clear_check_interval < 1:
            raise ValueError("clear_check_interval must be >= 1")
        if not 0 <= self.danger_row <= self.height:
            raise ValueError(f"danger_row must lie within [0, {self.height}]")


@dataclass
class RenderState:
    grid: np.ndarray
    piece: Optional[Piece]
    next_piece: Optional[Piece]
    score: int
    level: int
    phase: GamePhase
    danger_row: int


def _snapshot(piece: Optional[Piece]) -> Optional[Piece]:
    if piece is None:
        return None
    return replace(piece, shape=piece.shape.copy())


class SandPuzzleGame:
    """Falling-sand puzzle engine driven one frame at a time.

    Each :meth:`tick` settles the sand, periodically removes same-color
    clusters spanning the board from left to right, and drops the falling
    piece on a level-dependent cadence. When the piece lands it melts into
    sand and the preview piece takes its place.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        scoring: Optional[ScoringRules] = None,
        progression: Optional[ProgressionRules] = None,
        rng: Optional[random.Random] = None,
        piece_factory: Optional[Callable[[], Piece]] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.config.validate()
        self.scoring = scoring or ScoringRules()
        self.progression = progression or ProgressionRules()
        self.rng = rng or random.Random(self.config.random_seed)
        self.grid = SandGrid(self.config.width, self.config.height)
        self.session = Session()
        self.pieces = PieceQueue(piece_factory or self._random_piece)
        self.listeners = ListenerSet()
        self._intents: Deque[Action] = deque()

    @property
    def current_piece(self) -> Optional[Piece]:
        return self.pieces.current

    @property
    def next_piece(self) -> Optional[Piece]:
        return self.pieces.next

    @property
    def score(self) -> int:
        return self.session.score

    @property
    def level(self) -> int:
        return self.session.level

    @property
    def game_over(self) -> bool:
        return self.session.phase is GamePhase.GAME_OVER

    @property
    def drop_interval(self) -> int:
        return self.progression.drop_interval(self.session.level, self.session.mode)

    def add_listener(self, listener: GameListener) -> None:
        self.listeners.add(listener)

    def start(self, mode: Union[GameMode, str] = GameMode.CLASSIC) -> None:
        mode = GameMode(mode)
        self.grid.reset()
        self.session = Session(
            mode=mode,
            phase=GamePhase.PLAYING,
            palette=self.progression.initial_palette(mode),
        )
        self._intents.clear()
        self.pieces.prime()
        logger.info("Starting %s session on a %dx%d grid", mode.value, self.grid.width, self.grid.height)
        self.listeners.on_score_changed(self.session.score)
        self.listeners.on_level_changed(self.session.level)
        self._spawn_piece()

    def restart(self) -> None:
        self.start(self.session.mode)

    def _random_piece(self) -> Piece:
        return random_piece(self.rng, self.session.palette, self.config.block_scale)

    def _spawn_piece(self) -> None:
        piece = self.pieces.advance()
        piece.x = self.grid.width // 2 - piece.width // 2
        piece.y = self.config.spawn_y
        # Immediate collision check: if overlaps, game over
        if self.grid.collides(piece.x, piece.y, piece.shape):
            self._end_game("spawn blocked")
            return
        self.listeners.on_piece_spawned(piece, self.pieces.next)

    def _end_game(self, reason: str) -> None:
        if self.session.phase is GamePhase.GAME_OVER:
            return
        self.session.phase = GamePhase.GAME_OVER
        self._intents.clear()
        logger.info("Game over (%s) at frame %d, score %d", reason, self.session.frame_count, self.session.score)
        self.listeners.on_game_over(self.session.score)

    def _move(self, dx: int, dy: int) -> bool:
        piece = self.pieces.current
        if piece is None:
            return False
        if self.grid.collides(piece.x + dx, piece.y + dy, piece.shape):
            return False
        piece.x += dx
        piece.y += dy
        return True

    def _rotate(self) -> bool:
        piece = self.pieces.current
        if piece is None:
            return False
        rotated = piece.rotated()
        if self.grid.collides(rotated.x, rotated.y, rotated.shape):
            return False
        piece.shape = rotated.shape
        return True

    def hard_drop(self) -> int:
        """Slide the piece down until blocked; it melts on the next scheduled descent."""
        dropped = 0
        while self._move(0, 1):
            dropped += 1
        if dropped:
            self.session.score += dropped * self.scoring.hard_drop_bonus
            self.session.hard_drop_cells += dropped
            self.listeners.on_score_changed(self.session.score)
        return dropped

    def step(self, action: Action) -> bool:
        """Apply one intent right away; returns False if it was rejected."""
        if not self.session.playing:
            return False
        action = Action(action)
        if action == Action.LEFT:
            return self._move(-1, 0)
        if action == Action.RIGHT:
            return self._move(1, 0)
        if action == Action.ROTATE_CW:
            return self._rotate()
        if action == Action.SOFT_DROP:
            return self._move(0, 1)
        if action == Action.HARD_DROP:
            return self.hard_drop() > 0
        return False

    def queue_action(self, action: Action) -> None:
        """Buffer an intent to be applied at the start of the next tick."""
        if self.session.playing:
            self._intents.append(Action(action))

    def _drain_intents(self) -> None:
        while self._intents and self.session.playing:
            self.step(self._intents.popleft())

    def tick(self) -> None:
        if not self.session.playing:
            return
        session = self.session
        session.frame_count += 1
        self._drain_intents()

        settle_step(self.grid, self.rng)

        if session.frame_count % self.config.clear_check_interval == 0:
            self.run_clear_pass()

        if session.frame_count % self.drop_interval == 0 and not self._move(0, 1):
            self.melt()
            if self.session.playing:
                self._spawn_piece()

    def melt(self) -> None:
        """Commit the falling piece into the sand."""
        piece = self.pieces.current
        if piece is None:
            return
        written = self.grid.stamp(piece.cells(), piece.color)
        self.session.cells_placed += len(written)
        self.pieces.discard_current()
        if any(y < self.config.danger_row for _, y in written):
            self._end_game("piece melted above the danger row")
            return
        self.run_clear_pass()

    def run_clear_pass(self) -> ClearResult:
        result = clear_spanning(self.grid)
        if not result:
            return result
        session = self.session
        session.score += self.scoring.score_for_clear(result.removed)
        session.cells_cleared += result.removed
        session.clear_events += 1
        logger.debug(
            "Cleared %d cells in %d component(s) at frame %d",
            result.removed,
            result.components,
            session.frame_count,
        )
        self.listeners.on_clear(result.cells)
        self.listeners.on_score_changed(session.score)
        self._update_progression()
        return result

    def _update_progression(self) -> None:
        session = self.session
        new_level = self.progression.level_for_clears(session.clear_events)
        if new_level <= session.level:
            return
        session.level = new_level
        session.palette = self.progression.grow_palette(session.palette, new_level, session.mode)
        logger.debug("Level %d, drop interval %d, %d colors", new_level, self.drop_interval, len(session.palette))
        self.listeners.on_level_changed(new_level)

    def render_state(self) -> RenderState:
        return RenderState(
            grid=self.grid.clone_state(),
            piece=_snapshot(self.pieces.current),
            next_piece=_snapshot(self.pieces.next),
            score=self.session.score,
            level=self.session.level,
            phase=self.session.phase,
            danger_row=self.config.danger_row,
        )

    def get_state(self) -> np.ndarray:
        # Overlay current piece on a copy of the grid for observation
        state = self.grid.clone_state()
        piece = self.pieces.current
        if piece is not None and self.session.playing:
            for x, y in piece.cells():
                if self.grid.is_inside(x, y):
                    # Use negative to indicate falling piece overlay
                    state[y, x] = -piece.color
        return state
