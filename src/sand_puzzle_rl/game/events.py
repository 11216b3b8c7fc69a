from __future__ import annotations

from typing import List, Optional, Sequence

from .clearing import ClearedCell
from .pieces import Piece


class GameListener:
    """Receives notifications from a running game.

    Subclasses override only what they need. Callbacks run on the tick thread
    right after the state change and must not call back into the game.
    """

    def on_clear(self, cells: Sequence[ClearedCell]) -> None:
        pass

    def on_score_changed(self, score: int) -> None:
        pass

    def on_level_changed(self, level: int) -> None:
        pass

    def on_game_over(self, final_score: int) -> None:
        pass

    def on_piece_spawned(self, current: Piece, next_piece: Optional[Piece]) -> None:
        pass


class ListenerSet(GameListener):
    def __init__(self) -> None:
        self._listeners: List[GameListener] = []

    def add(self, listener: GameListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def on_clear(self, cells: Sequence[ClearedCell]) -> None:
        for listener in self._listeners:
            listener.on_clear(cells)

    def on_score_changed(self, score: int) -> None:
        for listener in self._listeners:
            listener.on_score_changed(score)

    def on_level_changed(self, level: int) -> None:
        for listener in self._listeners:
            listener.on_level_changed(level)

    def on_game_over(self, final_score: int) -> None:
        for listener in self._listeners:
            listener.on_game_over(final_score)

    def on_piece_spawned(self, current: Piece, next_piece: Optional[Piece]) -> None:
        for listener in self._listeners:
            listener.on_piece_spawned(current, next_piece)
