"""Game module for Sand Puzzle RL.

Exports the simulation engine and supporting classes:
- SandGrid: Grid storage, collision tests and melting
- Piece / PieceQueue: Scaled tetromino pieces and the current/next lookahead
- settle_step: One step of the falling-sand automaton
- clear_spanning: Flood-fill removal of left-to-right color paths
- ScoringRules / ProgressionRules: Score, level, speed and palette rules
- SandPuzzleGame: Main game loop and state management
"""

from .grid import SandGrid
from .pieces import Piece, PieceQueue, TetrominoType, rotate_clockwise, scale_shape
from .physics import settle_step
from .clearing import ClearedCell, ClearResult, clear_spanning, find_spanning_components
from .rules import GameMode, ProgressionRules, ScoringRules, PALETTE_RGB
from .session import GamePhase, Session
from .events import GameListener
from .core import Action, GameConfig, RenderState, SandPuzzleGame

__all__ = [
    "SandGrid",
    "Piece",
    "PieceQueue",
    "TetrominoType",
    "rotate_clockwise",
    "scale_shape",
    "settle_step",
    "ClearedCell",
    "ClearResult",
    "clear_spanning",
    "find_spanning_components",
    "GameMode",
    "ProgressionRules",
    "ScoringRules",
    "PALETTE_RGB",
    "GamePhase",
    "Session",
    "GameListener",
    "Action",
    "GameConfig",
    "RenderState",
    "SandPuzzleGame",
]
