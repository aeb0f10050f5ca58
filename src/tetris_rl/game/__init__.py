"""Game module for Tetris RL.

Exports the core game engine and supporting classes:
- TetrominoType / get_shape / rotate: shape catalog and clockwise rotation
- collides / lock / clear_lines: pure grid operations
- PieceSpawner: uniform random piece selection
- GameState / Snapshot: immutable engine state and render view
- TetrisGame: stateful owner of one game
- GameDriver: single-consumer command channel for timers and input
"""

from .pieces import ActivePiece, Position, TetrominoType, get_shape, rotate, shape_names
from .grid import clear_lines, collides, empty_grid, full_rows, lock
from .spawner import PieceSpawner
from .engine import GameState, Snapshot, init_game, snapshot
from .core import Action, GameConfig, TetrisGame
from .driver import GameDriver

__all__ = [
    "ActivePiece",
    "Position",
    "TetrominoType",
    "get_shape",
    "rotate",
    "shape_names",
    "clear_lines",
    "collides",
    "empty_grid",
    "full_rows",
    "lock",
    "PieceSpawner",
    "GameState",
    "Snapshot",
    "init_game",
    "snapshot",
    "Action",
    "GameConfig",
    "TetrisGame",
    "GameDriver",
]
