"""
Minefield engine.

Provides the board settings, tile records and the MineField engine, plus a
Gymnasium environment for driving it programmatically.
"""
from .tile import Tile, TileState
from .settings import (
    BoardSettings,
    InvalidConfiguration,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
    PRESETS,
    preset,
)
from .stopwatch import Stopwatch
from .field import MineField, GameState
from .environment import MinefieldEnv, make_vec_env

__all__ = [
    "Tile",
    "TileState",
    "BoardSettings",
    "InvalidConfiguration",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "PRESETS",
    "preset",
    "Stopwatch",
    "MineField",
    "GameState",
    "MinefieldEnv",
    "make_vec_env",
]
