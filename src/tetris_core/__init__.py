"""Deterministic falling-block puzzle engine."""

from .config import GameConfig, SCORE_PER_LINE
from .errors import ConfigurationError, InvariantError
from .field import Cell, Field, create_field_grid
from .tetromino import Tetromino, TetrominoType, shape_blocks
from .engine import BlockCell, Command, GameEngine, GameState, new_game
from .clock import GravityTimer, TickTarget
from .utils import can_move, placement_is_valid, render_grid

__all__ = [
    "BlockCell",
    "Cell",
    "Command",
    "ConfigurationError",
    "Field",
    "GameConfig",
    "GameEngine",
    "GameState",
    "GravityTimer",
    "InvariantError",
    "SCORE_PER_LINE",
    "TickTarget",
    "Tetromino",
    "TetrominoType",
    "can_move",
    "create_field_grid",
    "new_game",
    "placement_is_valid",
    "render_grid",
    "shape_blocks",
]
