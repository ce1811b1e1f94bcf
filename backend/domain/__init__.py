"""
Domain entities for the PoseSnake game engine.

This module contains the core game entities that are independent of
input devices, rendering and scheduling.
"""

from .constants import (
    UP, DOWN, LEFT, RIGHT, VALID_MOVES, OPPOSITES, DELTAS,
    NOT_STARTED, RUNNING, GAME_OVER, FOOD_SCORE,
)
from .position import Position
from .snake import Snake
from .game_state import GameState
from .grid import GridConfig, compute_grid, is_valid_position, manhattan_distance, pick_free_cell

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES', 'OPPOSITES', 'DELTAS',
    'NOT_STARTED', 'RUNNING', 'GAME_OVER', 'FOOD_SCORE',
    'Position',
    'Snake',
    'GameState',
    'GridConfig', 'compute_grid', 'is_valid_position', 'manhattan_distance', 'pick_free_cell',
]
