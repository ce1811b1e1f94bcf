"""
Random player implementation - picks random safe moves.
"""

import random
from typing import Dict, List, Optional

from domain.constants import DELTAS, OPPOSITES, VALID_MOVES
from domain.game_state import GameState
from domain.grid import is_valid_position
from domain.position import Position
from .base import Player


def safe_moves(game_state: GameState) -> Dict[str, Position]:
    """
    Map each move that neither hits a wall, reverses the heading, nor runs
    into the body (the tail is fine, it moves away) to the cell it reaches.
    """
    head = game_state.head
    body = set(game_state.snake[:-1])
    moves: Dict[str, Position] = {}
    for move in sorted(VALID_MOVES):
        if game_state.direction and OPPOSITES[move] == game_state.direction:
            continue
        dx, dy = DELTAS[move]
        cell = head.moved(dx, dy)
        if not is_valid_position(cell.x, cell.y, game_state.width, game_state.height):
            continue
        if cell in body:
            continue
        moves[move] = cell
    return moves


class RandomPlayer(Player):
    """
    A random AI that picks a valid direction that avoids walls and self-collisions.
    """

    def __init__(self, name: Optional[str] = None, rng: Optional[random.Random] = None):
        super().__init__(name)
        self.rng = rng or random.Random()

    def get_move(self, game_state: GameState) -> Optional[str]:
        valid_moves: List[str] = list(safe_moves(game_state))

        # If no valid moves, keep the heading (we'll die anyway)
        if not valid_moves:
            return game_state.direction

        return self.rng.choice(valid_moves)
