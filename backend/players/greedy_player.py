"""
Greedy player - heads for the food along the shortest Manhattan path.
"""

from typing import Optional

from domain.game_state import GameState
from domain.grid import manhattan_distance
from .base import Player
from .random_player import safe_moves


class GreedyPlayer(Player):
    """
    Picks the safe move that lands closest to the food. Ties prefer keeping
    the current heading, then alphabetical order so runs are reproducible.
    """

    def get_move(self, game_state: GameState) -> Optional[str]:
        moves = safe_moves(game_state)
        if not moves:
            return game_state.direction

        def rank(move: str):
            return (
                manhattan_distance(moves[move], game_state.food),
                move != game_state.direction,
                move,
            )

        return min(moves, key=rank)
