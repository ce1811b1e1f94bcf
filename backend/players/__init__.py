"""
Autopilot players for PoseSnake.

Players pick a heading from a snapshot before each tick. They drive demo
and headless sessions when no camera or keyboard is attached.
"""

from typing import Dict, Type

from .base import Player
from .random_player import RandomPlayer, safe_moves
from .greedy_player import GreedyPlayer

PLAYERS: Dict[str, Type[Player]] = {
    "random": RandomPlayer,
    "greedy": GreedyPlayer,
}


def get_player_class(key: str) -> Type[Player]:
    """
    Look up an autopilot by name.

    Raises:
        ValueError: If key is not recognized.
    """
    key = (key or "").strip().lower()
    if key not in PLAYERS:
        available = ", ".join(sorted(PLAYERS))
        raise ValueError(f"Unknown player '{key}'. Available players: {available}")
    return PLAYERS[key]


def make_player(key: str, rng=None) -> Player:
    cls = get_player_class(key)
    if issubclass(cls, RandomPlayer):
        return cls(rng=rng)
    return cls()


__all__ = [
    'Player',
    'RandomPlayer',
    'GreedyPlayer',
    'safe_moves',
    'PLAYERS',
    'get_player_class',
    'make_player',
]
