"""
Base player interface for autopilot sessions.
"""

from typing import Optional

from domain.game_state import GameState


class Player:
    """
    Base class/interface for autopilot logic.

    A player looks at a snapshot before each tick and returns the heading it
    wants. The engine still applies its own rules (reversal guard, lifecycle).
    """

    def __init__(self, name: Optional[str] = None):
        self.name = name or self.__class__.__name__

    def get_move(self, game_state: GameState) -> Optional[str]:
        """
        Return a move direction given the current game state.

        Args:
            game_state: Current state of the game

        Returns:
            One of: "UP", "DOWN", "LEFT", "RIGHT", or None to keep the heading
        """
        raise NotImplementedError
