"""
Snake entity for the game engine.
"""

from collections import deque
from typing import Iterable, Optional

from .position import Position


class Snake:
    """
    Represents the snake on the board.

    Attributes:
        positions: deque of Position from head at index 0 to tail at the end
        death_reason: 'wall' or 'self' once the snake has collided
    """

    def __init__(self, positions: Iterable[Position]):
        self.positions = deque(Position(*p) for p in positions)
        self.death_reason: Optional[str] = None

    @property
    def head(self) -> Position:
        """Return the head position (first element)."""
        return self.positions[0]

    @property
    def tail(self) -> Position:
        return self.positions[-1]

    def __len__(self) -> int:
        return len(self.positions)

    def __contains__(self, cell) -> bool:
        return cell in self.positions

    def grow_to(self, head: Position) -> None:
        """Prepend a new head, keeping the tail."""
        self.positions.appendleft(head)

    def drop_tail(self) -> Position:
        return self.positions.pop()
