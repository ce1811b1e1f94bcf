"""
GameState entity - an immutable snapshot of the game at a point in time.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .constants import GAME_OVER, NOT_STARTED, RUNNING
from .position import Position


@dataclass(frozen=True)
class GameState:
    """
    A snapshot of the game at a specific point in time.

    Attributes:
        snake: tuple of Position, head first
        food: the single food cell
        direction: committed heading (UP/DOWN/LEFT/RIGHT)
        score: points collected so far
        game_over: terminal flag, set on wall or self collision
        game_started: set by start(), cleared only by reset()
        width, height: board dimensions in cells
    """

    snake: Tuple[Position, ...]
    food: Position
    direction: Optional[str]
    score: int
    game_over: bool
    game_started: bool
    width: int
    height: int

    @property
    def head(self) -> Position:
        return self.snake[0]

    @property
    def length(self) -> int:
        return len(self.snake)

    @property
    def status(self) -> str:
        if self.game_over:
            return GAME_OVER
        if self.game_started:
            return RUNNING
        return NOT_STARTED

    def to_dict(self) -> Dict[str, Any]:
        """Plain JSON-friendly representation."""
        return {
            "snake": [[p.x, p.y] for p in self.snake],
            "food": [self.food.x, self.food.y],
            "direction": self.direction,
            "score": self.score,
            "game_over": self.game_over,
            "game_started": self.game_started,
            "width": self.width,
            "height": self.height,
        }

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        A = food
        T = snake body
        H = snake head
        (0,0) is the top left, matching camera/image coordinates.
        """
        board = [['.' for _ in range(self.width)] for _ in range(self.height)]

        fx, fy = self.food
        if 0 <= fx < self.width and 0 <= fy < self.height:
            board[fy][fx] = 'A'

        for idx, (x, y) in enumerate(self.snake):
            if not (0 <= x < self.width and 0 <= y < self.height):
                continue
            board[y][x] = 'H' if idx == 0 else 'T'

        result = [f"{y:2d} {' '.join(board[y])}" for y in range(self.height)]
        result.append("   " + " ".join(str(i % 10) for i in range(self.width)))
        return "\n".join(result)

    def __repr__(self):
        return (
            f"<GameState status={self.status}, score={self.score}, "
            f"length={self.length}, head={tuple(self.head)}, food={tuple(self.food)}>"
        )
