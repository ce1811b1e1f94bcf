"""
Single-player snake engine.

Owns the authoritative game state, advances it one cell per step() and
publishes an immutable GameState snapshot to every subscriber after each
state-changing operation.
"""

import logging
import random
from typing import Callable, List, Optional, Tuple

from domain.constants import (
    DELTAS,
    FOOD_SCORE,
    INITIAL_DIRECTION,
    INITIAL_SNAKE_LENGTH,
    MIN_GRID_WIDTH,
    OPPOSITES,
    VALID_MOVES,
)
from domain.game_state import GameState
from domain.grid import is_valid_position, pick_free_cell
from domain.position import Position
from domain.snake import Snake

logger = logging.getLogger(__name__)

StateCallback = Callable[[GameState], None]


class SnakeEngine:
    """
    Manages:
      - Board (width, height)
      - The snake and its committed heading
      - A single food cell
      - Score and lifecycle flags (started / over)
      - Subscribers notified with snapshots
    """

    def __init__(self, width: int, height: int, rng: Optional[random.Random] = None):
        self._check_dimensions(width, height)
        self.width = width
        self.height = height
        self.rng = rng or random.Random()
        self._subscribers: List[StateCallback] = []
        self._reset_state()

    @staticmethod
    def _check_dimensions(width: int, height: int) -> None:
        if width < MIN_GRID_WIDTH or height < 1:
            raise ValueError(
                f"Grid {width}x{height} is too small; need at least {MIN_GRID_WIDTH}x1 cells."
            )

    # ------------------------------------------------------------------
    # State construction
    # ------------------------------------------------------------------
    def _reset_state(self) -> None:
        center_x = self.width // 2
        center_y = self.height // 2
        self.snake = Snake(
            Position(center_x - i, center_y) for i in range(INITIAL_SNAKE_LENGTH)
        )
        self.direction: Optional[str] = INITIAL_DIRECTION
        self.food = self._generate_food()
        self.score = 0
        self.game_over = False
        self.game_started = False

    def _generate_food(self) -> Position:
        return pick_free_cell(self.width, self.height, self.snake.positions, rng=self.rng)

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------
    @property
    def is_running(self) -> bool:
        return self.game_started and not self.game_over

    @property
    def status(self) -> str:
        return self.get_state().status

    @property
    def grid_size(self) -> Tuple[int, int]:
        return self.width, self.height

    @property
    def death_reason(self) -> Optional[str]:
        return self.snake.death_reason

    def get_state(self) -> GameState:
        """
        Return a snapshot of the current board as a GameState.
        """
        return GameState(
            snake=tuple(self.snake.positions),
            food=self.food,
            direction=self.direction,
            score=self.score,
            game_over=self.game_over,
            game_started=self.game_started,
            width=self.width,
            height=self.height,
        )

    # ------------------------------------------------------------------
    # Subscribers
    # ------------------------------------------------------------------
    def subscribe(self, callback: StateCallback) -> None:
        if callback not in self._subscribers:
            self._subscribers.append(callback)

    def unsubscribe(self, callback: StateCallback) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def _notify(self) -> None:
        if not self._subscribers:
            return
        state = self.get_state()
        for callback in list(self._subscribers):
            callback(state)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def set_direction(self, direction: Optional[str]) -> None:
        """
        Commit a new heading. Ignored when the game is not running, when the
        value is not a direction, or when it reverses the committed heading.
        """
        if not self.is_running or direction not in VALID_MOVES:
            return
        if self.direction and OPPOSITES[direction] == self.direction:
            return
        self.direction = direction

    def start(self) -> None:
        self._reset_state()
        self.game_started = True
        logger.info("Game started on %dx%d grid", self.width, self.height)
        self._notify()

    def reset(self) -> None:
        self._reset_state()
        logger.info("Game reset")
        self._notify()

    def step(self) -> None:
        """
        Advance one tick:
          1) Compute the candidate head from the committed heading
          2) Wall or self collision ends the game
          3) Otherwise prepend the head; eat (grow + score + new food) or drop the tail
        """
        if not self.is_running or self.direction is None:
            return

        dx, dy = DELTAS[self.direction]
        head = self.snake.head.moved(dx, dy)

        if not is_valid_position(head.x, head.y, self.width, self.height):
            self._end_game("wall")
            return

        if head in self.snake:
            self._end_game("self")
            return

        self.snake.grow_to(head)

        if head == self.food:
            self.score += FOOD_SCORE
            self.food = self._generate_food()
            logger.debug("Food eaten at %s, score %d", tuple(head), self.score)
        else:
            self.snake.drop_tail()

        self._notify()

    def _end_game(self, reason: str) -> None:
        self.game_over = True
        self.snake.death_reason = reason
        logger.info("Game over (%s collision). Final score: %d", reason, self.score)
        self._notify()

    def resize(self, width: int, height: int) -> None:
        """
        Change the grid size.

        A game that has not started is rebuilt centred on the new grid. A
        running game keeps going when the snake still fits; food outside the
        new bounds is moved, and a snake segment outside the bounds ends the
        game. A finished game only records the new size.
        """
        self._check_dimensions(width, height)
        if (width, height) == (self.width, self.height):
            return
        self.width = width
        self.height = height

        if not self.game_started:
            self._reset_state()
            self._notify()
            return

        if self.game_over:
            return

        out_of_bounds = any(
            not is_valid_position(p.x, p.y, width, height) for p in self.snake.positions
        )
        if out_of_bounds:
            self._end_game("wall")
            return

        if not is_valid_position(self.food.x, self.food.y, width, height):
            self.food = self._generate_food()
            self._notify()
