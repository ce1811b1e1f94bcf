"""
Session statistics aggregated from engine snapshots and input commands.

Game stats (score, length, food, elapsed time) come from subscribing to the
engine. Fitness stats (limb raises, moves, calories) come from the command
path via record_command().
"""

import logging
import math
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from domain.constants import DOWN, FOOD_SCORE, LEFT, NOT_STARTED, RIGHT, UP
from domain.game_state import GameState

logger = logging.getLogger(__name__)

POSE = "pose"
KEYBOARD = "keyboard"

# Rough calorie estimate per accepted command
CALORIES_PER_MOVE = {
    POSE: 0.5,
    KEYBOARD: 0.3,
}

# Which limb produced each direction
LIMB_FOR_DIRECTION = {
    LEFT: "left_hand",
    RIGHT: "right_hand",
    DOWN: "left_leg",
    UP: "right_leg",
}


@dataclass
class FitnessStats:
    raises: Dict[str, int] = field(
        default_factory=lambda: {limb: 0 for limb in LIMB_FOR_DIRECTION.values()}
    )
    total_moves: int = 0
    calorie_total: float = 0.0

    @property
    def calories_burned(self) -> int:
        return math.floor(self.calorie_total)


class SessionStats:
    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self.fitness = FitnessStats()
        self.score = 0
        self.snake_length = 0
        self.food_eaten = 0
        self.moves_count = 0
        self.games_played = 0
        self._started_at: Optional[float] = None
        self._ended_at: Optional[float] = None

    def on_state(self, state: GameState) -> None:
        """Engine subscriber."""
        if state.status == NOT_STARTED:
            self._reset_game()
            self.snake_length = state.length
            return

        if self._started_at is None or (not state.game_over and self._ended_at is not None):
            self._reset_game()
            self._started_at = self.clock()
            self.games_played += 1

        self.score = state.score
        self.snake_length = state.length
        self.food_eaten = state.score // FOOD_SCORE

        if state.game_over and self._ended_at is None:
            self._ended_at = self.clock()
            logger.info(
                "Session game %d finished: score=%d length=%d time=%ds",
                self.games_played, self.score, self.snake_length, self.game_time,
            )

    def _reset_game(self) -> None:
        self.score = 0
        self.food_eaten = 0
        self.moves_count = 0
        self._started_at = None
        self._ended_at = None

    def record_command(self, direction: str, source: str = POSE) -> None:
        """Count an accepted direction command from the pose or keyboard path."""
        if source not in CALORIES_PER_MOVE:
            raise ValueError(f"Unknown command source '{source}'")
        self.moves_count += 1
        self.fitness.total_moves += 1
        self.fitness.calorie_total += CALORIES_PER_MOVE[source]
        if source == POSE and direction in LIMB_FOR_DIRECTION:
            self.fitness.raises[LIMB_FOR_DIRECTION[direction]] += 1

    @property
    def game_time(self) -> int:
        """Whole seconds since the current game started (frozen at game over)."""
        if self._started_at is None:
            return 0
        end = self._ended_at if self._ended_at is not None else self.clock()
        return int(end - self._started_at)

    @property
    def moves_per_minute(self) -> int:
        if self.game_time == 0:
            return 0
        return round(self.fitness.total_moves / self.game_time * 60)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "game": {
                "score": self.score,
                "snake_length": self.snake_length,
                "game_time": self.game_time,
                "moves_count": self.moves_count,
                "food_eaten": self.food_eaten,
                "games_played": self.games_played,
            },
            "fitness": {
                **{f"{limb}_raises": count for limb, count in self.fitness.raises.items()},
                "total_moves": self.fitness.total_moves,
                "calories_burned": self.fitness.calories_burned,
                "moves_per_minute": self.moves_per_minute,
            },
        }


def format_time(seconds: int) -> str:
    mins, secs = divmod(int(seconds), 60)
    return f"{mins:02d}:{secs:02d}"
