"""
Game constants for PoseSnake.
"""

# Movement directions (image space: y grows downward)
UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"
VALID_MOVES = {UP, DOWN, LEFT, RIGHT}

OPPOSITES = {
    UP: DOWN,
    DOWN: UP,
    LEFT: RIGHT,
    RIGHT: LEFT,
}

DELTAS = {
    UP: (0, -1),
    DOWN: (0, 1),
    LEFT: (-1, 0),
    RIGHT: (1, 0),
}

# Engine lifecycle
NOT_STARTED = "NOT_STARTED"
RUNNING = "RUNNING"
GAME_OVER = "GAME_OVER"

# Game settings
FOOD_SCORE = 10
INITIAL_SNAKE_LENGTH = 3
INITIAL_DIRECTION = RIGHT
# the initial snake runs left from the centre column
MIN_GRID_WIDTH = 2 * (INITIAL_SNAKE_LENGTH - 1)
DEFAULT_GRID_WIDTH = 20
DEFAULT_GRID_HEIGHT = 15
MIN_GRID_COLUMNS = 20
MIN_GRID_ROWS = 15
