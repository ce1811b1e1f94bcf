"""
Tests for the GameState snapshot and related value types.
"""

import os
import sys

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain.constants import GAME_OVER, NOT_STARTED, RIGHT, RUNNING
from domain.game_state import GameState
from domain.position import Position
from domain.snake import Snake


def make_state(**changes):
    fields = dict(
        snake=(Position(2, 1), Position(1, 1), Position(0, 1)),
        food=Position(3, 2),
        direction=RIGHT,
        score=20,
        game_over=False,
        game_started=True,
        width=5,
        height=4,
    )
    fields.update(changes)
    return GameState(**fields)


class TestGameState:
    """Tests for GameState."""

    def test_status(self):
        """status follows the started/over flags."""
        assert make_state(game_started=False).status == NOT_STARTED
        assert make_state().status == RUNNING
        assert make_state(game_over=True).status == GAME_OVER

    def test_head_and_length(self):
        """head is the first cell; length counts all cells."""
        state = make_state()
        assert state.head == Position(2, 1)
        assert state.length == 3

    def test_to_dict(self):
        """to_dict() returns plain lists and values."""
        data = make_state().to_dict()
        assert data["snake"] == [[2, 1], [1, 1], [0, 1]]
        assert data["food"] == [3, 2]
        assert data["direction"] == RIGHT
        assert data["score"] == 20
        assert data["width"] == 5

    def test_print_board(self):
        """The board shows head, body and food with y growing downward."""
        board = make_state().print_board().split("\n")
        assert board[0] == " 0 . . . . ."
        assert board[1] == " 1 T T H . ."
        assert board[2] == " 2 . . . A ."
        assert board[-1] == "   0 1 2 3 4"

    def test_print_board_skips_out_of_bounds(self):
        """Cells outside the grid are not drawn."""
        state = make_state(snake=(Position(-1, 1), Position(0, 1)))
        assert " 1 T . . . ." in state.print_board()

    def test_repr(self):
        """repr includes status and score."""
        text = repr(make_state())
        assert "status=RUNNING" in text
        assert "score=20" in text

    def test_equality(self):
        """Snapshots with equal fields compare equal."""
        assert make_state() == make_state()


class TestSnake:
    """Tests for the Snake entity."""

    def test_head_tail_and_membership(self):
        """Snake converts tuples to Positions and exposes head and tail."""
        snake = Snake([(5, 5), (4, 5), (3, 5)])
        assert snake.head == Position(5, 5)
        assert snake.tail == Position(3, 5)
        assert (4, 5) in snake
        assert len(snake) == 3
        assert snake.death_reason is None

    def test_grow_and_drop(self):
        """grow_to() prepends, drop_tail() pops the last cell."""
        snake = Snake([(5, 5), (4, 5)])
        snake.grow_to(Position(6, 5))
        assert snake.drop_tail() == Position(4, 5)
        assert list(snake.positions) == [Position(6, 5), Position(5, 5)]

    def test_position_moved(self):
        """Position.moved() returns a new cell."""
        assert Position(1, 1).moved(0, -1) == Position(1, 0)
