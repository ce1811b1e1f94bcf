"""
Tests for the autopilot players.
"""

import os
import random
import sys

import pytest

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain.constants import DOWN, LEFT, RIGHT, UP, VALID_MOVES
from domain.game_state import GameState
from domain.position import Position
from players import GreedyPlayer, RandomPlayer, get_player_class, make_player, safe_moves


def make_state(snake, direction=RIGHT, food=(9, 9), width=10, height=10):
    return GameState(
        snake=tuple(Position(*p) for p in snake),
        food=Position(*food),
        direction=direction,
        score=0,
        game_over=False,
        game_started=True,
        width=width,
        height=height,
    )


class TestSafeMoves:
    """Tests for safe_moves()."""

    def test_corner(self):
        """In the top-left corner heading LEFT only DOWN is safe."""
        state = make_state([(0, 0), (1, 0), (2, 0)], direction=LEFT)
        assert set(safe_moves(state)) == {DOWN}

    def test_excludes_reversal_and_body(self):
        """The reverse heading and body cells are excluded."""
        state = make_state([(5, 5), (5, 6), (4, 6), (4, 5), (4, 4)], direction=UP)
        moves = safe_moves(state)
        assert DOWN not in moves
        assert LEFT not in moves
        assert moves[UP] == Position(5, 4)
        assert moves[RIGHT] == Position(6, 5)


class TestRandomPlayer:
    """Tests for RandomPlayer."""

    def test_returns_valid_move(self):
        """RandomPlayer.get_move() returns a valid direction."""
        player = RandomPlayer(rng=random.Random(0))
        state = make_state([(5, 5), (4, 5), (3, 5)])
        assert player.get_move(state) in VALID_MOVES

    def test_avoids_walls(self):
        """RandomPlayer only picks safe moves when some exist."""
        player = RandomPlayer(rng=random.Random(0))
        state = make_state([(0, 0), (1, 0), (2, 0)], direction=LEFT)
        for _ in range(20):
            assert player.get_move(state) == DOWN

    def test_trapped_keeps_heading(self):
        """With no safe move the current heading is kept."""
        player = RandomPlayer(rng=random.Random(0))
        state = make_state([(0, 0), (1, 0), (1, 1), (0, 1), (0, 2)], direction=LEFT, width=2, height=3)
        assert player.get_move(state) == LEFT


class TestGreedyPlayer:
    """Tests for GreedyPlayer."""

    def test_turns_toward_food(self):
        """Food above the head makes the player turn UP."""
        state = make_state([(5, 5), (4, 5), (3, 5)], food=(5, 2))
        assert GreedyPlayer().get_move(state) == UP

    def test_goes_straight_for_food_ahead(self):
        """Food straight ahead keeps the heading."""
        state = make_state([(5, 5), (4, 5), (3, 5)], food=(8, 5))
        assert GreedyPlayer().get_move(state) == RIGHT

    def test_tie_prefers_current_heading(self):
        """Equally close options keep the current heading."""
        state = make_state([(5, 5), (4, 5), (3, 5)], food=(7, 3))
        assert GreedyPlayer().get_move(state) == RIGHT


class TestRegistry:
    """Tests for the player registry."""

    def test_lookup(self):
        """Known names resolve to player classes."""
        assert get_player_class("random") is RandomPlayer
        assert get_player_class(" Greedy ") is GreedyPlayer
        assert isinstance(make_player("random", rng=random.Random(1)), RandomPlayer)
        assert make_player("greedy").name == "GreedyPlayer"

    def test_unknown_player(self):
        """Unknown names raise ValueError."""
        with pytest.raises(ValueError):
            get_player_class("llm")
