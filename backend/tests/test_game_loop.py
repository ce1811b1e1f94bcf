"""
Tests for services/game_loop.py - the cooperative tick driver.
"""

import os
import random
import sys
from unittest.mock import Mock

import pytest

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from controls import apply_direction
from domain.constants import RIGHT, UP
from domain.position import Position
from pose.classifier import DirectionClassifier
from pose.keypoints import Keypoint, Pose
from pose.providers import ScriptedPoseProvider
from pose.sampler import PoseSampler
from services.game_loop import GameLoop, VirtualClock
from snake_engine import SnakeEngine

RIGHT_HAND_UP = Pose([
    Keypoint("right_wrist", 300, 100, 0.9),
    Keypoint("right_shoulder", 300, 200, 0.9),
])


def make_engine():
    engine = SnakeEngine(20, 15, rng=random.Random(0))
    return engine


class TestVirtualClock:
    """Tests for VirtualClock."""

    def test_only_sleep_moves_time(self):
        """Time advances by exactly what was slept."""
        clock = VirtualClock()
        assert clock() == 0.0
        clock.sleep(0.25)
        clock.sleep(-1)
        assert clock() == 0.25


class TestPoll:
    """Tests for GameLoop.poll()."""

    def test_ticks_on_interval(self):
        """The engine steps once per tick interval, starting one interval in."""
        engine = make_engine()
        engine.start()
        engine.food = Position(19, 14)
        loop = GameLoop(engine, tick_ms=150)

        assert loop.poll(0) is False
        assert loop.poll(100) is False
        assert loop.poll(150) is True
        assert loop.poll(200) is False
        assert loop.poll(300) is True
        assert engine.get_state().head == Position(12, 7)

    def test_skips_missed_ticks(self):
        """A long stall produces one tick, not a burst."""
        engine = make_engine()
        engine.start()
        loop = GameLoop(engine, tick_ms=150)
        loop.poll(0)

        assert loop.poll(1000) is True
        assert loop.poll(1001) is False
        assert loop.ticks == 1

    def test_player_sets_direction_before_step(self):
        """The autopilot's move is committed right before the tick."""
        engine = make_engine()
        engine.start()
        engine.food = Position(19, 14)
        player = Mock()
        player.get_move.return_value = UP
        loop = GameLoop(engine, tick_ms=100, player=player)

        loop.poll(0)
        loop.poll(100)

        assert engine.get_state().head == Position(10, 6)
        player.get_move.assert_called_once()

    def test_invalid_tick(self):
        """tick_ms must be positive."""
        with pytest.raises(ValueError):
            GameLoop(make_engine(), tick_ms=0)


class TestRun:
    """Tests for GameLoop.run()."""

    def test_max_ticks(self):
        """run() stops after max_ticks ticks."""
        engine = make_engine()
        engine.start()
        engine.food = Position(19, 14)
        clock = VirtualClock()
        loop = GameLoop(engine, tick_ms=150, clock=clock, sleep=clock.sleep)

        assert loop.run(max_ticks=5) == 5
        assert engine.get_state().head == Position(15, 7)

    def test_stops_at_game_over(self):
        """run() stops when the snake hits the wall."""
        engine = make_engine()
        engine.start()
        clock = VirtualClock()
        loop = GameLoop(engine, tick_ms=150, clock=clock, sleep=clock.sleep)

        ticks = loop.run(max_ticks=100)

        assert engine.get_state().game_over is True
        assert ticks == 10

    def test_pose_input_starts_and_steers(self):
        """A held pose starts the game through the command path and keeps RIGHT."""
        engine = make_engine()
        clock = VirtualClock()
        sampler = PoseSampler(
            ScriptedPoseProvider([RIGHT_HAND_UP] * 100),
            lambda d: apply_direction(engine, d),
            classifier=DirectionClassifier(dwell_ms=220),
            target_fps=20,
        )
        loop = GameLoop(engine, tick_ms=150, sampler=sampler, clock=clock, sleep=clock.sleep)

        loop.run(max_ticks=4)

        state = engine.get_state()
        assert state.game_started is True
        assert state.direction == RIGHT
        assert state.head.x > 10
        assert sampler.frames > loop.ticks

    def test_stop(self):
        """stop() from a subscriber ends the loop."""
        engine = make_engine()
        engine.start()
        clock = VirtualClock()
        loop = GameLoop(engine, tick_ms=150, clock=clock, sleep=clock.sleep)
        engine.subscribe(lambda state: loop.stop())

        assert loop.run(max_ticks=50) == 1
