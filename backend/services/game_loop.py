"""
Cooperative single-threaded game loop.

Two independently timed drivers share one execution context: the engine is
stepped every `tick_ms`, and an optional pose sampler is polled on its own
cadence. Direction changes between two ticks are not queued; whatever
heading is committed when step() runs wins.
"""

import logging
import time
from typing import Callable, Optional

from players.base import Player
from pose.sampler import PoseSampler
from snake_engine import SnakeEngine

logger = logging.getLogger(__name__)

DEFAULT_TICK_MS = 150
MIN_SLEEP_MS = 1.0


class VirtualClock:
    """A clock that only moves when sleep() is called. Handy for fast headless runs."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.now += max(seconds, 0.0)


class GameLoop:
    def __init__(
        self,
        engine: SnakeEngine,
        tick_ms: float = DEFAULT_TICK_MS,
        sampler: Optional[PoseSampler] = None,
        player: Optional[Player] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if tick_ms <= 0:
            raise ValueError(f"tick_ms must be positive, got {tick_ms}")
        self.engine = engine
        self.tick_ms = tick_ms
        self.sampler = sampler
        self.player = player
        self.clock = clock
        self.sleep = sleep

        self.ticks = 0
        self._next_tick: Optional[float] = None
        self._stopped = False

    def now_ms(self) -> float:
        return self.clock() * 1000.0

    def stop(self) -> None:
        self._stopped = True

    def poll(self, now: float) -> bool:
        """
        Run one cooperative iteration at `now` (ms). Samples the pose input
        if due, then steps the engine if a tick is due. Returns True when a
        tick ran.
        """
        if self.sampler is not None:
            self.sampler.poll(now)

        if self._next_tick is None:
            self._next_tick = now + self.tick_ms
            return False
        if now < self._next_tick:
            return False

        self._next_tick += self.tick_ms
        if self._next_tick <= now:
            # fell behind; skip missed ticks instead of bursting
            self._next_tick = now + self.tick_ms

        if self.player is not None and self.engine.is_running:
            self.engine.set_direction(self.player.get_move(self.engine.get_state()))
        self.engine.step()
        self.ticks += 1
        return True

    def _sleep_until_next_event(self, now: float) -> None:
        wake = self._next_tick if self._next_tick is not None else now
        if self.sampler is not None and self.sampler.next_due() is not None:
            wake = min(wake, self.sampler.next_due())
        self.sleep(max(wake - now, MIN_SLEEP_MS) / 1000.0)

    def run(self, max_ticks: Optional[int] = None, stop_when_over: bool = True) -> int:
        """
        Drive the session until the game ends, `max_ticks` ticks have run or
        stop() is called. Returns the number of ticks run.
        """
        self._stopped = False
        logger.info(
            "Game loop running: tick=%sms, pose input=%s, autopilot=%s",
            self.tick_ms,
            "on" if self.sampler else "off",
            self.player.name if self.player else "none",
        )
        while not self._stopped:
            now = self.now_ms()
            self.poll(now)

            if stop_when_over and self.engine.get_state().game_over:
                break
            if max_ticks is not None and self.ticks >= max_ticks:
                break

            self._sleep_until_next_event(now)

        logger.info("Game loop stopped after %d ticks", self.ticks)
        return self.ticks
