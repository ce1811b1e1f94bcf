"""
Direction command path shared by the keyboard and the pose sampler.

Both sources go through apply_direction(): the first command of a session
starts the game, then the heading is handed to the engine. Keyboard input
bypasses the debounce entirely.
"""

import logging
from typing import Callable, Optional

from domain.constants import DOWN, LEFT, RIGHT, UP, VALID_MOVES
from snake_engine import SnakeEngine

logger = logging.getLogger(__name__)

KEY_BINDINGS = {
    "w": UP,
    "arrowup": UP,
    "a": LEFT,
    "arrowleft": LEFT,
    "s": DOWN,
    "arrowdown": DOWN,
    "d": RIGHT,
    "arrowright": RIGHT,
}
START_KEYS = {" ", "space"}


def key_to_direction(key: str) -> Optional[str]:
    if not key:
        return None
    return KEY_BINDINGS.get(key.lower())


def apply_direction(engine: SnakeEngine, direction: Optional[str]) -> bool:
    """
    Start the game if it has not started yet, then request the heading.
    Returns False when `direction` is not a direction at all.
    """
    if direction not in VALID_MOVES:
        return False
    if not engine.get_state().game_started:
        engine.start()
    engine.set_direction(direction)
    return True


def handle_key(
    engine: SnakeEngine,
    key: str,
    on_command: Optional[Callable[[str], None]] = None,
) -> Optional[str]:
    """
    Handle one key press. Returns the direction it mapped to, if any.
    The start key only starts a game that has not started.

    `on_command` is called with every accepted direction, e.g. a bound
    SessionStats.record_command with the KEYBOARD source.
    """
    if key and key.lower() in START_KEYS:
        if not engine.get_state().game_started:
            engine.start()
        return None

    direction = key_to_direction(key)
    if direction is None:
        logger.debug("Ignoring unbound key %r", key)
        return None
    if apply_direction(engine, direction) and on_command is not None:
        on_command(direction)
    return direction
