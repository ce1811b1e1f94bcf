"""
Position value type.
"""

from typing import NamedTuple


class Position(NamedTuple):
    """An immutable grid cell. Compares equal to a plain (x, y) tuple."""

    x: int
    y: int

    def moved(self, dx: int, dy: int) -> "Position":
        return Position(self.x + dx, self.y + dy)
