"""
Grid geometry helpers.

Pure functions that size the board for a container and pick free cells.
"""

import logging
import random
from dataclasses import dataclass
from typing import Collection, Optional

from .constants import MIN_GRID_COLUMNS, MIN_GRID_ROWS
from .position import Position

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GridConfig:
    width: int
    height: int
    cell_size: int


def compute_grid(
    container_width: int,
    container_height: int,
    min_cell_size: int = 20,
    max_cell_size: int = 40,
) -> GridConfig:
    """
    Pick the largest cell size (capped at max_cell_size) that still fits
    MIN_GRID_COLUMNS x MIN_GRID_ROWS cells, then clamp up to min_cell_size.
    Never raises; tiny containers degrade to the minimum cell size.
    """
    cell_size = min(
        container_width // MIN_GRID_COLUMNS,
        container_height // MIN_GRID_ROWS,
        max_cell_size,
    )
    cell_size = max(cell_size, min_cell_size, 1)

    width = max(container_width // cell_size, 0)
    height = max(container_height // cell_size, 0)
    return GridConfig(width=width, height=height, cell_size=cell_size)


def is_valid_position(x: int, y: int, width: int, height: int) -> bool:
    return 0 <= x < width and 0 <= y < height


def manhattan_distance(a, b) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def pick_free_cell(
    width: int,
    height: int,
    excluded: Collection = (),
    rng: Optional[random.Random] = None,
) -> Position:
    """
    Return a random cell (x, y) that is not in `excluded`.

    Sampling is bounded by width * height attempts. If every sample hits an
    excluded cell we scan the board for the first free one; a completely
    full board returns the last sample.

    Raises:
        ValueError: If the board has no cells (width or height below 1), as
            compute_grid() reports for containers smaller than one cell.
    """
    if width < 1 or height < 1:
        raise ValueError(f"Cannot place a cell on an empty {width}x{height} grid")
    rng = rng or random
    blocked = set(excluded)
    max_attempts = max(width * height, 1)

    cell = Position(0, 0)
    for _ in range(max_attempts):
        cell = Position(rng.randrange(width), rng.randrange(height))
        if cell not in blocked:
            return cell

    for y in range(height):
        for x in range(width):
            if (x, y) not in blocked:
                return Position(x, y)

    logger.warning("No free cell left on a %dx%d grid", width, height)
    return cell
