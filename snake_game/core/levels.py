"""
Obstacle layouts for each level.

Every level-up throws away the previous layout and scatters
``level * 3 + 5`` short wall segments across the board. Cells that would land
on the snake, on the food, outside the interior, or within three steps of the
snake's head are dropped individually, so a segment may come out shorter than
drawn or vanish entirely.
"""

import logging
from typing import Iterable, Optional, Set

from .board import Point, is_interior
from .random_source import RandomSource

logger = logging.getLogger(__name__)

MIN_SEGMENT_LENGTH = 3
MAX_SEGMENT_LENGTH = 8  # exclusive
HEAD_CLEARANCE = 3


def obstacle_count(level: int) -> int:
    """Number of wall segments attempted for a level"""
    return level * 3 + 5


def generate_level(width: int, height: int, level: int, snake: Iterable[Point],
                   food: Optional[Point], rng: RandomSource) -> Set[Point]:
    snake_cells = list(snake)
    occupied = set(snake_cells)
    head = snake_cells[0] if snake_cells else None
    obstacles: Set[Point] = set()

    for _ in range(obstacle_count(level)):
        horizontal = rng.coin()
        length = rng.randrange(MIN_SEGMENT_LENGTH, MAX_SEGMENT_LENGTH)
        start_x = rng.randrange(2, width - 2)
        start_y = rng.randrange(2, height - 2)

        for i in range(length):
            if horizontal:
                cell = Point(start_x + i, start_y)
            else:
                cell = Point(start_x, start_y + i)

            if not is_interior(cell, width, height):
                continue
            if cell in occupied or cell == food:
                continue
            if head is not None and head.manhattan(cell) <= HEAD_CLEARANCE:
                continue
            obstacles.add(cell)

    logger.debug("level %d: %d obstacle cells from %d segments",
                 level, len(obstacles), obstacle_count(level))
    return obstacles
