"""Grid primitives shared by the engine and the level generator."""

from dataclasses import dataclass
from enum import Enum


class Direction(Enum):
    # (dx, dy); y grows downwards as on a terminal
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]


_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


@dataclass(frozen=True)
class Point:
    x: int
    y: int

    def __add__(self, direction: Direction) -> "Point":
        dx, dy = direction.value
        return Point(self.x + dx, self.y + dy)

    def manhattan(self, other: "Point") -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)


def is_interior(point: Point, width: int, height: int) -> bool:
    """True when the cell lies strictly inside the border walls"""
    return 1 <= point.x <= width - 2 and 1 <= point.y <= height - 2
