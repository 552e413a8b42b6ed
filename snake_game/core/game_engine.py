#!/usr/bin/env python3
"""
Snake game engine
Core game logic with no ties to any particular display.
Can be driven from a terminal, a kivy window or a test harness.
"""

import logging
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, FrozenSet, List, Optional, Set, Tuple

from .board import Direction, Point
from .levels import generate_level
from .random_source import RandomSource, SystemRandomSource

logger = logging.getLogger(__name__)

MIN_WIDTH = 10
MIN_HEIGHT = 10
INITIAL_LENGTH = 3
POINTS_PER_LEVEL = 5


class SnakeGameError(RuntimeError):
    pass


class BoardFullError(SnakeGameError):
    """No free interior cell is left for food"""


class DeathCause(Enum):
    WALL = "wall"
    SELF = "self"
    OBSTACLE = "obstacle"
    BOARD_FULL = "board_full"


class TickResult(Enum):
    IDLE = "idle"
    MOVED = "moved"
    ATE = "ate"
    LEVEL_UP = "level_up"
    HIT_WALL = "hit_wall"
    HIT_SELF = "hit_self"
    HIT_OBSTACLE = "hit_obstacle"
    BOARD_FULL = "board_full"


@dataclass(frozen=True)
class RenderSnapshot:
    """Read-only view of everything a renderer needs for one frame"""
    width: int
    height: int
    snake: Tuple[Point, ...]
    food: Point
    obstacles: FrozenSet[Point]
    score: int
    level: int
    alive: bool
    death_cause: Optional[DeathCause] = None

    @property
    def head(self) -> Point:
        return self.snake[0]


class GameState:
    """Snake, food, obstacles and the rules that move them.

    The state is created once per game with fixed board dimensions and
    mutated in place by ``advance()``. Row 0, column 0 and the last row and
    column are the border wall; everything lives in the interior.
    """

    def __init__(self, width: int, height: int, rng: Optional[RandomSource] = None,
                 max_food_attempts: Optional[int] = None):
        if width < MIN_WIDTH or height < MIN_HEIGHT:
            raise ValueError(
                f"board must be at least {MIN_WIDTH}x{MIN_HEIGHT}, got {width}x{height}")

        self.width = width
        self.height = height
        self.rng: RandomSource = rng if rng is not None else SystemRandomSource()
        self.max_food_attempts = (max_food_attempts if max_food_attempts is not None
                                  else width * height * 4)

        # Start in the middle, heading right, body trailing to the left
        center_x = width // 2
        center_y = height // 2
        self.snake: Deque[Point] = deque(
            Point(center_x - i, center_y) for i in range(INITIAL_LENGTH))

        self.direction = Direction.RIGHT
        self.score = 0
        self.level = 1
        self.alive = True
        self.death_cause: Optional[DeathCause] = None
        self.obstacles: Set[Point] = set()
        self.food = Point(0, 0)

        self.spawn_food()

    @property
    def head(self) -> Point:
        return self.snake[0]

    def set_direction(self, direction: Direction) -> bool:
        """Change heading; a 180 degree turn is ignored"""
        if not self.alive:
            return False
        if direction == self.direction.opposite:
            return False
        self.direction = direction
        return True

    def advance(self) -> TickResult:
        """Move the snake one cell and apply the collision and eating rules"""
        if not self.alive:
            return TickResult.IDLE

        new_head = self.head + self.direction

        # All checks run against the new head before it joins the body
        if (new_head.x <= 0 or new_head.x >= self.width - 1 or
                new_head.y <= 0 or new_head.y >= self.height - 1):
            return self._die(DeathCause.WALL, TickResult.HIT_WALL)

        if new_head in self.snake:
            return self._die(DeathCause.SELF, TickResult.HIT_SELF)

        if new_head in self.obstacles:
            return self._die(DeathCause.OBSTACLE, TickResult.HIT_OBSTACLE)

        self.snake.appendleft(new_head)

        if new_head != self.food:
            self.snake.pop()
            logger.debug("moved to %s", new_head)
            return TickResult.MOVED

        # Ate: the tail stays, so the snake is one cell longer
        self.score += 1
        levelled = self.score % POINTS_PER_LEVEL == 0
        if levelled:
            self.level += 1
        try:
            self.spawn_food()
        except BoardFullError:
            # No room left for food, so no new walls either
            return self._die(DeathCause.BOARD_FULL, TickResult.BOARD_FULL)

        if levelled:
            self.obstacles = generate_level(
                self.width, self.height, self.level, self.snake, self.food, self.rng)
            logger.info("level up: level %d, score %d, %d obstacle cells",
                        self.level, self.score, len(self.obstacles))
            return TickResult.LEVEL_UP

        logger.debug("ate at %s: score %d, length %d", new_head, self.score, len(self.snake))
        return TickResult.ATE

    def spawn_food(self) -> Point:
        """Place food on a random free interior cell"""
        occupied = set(self.snake)
        for _ in range(self.max_food_attempts):
            candidate = Point(self.rng.randrange(1, self.width - 1),
                              self.rng.randrange(1, self.height - 1))
            if candidate not in occupied and candidate not in self.obstacles:
                self.food = candidate
                return candidate

        # Sampling kept missing; fall back to picking among what is left
        free = self.free_cells()
        logger.warning("food sampling failed after %d attempts, %d free cells left",
                       self.max_food_attempts, len(free))
        if not free:
            raise BoardFullError(f"no free cell on a {self.width}x{self.height} board")
        self.food = free[self.rng.randrange(0, len(free))]
        return self.food

    def free_cells(self) -> List[Point]:
        """Interior cells covered by neither the snake nor an obstacle, row by row"""
        occupied = set(self.snake) | self.obstacles
        return [Point(x, y)
                for y in range(1, self.height - 1)
                for x in range(1, self.width - 1)
                if Point(x, y) not in occupied]

    def snapshot(self) -> RenderSnapshot:
        return RenderSnapshot(
            width=self.width,
            height=self.height,
            snake=tuple(self.snake),
            food=self.food,
            obstacles=frozenset(self.obstacles),
            score=self.score,
            level=self.level,
            alive=self.alive,
            death_cause=self.death_cause,
        )

    def _die(self, cause: DeathCause, result: TickResult) -> TickResult:
        self.alive = False
        self.death_cause = cause
        logger.info("game over (%s): score %d, level %d, length %d",
                    cause.value, self.score, self.level, len(self.snake))
        return result


class GameRenderer(ABC):
    """Display adapter interface (curses, kivy and so on)"""

    @abstractmethod
    def draw(self, snapshot: RenderSnapshot):
        pass

    @abstractmethod
    def draw_game_over(self, snapshot: RenderSnapshot):
        pass


class InputEvent(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    QUIT = "quit"

    @property
    def direction(self) -> Optional[Direction]:
        return _EVENT_DIRECTIONS.get(self)


_EVENT_DIRECTIONS = {
    InputEvent.UP: Direction.UP,
    InputEvent.DOWN: Direction.DOWN,
    InputEvent.LEFT: Direction.LEFT,
    InputEvent.RIGHT: Direction.RIGHT,
}


class InputHandler(ABC):
    """Input adapter interface"""

    @abstractmethod
    def poll(self) -> Optional[InputEvent]:
        """Return the next pending event without blocking, or None"""
        pass


__all__ = [
    'GameState', 'RenderSnapshot', 'TickResult', 'DeathCause',
    'SnakeGameError', 'BoardFullError', 'GameRenderer', 'InputHandler',
    'InputEvent', 'Direction', 'Point', 'MIN_WIDTH', 'MIN_HEIGHT',
]
