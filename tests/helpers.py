from __future__ import annotations

from collections import deque
from typing import Iterable

from snake_game.core.board import Direction, Point, is_interior
from snake_game.core.game_engine import GameState
from snake_game.core.random_source import ScriptedRandomSource


def make_state(
    width: int = 40,
    height: int = 20,
    food: tuple[int, int] = (5, 5),
    extra: Iterable[int | bool] = (),
) -> GameState:
    """A GameState whose first food lands on ``food``; ``extra`` feeds later draws."""
    rng = ScriptedRandomSource([food[0], food[1], *extra])
    return GameState(width, height, rng=rng)


def place_snake(state: GameState, cells: Iterable[tuple[int, int]], direction: Direction) -> None:
    state.snake = deque(Point(x, y) for x, y in cells)
    state.direction = direction


def assert_board_invariants(state: GameState) -> None:
    """Every piece sits in the interior and a live snake never overlaps itself."""
    for cell in [*state.snake, *state.obstacles, state.food]:
        assert is_interior(cell, state.width, state.height), f"{cell} outside interior"
    assert len(state.snake) >= 1
    if state.alive:
        assert len(set(state.snake)) == len(state.snake), "snake overlaps itself"
