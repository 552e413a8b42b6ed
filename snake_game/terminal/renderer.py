"""Curses display adapter"""

import curses

from ..core.game_engine import GameRenderer, RenderSnapshot
from .session import (BORDER_PAIR, FOOD_PAIR, GAME_OVER_PAIR, OBSTACLE_PAIR,
                      SCORE_PAIR, SNAKE_PAIR)

WALL_CHAR = '█'
OBSTACLE_CHAR = '▓'
FOOD_CHAR = '●'
HEAD_CHAR = 'O'
BODY_CHAR = 'o'


class CursesRenderer(GameRenderer):
    """Draws snapshots onto a curses window, one board cell per character"""

    def __init__(self, stdscr, use_colors: bool = True):
        self.stdscr = stdscr
        self.use_colors = use_colors

    def draw(self, snapshot: RenderSnapshot):
        """Draw a full frame of a running game"""
        self.stdscr.erase()
        self.draw_border(snapshot)
        self.draw_obstacles(snapshot)
        self.draw_food(snapshot)
        self.draw_snake(snapshot)
        self.draw_ui(snapshot)
        self.stdscr.refresh()

    def draw_game_over(self, snapshot: RenderSnapshot):
        self.stdscr.erase()
        msg = "GAME OVER"
        score_msg = f"Final Score: {snapshot.score}"
        quit_msg = "Press Q to Quit"

        center_x = snapshot.width // 2
        center_y = snapshot.height // 2

        self._put(center_y - 1, center_x - len(msg) // 2, msg,
                  self._attr(GAME_OVER_PAIR) | curses.A_BOLD)
        self._put(center_y + 1, center_x - len(score_msg) // 2, score_msg,
                  self._attr(BORDER_PAIR))
        self._put(center_y + 3, center_x - len(quit_msg) // 2, quit_msg,
                  self._attr(BORDER_PAIR))
        self.stdscr.refresh()

    def draw_border(self, snapshot: RenderSnapshot):
        attr = self._attr(BORDER_PAIR)
        for x in range(snapshot.width):
            self._put(0, x, WALL_CHAR, attr)
            self._put(snapshot.height - 1, x, WALL_CHAR, attr)
        for y in range(snapshot.height):
            self._put(y, 0, WALL_CHAR, attr)
            self._put(y, snapshot.width - 1, WALL_CHAR, attr)

    def draw_obstacles(self, snapshot: RenderSnapshot):
        attr = self._attr(OBSTACLE_PAIR) | curses.A_DIM
        for cell in snapshot.obstacles:
            self._put(cell.y, cell.x, OBSTACLE_CHAR, attr)

    def draw_food(self, snapshot: RenderSnapshot):
        self._put(snapshot.food.y, snapshot.food.x, FOOD_CHAR, self._attr(FOOD_PAIR))

    def draw_snake(self, snapshot: RenderSnapshot):
        attr = self._attr(SNAKE_PAIR)
        for i, segment in enumerate(snapshot.snake):
            # Head is different from body
            char = HEAD_CHAR if i == 0 else BODY_CHAR
            self._put(segment.y, segment.x, char, attr)

    def draw_ui(self, snapshot: RenderSnapshot):
        """Score and level over the top wall"""
        self._put(0, 2, f" Score: {snapshot.score}  Level: {snapshot.level} ",
                  self._attr(SCORE_PAIR))

    def _attr(self, pair: int) -> int:
        if self.use_colors:
            return curses.color_pair(pair)
        return curses.A_NORMAL

    def _put(self, y: int, x: int, text: str, attr: int = 0):
        height, width = self.stdscr.getmaxyx()
        if y < 0 or x < 0 or y >= height or x >= width:
            return
        text = text[:width - x]
        try:
            self.stdscr.addstr(y, x, text, attr)
        except curses.error:
            # Writing the bottom-right cell moves the cursor off screen
            if (y, x + len(text)) != (height - 1, width):
                raise
