"""Scoped ownership of the terminal while the game runs"""

import curses
import logging

logger = logging.getLogger(__name__)

# Colour pair numbers
SNAKE_PAIR = 1
FOOD_PAIR = 2
SCORE_PAIR = 3
BORDER_PAIR = 4
OBSTACLE_PAIR = 5
GAME_OVER_PAIR = 6


class TerminalSession:
    """Puts the terminal into game mode on enter and always restores it on exit.

    Entering switches to the alternate screen (curses' ``initscr``), turns
    off echo and line buffering, enables keypad decoding, makes ``getch``
    non-blocking and hides the cursor. Leaving undoes all of that in reverse
    order, whether the block finished normally or raised.

        with TerminalSession() as stdscr:
            ...
    """

    def __init__(self):
        self.stdscr = None
        self.has_colors = False

    def __enter__(self):
        self.stdscr = curses.initscr()
        try:
            curses.noecho()
            curses.raw()
            self.stdscr.keypad(True)
            self.stdscr.nodelay(True)
            self._hide_cursor()
            self._init_colors()
        except BaseException:
            self._restore()
            raise
        logger.debug("terminal session started (%dx%d)", *reversed(self.stdscr.getmaxyx()))
        return self.stdscr

    def __exit__(self, exc_type, exc_value, traceback):
        self._restore()
        logger.debug("terminal session restored")
        return False

    def _hide_cursor(self):
        try:
            curses.curs_set(0)
        except curses.error:
            # Some terminals cannot hide the cursor
            pass

    def _init_colors(self):
        if not curses.has_colors():
            return
        self.has_colors = True
        curses.start_color()
        curses.init_pair(SNAKE_PAIR, curses.COLOR_GREEN, curses.COLOR_BLACK)
        curses.init_pair(FOOD_PAIR, curses.COLOR_RED, curses.COLOR_BLACK)
        curses.init_pair(SCORE_PAIR, curses.COLOR_YELLOW, curses.COLOR_BLACK)
        curses.init_pair(BORDER_PAIR, curses.COLOR_WHITE, curses.COLOR_BLACK)
        curses.init_pair(OBSTACLE_PAIR, curses.COLOR_WHITE, curses.COLOR_BLACK)
        curses.init_pair(GAME_OVER_PAIR, curses.COLOR_RED, curses.COLOR_BLACK)

    def _restore(self):
        if self.stdscr is None:
            return
        try:
            curses.curs_set(1)
        except curses.error:
            pass
        self.stdscr.keypad(False)
        curses.noraw()
        curses.echo()
        curses.endwin()
        self.stdscr = None
