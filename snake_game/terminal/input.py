"""Curses keyboard adapter"""

import curses
from typing import Optional

from ..core.game_engine import InputEvent, InputHandler

ESCAPE = 27
CTRL_C = 3  # raw mode delivers Ctrl+C as a key, not SIGINT

KEY_MAP = {
    curses.KEY_UP: InputEvent.UP,
    ord('w'): InputEvent.UP,
    ord('W'): InputEvent.UP,
    curses.KEY_DOWN: InputEvent.DOWN,
    ord('s'): InputEvent.DOWN,
    ord('S'): InputEvent.DOWN,
    curses.KEY_LEFT: InputEvent.LEFT,
    ord('a'): InputEvent.LEFT,
    ord('A'): InputEvent.LEFT,
    curses.KEY_RIGHT: InputEvent.RIGHT,
    ord('d'): InputEvent.RIGHT,
    ord('D'): InputEvent.RIGHT,
    ord('q'): InputEvent.QUIT,
    ord('Q'): InputEvent.QUIT,
    ESCAPE: InputEvent.QUIT,
    CTRL_C: InputEvent.QUIT,
}


def map_key(key: int) -> Optional[InputEvent]:
    return KEY_MAP.get(key)


class CursesInputHandler(InputHandler):
    """Reads keys from a non-blocking curses window"""

    def __init__(self, stdscr):
        self.stdscr = stdscr

    def poll(self) -> Optional[InputEvent]:
        # Skip keys we don't care about so one stray key doesn't hide a real one
        while True:
            key = self.stdscr.getch()
            if key == -1:
                return None
            event = map_key(key)
            if event is not None:
                return event
