#!/usr/bin/env python3
"""
Terminal Snake with levels
Every five foods the level goes up and a new set of walls appears.

Controls:
- Arrow keys or WASD to move
- Q or Esc to quit
"""

import curses
import logging
import sys
from typing import List, Optional

from .core.game_engine import GameState
from .core.random_source import SystemRandomSource
from .driver import GameLoop
from .settings import GameSettings, configure_logging, parse_settings
from .terminal import CursesInputHandler, CursesRenderer, TerminalSession

logger = logging.getLogger(__name__)


class TerminalTooSmall(Exception):
    pass


def play(settings: GameSettings):
    """Run one game in the terminal and return the final snapshot"""
    state = GameState(settings.width, settings.height, rng=SystemRandomSource(settings.seed))

    session = TerminalSession()
    with session as stdscr:
        rows, cols = stdscr.getmaxyx()
        if rows < settings.height or cols < settings.width:
            raise TerminalTooSmall(
                f"Terminal too small! Need {settings.width}x{settings.height}, have {cols}x{rows}")

        loop = GameLoop(
            state,
            CursesRenderer(stdscr, use_colors=session.has_colors),
            CursesInputHandler(stdscr),
            tick=settings.tick_seconds,
        )
        return loop.run()


def main(argv: Optional[List[str]] = None) -> int:
    settings = parse_settings(argv)
    configure_logging(settings)
    logger.info("starting %dx%d game, seed=%s", settings.width, settings.height, settings.seed)

    try:
        final = play(settings)
    except TerminalTooSmall as e:
        print(e)
        return 1
    except KeyboardInterrupt:
        print("Game interrupted by user.")
        return 0
    except curses.error as e:
        logger.exception("curses failure")
        print(f"An error occurred: {e}")
        print("Make sure your terminal supports curses and has sufficient size.")
        return 1
    except Exception as e:
        logger.exception("game crashed")
        print(f"An error occurred: {e}")
        return 1

    print(f"Final Score: {final.score}  Level: {final.level}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
