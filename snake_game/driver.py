"""Fixed-tick game loop tying the engine to a renderer and an input source"""

import logging
import time
from typing import Callable, Optional

from .core.game_engine import (GameRenderer, GameState, InputEvent, InputHandler,
                               RenderSnapshot, TickResult)

logger = logging.getLogger(__name__)

TICK_SECONDS = 0.15
IDLE_SLEEP = 0.01
GAME_OVER_POLL = 0.1


class GameLoop:
    """Polls input, advances the game every tick and redraws.

    The clock and sleep functions are injectable so the loop can be stepped
    deterministically.
    """

    def __init__(self, state: GameState, renderer: GameRenderer, input_handler: InputHandler,
                 tick: float = TICK_SECONDS,
                 clock: Callable[[], float] = time.monotonic,
                 sleep: Callable[[float], None] = time.sleep):
        self.state = state
        self.renderer = renderer
        self.input_handler = input_handler
        self.tick = tick
        self.clock = clock
        self.sleep = sleep
        self.last_tick = clock()
        self.ticks = 0
        self.last_result: Optional[TickResult] = None
        self.quit_requested = False

    def render(self):
        snapshot = self.state.snapshot()
        if snapshot.alive:
            self.renderer.draw(snapshot)
        else:
            self.renderer.draw_game_over(snapshot)

    def step(self) -> bool:
        """Run one loop iteration; False once the player has asked to quit"""
        if not self.state.alive:
            # Only a quit request matters now
            if self.input_handler.poll() is InputEvent.QUIT:
                self.quit_requested = True
                return False
            self.sleep(GAME_OVER_POLL)
            return True

        while True:
            event = self.input_handler.poll()
            if event is None:
                break
            if event is InputEvent.QUIT:
                self.quit_requested = True
                return False
            self.state.set_direction(event.direction)

        now = self.clock()
        if now - self.last_tick >= self.tick:
            self.last_result = self.state.advance()
            self.last_tick = now
            self.ticks += 1
            logger.debug("tick %d: %s", self.ticks, self.last_result.value)
            self.render()
        else:
            self.sleep(IDLE_SLEEP)
        return True

    def run(self) -> RenderSnapshot:
        """Play until the player quits and return the final state"""
        self.render()
        while self.step():
            pass
        snapshot = self.state.snapshot()
        logger.info("session ended after %d ticks: score %d, level %d",
                    self.ticks, snapshot.score, snapshot.level)
        return snapshot
