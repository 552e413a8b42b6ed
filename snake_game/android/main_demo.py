#!/usr/bin/env python3
"""
Kivy front-end for the snake engine
Same GameState as the terminal version, drawn on a canvas with on-screen buttons.
"""

from kivy.app import App
from kivy.uix.widget import Widget
from kivy.uix.label import Label
from kivy.uix.button import Button
from kivy.uix.boxlayout import BoxLayout
from kivy.graphics import Rectangle, Color, Ellipse
from kivy.clock import Clock
from kivy.utils import get_color_from_hex

from snake_game.core.board import Direction
from snake_game.core.game_engine import GameState, RenderSnapshot
from snake_game.driver import TICK_SECONDS

BOARD_WIDTH = 20
BOARD_HEIGHT = 15


def direction_from_touch(dx: float, dy: float) -> Direction:
    """Map a touch offset from the widget centre to a heading (kivy y points up)"""
    if abs(dx) > abs(dy):
        return Direction.RIGHT if dx > 0 else Direction.LEFT
    return Direction.UP if dy > 0 else Direction.DOWN


class SnakeGameWidget(Widget):
    def __init__(self, **kwargs):
        super().__init__(**kwargs)

        self.state = GameState(BOARD_WIDTH, BOARD_HEIGHT)
        self.cell_size = 20
        self.offset_x = 0
        self.offset_y = 0
        self.status_callback = None

        self.bind(size=self.update_graphics, pos=self.update_graphics)
        Clock.schedule_interval(self.update_game, TICK_SECONDS)

    def update_graphics(self, *args):
        """Recompute cell size and offsets after a resize"""
        if not self.canvas:
            return

        self.cell_size = min(self.width // self.state.width, self.height // self.state.height)
        self.offset_x = self.x + (self.width - self.state.width * self.cell_size) // 2
        self.offset_y = self.y + (self.height - self.state.height * self.cell_size) // 2

        self.render()

    def render(self):
        snapshot = self.state.snapshot()
        if snapshot.alive:
            self.draw(snapshot)
        else:
            self.draw_game_over(snapshot)

    def cell_rect(self, x, y, inset=1):
        # Board rows grow downwards, kivy's y grows upwards
        pixel_x = self.offset_x + x * self.cell_size
        pixel_y = self.offset_y + (self.state.height - 1 - y) * self.cell_size
        return (pixel_x + inset, pixel_y + inset), (self.cell_size - 2 * inset,
                                                    self.cell_size - 2 * inset)

    def draw(self, snapshot: RenderSnapshot):
        self.canvas.clear()
        with self.canvas:
            Color(0.1, 0.1, 0.1)
            Rectangle(pos=(self.offset_x, self.offset_y),
                      size=(snapshot.width * self.cell_size,
                            snapshot.height * self.cell_size))

            # Border wall
            Color(0.6, 0.6, 0.6)
            for x in range(snapshot.width):
                for y in (0, snapshot.height - 1):
                    pos, size = self.cell_rect(x, y, inset=0)
                    Rectangle(pos=pos, size=size)
            for y in range(1, snapshot.height - 1):
                for x in (0, snapshot.width - 1):
                    pos, size = self.cell_rect(x, y, inset=0)
                    Rectangle(pos=pos, size=size)

            Color(0.35, 0.35, 0.35)
            for cell in snapshot.obstacles:
                pos, size = self.cell_rect(cell.x, cell.y)
                Rectangle(pos=pos, size=size)

            for i, segment in enumerate(snapshot.snake):
                if i == 0:
                    Color(0, 0.8, 0)
                else:
                    Color(0, 1, 0)
                pos, size = self.cell_rect(segment.x, segment.y)
                Rectangle(pos=pos, size=size)

            Color(1, 0, 0)
            pos, size = self.cell_rect(snapshot.food.x, snapshot.food.y, inset=2)
            Ellipse(pos=pos, size=size)

    def draw_game_over(self, snapshot: RenderSnapshot):
        self.canvas.clear()
        with self.canvas:
            Color(0.3, 0, 0)
            Rectangle(pos=(self.offset_x, self.offset_y),
                      size=(snapshot.width * self.cell_size,
                            snapshot.height * self.cell_size))

    def update_game(self, dt):
        if not self.state.alive:
            return
        self.state.advance()
        if self.status_callback:
            self.status_callback(self.state.snapshot())
        self.render()

    def restart(self):
        self.state = GameState(BOARD_WIDTH, BOARD_HEIGHT, rng=self.state.rng)
        self.render()

    def change_direction(self, direction: Direction):
        self.state.set_direction(direction)

    def on_touch_down(self, touch):
        """Tap relative to the centre steers; tap after game over restarts"""
        if not self.collide_point(*touch.pos):
            return False

        if not self.state.alive:
            self.restart()
            return True

        dx = touch.pos[0] - self.center_x
        dy = touch.pos[1] - self.center_y
        self.change_direction(direction_from_touch(dx, dy))
        return True


class SnakeApp(App):
    def build(self):
        main_layout = BoxLayout(orientation='vertical')

        title = Label(text='Snake  Score: 0  Level: 1',
                      size_hint=(1, 0.1),
                      font_size='20sp',
                      color=get_color_from_hex('#00FF00'))

        game_widget = SnakeGameWidget()

        def show_status(snapshot):
            if snapshot.alive:
                title.text = f'Snake  Score: {snapshot.score}  Level: {snapshot.level}'
            else:
                title.text = f'GAME OVER  Final Score: {snapshot.score}  (tap to restart)'

        game_widget.status_callback = show_status

        control_panel = BoxLayout(size_hint=(1, 0.15))

        btn_up = Button(text='↑', size_hint=(0.25, 1))
        btn_down = Button(text='↓', size_hint=(0.25, 1))
        btn_left = Button(text='←', size_hint=(0.25, 1))
        btn_right = Button(text='→', size_hint=(0.25, 1))

        btn_up.bind(on_press=lambda x: game_widget.change_direction(Direction.UP))
        btn_down.bind(on_press=lambda x: game_widget.change_direction(Direction.DOWN))
        btn_left.bind(on_press=lambda x: game_widget.change_direction(Direction.LEFT))
        btn_right.bind(on_press=lambda x: game_widget.change_direction(Direction.RIGHT))

        control_panel.add_widget(btn_left)
        control_panel.add_widget(btn_down)
        control_panel.add_widget(btn_up)
        control_panel.add_widget(btn_right)

        main_layout.add_widget(title)
        main_layout.add_widget(game_widget)
        main_layout.add_widget(control_panel)

        return main_layout


def main():
    SnakeApp().run()


if __name__ == '__main__':
    main()
