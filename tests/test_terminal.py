from __future__ import annotations

import curses

import pytest

from snake_game.core.board import Point
from snake_game.core.game_engine import InputEvent, RenderSnapshot
from snake_game.terminal.input import CursesInputHandler, map_key
from snake_game.terminal.renderer import CursesRenderer
from snake_game.terminal.session import TerminalSession


class FakeWindow:
    def __init__(self, keys: list[int] | None = None, size: tuple[int, int] = (24, 80)) -> None:
        self.keys = list(keys or [])
        self.size = size
        self.cells: dict[tuple[int, int], str] = {}
        self.calls: list[tuple] = []

    def getch(self) -> int:
        return self.keys.pop(0) if self.keys else -1

    def getmaxyx(self) -> tuple[int, int]:
        return self.size

    def addstr(self, y: int, x: int, text: str, attr: int = 0) -> None:
        for i, char in enumerate(text):
            self.cells[(y, x + i)] = char

    def text_at(self, y: int, x: int, length: int) -> str:
        return "".join(self.cells.get((y, x + i), " ") for i in range(length))

    def erase(self) -> None:
        self.cells.clear()

    def refresh(self) -> None:
        self.calls.append(("refresh",))

    def keypad(self, flag: bool) -> None:
        self.calls.append(("keypad", flag))

    def nodelay(self, flag: bool) -> None:
        self.calls.append(("nodelay", flag))


@pytest.mark.parametrize(
    "key,event",
    [
        (curses.KEY_UP, InputEvent.UP),
        (ord("w"), InputEvent.UP),
        (ord("S"), InputEvent.DOWN),
        (curses.KEY_LEFT, InputEvent.LEFT),
        (ord("d"), InputEvent.RIGHT),
        (ord("q"), InputEvent.QUIT),
        (27, InputEvent.QUIT),
        (3, InputEvent.QUIT),
        (ord("x"), None),
    ],
)
def test_key_mapping(key: int, event: InputEvent | None) -> None:
    assert map_key(key) is event


def test_input_handler_skips_unmapped_keys() -> None:
    handler = CursesInputHandler(FakeWindow([ord("x"), ord("z"), curses.KEY_DOWN]))

    assert handler.poll() is InputEvent.DOWN
    assert handler.poll() is None


def _snapshot(alive: bool = True) -> RenderSnapshot:
    return RenderSnapshot(
        width=20,
        height=10,
        snake=(Point(5, 4), Point(4, 4), Point(3, 4)),
        food=Point(10, 6),
        obstacles=frozenset({Point(15, 2)}),
        score=7,
        level=2,
        alive=alive,
    )


def test_renderer_draws_board() -> None:
    window = FakeWindow()

    CursesRenderer(window, use_colors=False).draw(_snapshot())

    assert window.cells[(4, 5)] == "O"
    assert window.cells[(4, 4)] == "o"
    assert window.cells[(4, 3)] == "o"
    assert window.cells[(6, 10)] == "●"
    assert window.cells[(2, 15)] == "▓"
    assert window.cells[(9, 19)] == "█"
    assert window.cells[(5, 0)] == "█"
    assert window.text_at(0, 2, 20) == " Score: 7  Level: 2 "
    assert window.calls[-1] == ("refresh",)


def test_renderer_game_over_view() -> None:
    window = FakeWindow()

    CursesRenderer(window, use_colors=False).draw_game_over(_snapshot(alive=False))

    text = "".join(window.cells[key] for key in sorted(window.cells))
    assert "GAME OVER" in text
    assert "Final Score: 7" in text
    assert "Press Q to Quit" in text


def test_renderer_clips_to_the_window() -> None:
    window = FakeWindow(size=(5, 8))

    CursesRenderer(window, use_colors=False).draw(_snapshot())

    assert all(y < 5 and x < 8 for y, x in window.cells)


class FakeCurses:
    """Records terminal mode changes made through the curses module."""

    def __init__(self, monkeypatch: pytest.MonkeyPatch, window: FakeWindow) -> None:
        self.log: list[str] = []
        for name in ("noecho", "raw", "noraw", "echo", "endwin", "start_color"):
            monkeypatch.setattr(curses, name, self._recorder(name))
        monkeypatch.setattr(curses, "initscr", lambda: self._record("initscr", window))
        monkeypatch.setattr(curses, "curs_set", lambda v: self._record(f"curs_set({v})"))
        monkeypatch.setattr(curses, "has_colors", lambda: False)

    def _record(self, name: str, result=None):
        self.log.append(name)
        return result

    def _recorder(self, name: str):
        return lambda *args: self._record(name)


def test_session_restores_terminal(monkeypatch: pytest.MonkeyPatch) -> None:
    window = FakeWindow()
    fake = FakeCurses(monkeypatch, window)

    with TerminalSession() as stdscr:
        assert stdscr is window
        assert fake.log == ["initscr", "noecho", "raw", "curs_set(0)"]

    assert fake.log[-4:] == ["curs_set(1)", "noraw", "echo", "endwin"]
    assert ("keypad", False) in window.calls


def test_session_restores_terminal_on_error(monkeypatch: pytest.MonkeyPatch) -> None:
    window = FakeWindow()
    fake = FakeCurses(monkeypatch, window)

    with pytest.raises(RuntimeError):
        with TerminalSession():
            raise RuntimeError("boom")

    assert fake.log[-1] == "endwin"


def test_session_survives_terminals_without_cursor_control(monkeypatch: pytest.MonkeyPatch) -> None:
    window = FakeWindow()
    fake = FakeCurses(monkeypatch, window)

    def no_cursor(visibility: int) -> None:
        raise curses.error("no cursor control")

    monkeypatch.setattr(curses, "curs_set", no_cursor)

    with TerminalSession() as stdscr:
        assert stdscr is window

    assert fake.log[-1] == "endwin"


class FailingWindow(FakeWindow):
    """Reports ERR on every write, the way curses does for the last cell."""

    def addstr(self, y: int, x: int, text: str, attr: int = 0) -> None:
        super().addstr(y, x, text, attr)
        raise curses.error("addstr() returned ERR")


def test_renderer_tolerates_the_bottom_right_cell() -> None:
    window = FailingWindow(size=(10, 20))
    renderer = CursesRenderer(window, use_colors=False)

    renderer._put(9, 19, "█")

    assert window.cells[(9, 19)] == "█"


def test_renderer_propagates_other_write_failures() -> None:
    window = FailingWindow(size=(10, 20))
    renderer = CursesRenderer(window, use_colors=False)

    with pytest.raises(curses.error):
        renderer._put(4, 5, "O")
