from .input import CursesInputHandler, map_key
from .renderer import CursesRenderer
from .session import TerminalSession
