from .board import Direction, Point, is_interior
from .game_engine import (
    BoardFullError,
    DeathCause,
    GameRenderer,
    GameState,
    InputEvent,
    InputHandler,
    RenderSnapshot,
    SnakeGameError,
    TickResult,
)
from .levels import generate_level, obstacle_count
from .random_source import RandomSource, ScriptedRandomSource, SystemRandomSource
