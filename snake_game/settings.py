"""Game settings and command-line parsing"""

import argparse
import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

from .core.game_engine import MIN_HEIGHT, MIN_WIDTH

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass
class FieldSize:
    name: str
    width: int
    height: int
    description: str


# Board presets, border included
FIELD_SIZES = {
    "Small": FieldSize("Small", 20, 12, "Small board - quick games"),
    "Medium": FieldSize("Medium", 40, 20, "Default size"),
    "Large": FieldSize("Large", 60, 30, "Large board - long games"),
    "Classic": FieldSize("Classic", 25, 18, "Classic Nokia proportions"),
}


@dataclass
class GameSettings:
    width: int = 40
    height: int = 20
    tick_ms: int = 150
    seed: Optional[int] = None
    log_file: Optional[str] = None
    log_level: str = "WARNING"

    @property
    def tick_seconds(self) -> float:
        return self.tick_ms / 1000.0

    def validate(self):
        if self.width < MIN_WIDTH or self.height < MIN_HEIGHT:
            raise ValueError(
                f"board must be at least {MIN_WIDTH}x{MIN_HEIGHT}, got {self.width}x{self.height}")
        if self.tick_ms <= 0:
            raise ValueError(f"tick must be positive, got {self.tick_ms} ms")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"unknown log level {self.log_level!r}")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        known_fields = {field.name for field in cls.__dataclass_fields__.values()}
        filtered_data = {k: v for k, v in data.items() if k in known_fields}
        return cls(**filtered_data)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snake-levels",
        description="Terminal Snake with obstacle levels. Arrow keys/WASD to move, Q to quit.")
    parser.add_argument("--field-size", choices=sorted(FIELD_SIZES),
                        help="board preset (overridden by --width/--height)")
    parser.add_argument("--width", type=int, help="board width in cells, border included")
    parser.add_argument("--height", type=int, help="board height in cells, border included")
    parser.add_argument("--seed", type=int, help="seed for food and obstacle placement")
    parser.add_argument("--log-file", help="write log records to this file")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def parse_settings(argv: Optional[List[str]] = None) -> GameSettings:
    """Build validated settings from command-line arguments"""
    parser = build_parser()
    args = parser.parse_args(argv)

    data: Dict[str, Any] = {
        "seed": args.seed,
        "log_file": args.log_file,
        "log_level": args.log_level,
    }
    if args.field_size:
        preset = FIELD_SIZES[args.field_size]
        data["width"] = preset.width
        data["height"] = preset.height
    if args.width is not None:
        data["width"] = args.width
    if args.height is not None:
        data["height"] = args.height

    settings = GameSettings.from_dict(data)
    try:
        settings.validate()
    except ValueError as e:
        parser.error(str(e))
    return settings


def configure_logging(settings: GameSettings) -> logging.Handler:
    """Log to a file when asked; the terminal belongs to curses while playing"""
    package_logger = logging.getLogger("snake_game")
    handler: logging.Handler
    if settings.log_file:
        handler = logging.FileHandler(settings.log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.setLevel(settings.log_level.upper())
    else:
        handler = logging.NullHandler()
    package_logger.addHandler(handler)
    # Keep records away from stderr, which curses is drawing over
    package_logger.propagate = False
    return handler
