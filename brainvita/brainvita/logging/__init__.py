"""Game logging module."""

from .formatters import format_board, format_position, format_time
from .game_logger import GameLogger

__all__ = [
    "GameLogger",
    "format_board",
    "format_position",
    "format_time",
]
