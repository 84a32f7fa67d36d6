"""Game logic."""

from .controller import DelayElapsed, MoveController, SelectCell, Start, Stop
from .engine import apply_move, check_game_status, get_possible_moves, valid_destinations
from .scheduler import BlockingScheduler, ManualScheduler, Scheduler
from .validator import MoveValidator, ValidationResult, is_move_valid, midpoint

__all__ = [
    "DelayElapsed",
    "MoveController",
    "SelectCell",
    "Start",
    "Stop",
    "apply_move",
    "check_game_status",
    "get_possible_moves",
    "valid_destinations",
    "BlockingScheduler",
    "ManualScheduler",
    "Scheduler",
    "MoveValidator",
    "ValidationResult",
    "is_move_valid",
    "midpoint",
]
