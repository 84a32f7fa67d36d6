"""Game models."""

from .board import (
    BOARD_SIZE,
    CENTER,
    TOTAL_MARBLES,
    Board,
    Cell,
    Position,
    count_marbles,
    create_initial_board,
    is_on_board,
    is_playable,
    removed_marbles,
)
from .game_state import GameStatus, MovePhase, Session, SessionCommand
from .move import InFlightMove, Move

__all__ = [
    "BOARD_SIZE",
    "CENTER",
    "TOTAL_MARBLES",
    "Board",
    "Cell",
    "Position",
    "count_marbles",
    "create_initial_board",
    "is_on_board",
    "is_playable",
    "removed_marbles",
    "GameStatus",
    "MovePhase",
    "Session",
    "SessionCommand",
    "InFlightMove",
    "Move",
]
