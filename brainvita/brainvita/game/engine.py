"""Pure move engine: apply, enumerate, classify."""

import logging

from brainvita.models.board import CENTER, Board, Cell, Position, count_marbles
from brainvita.models.game_state import GameStatus
from brainvita.models.move import Move

from .validator import is_move_valid, midpoint

logger = logging.getLogger(__name__)

# Jump offsets in scan order: up, down, left, right
DIRECTIONS: tuple[tuple[int, int], ...] = (
    (-2, 0),
    (2, 0),
    (0, -2),
    (0, 2),
)


def apply_move(board: Board, from_pos: Position, to_pos: Position) -> Board:
    """Apply a validated jump.

    The caller must check is_move_valid() first.

    Args:
        board: Board before the move (not modified)
        from_pos: Cell of the jumping marble
        to_pos: Landing cell

    Returns:
        New board with from and the jumped cell emptied and to filled.
    """
    assert is_move_valid(board, from_pos, to_pos), f"Illegal move {from_pos} -> {to_pos}"

    return board.with_cells({
        from_pos: Cell.EMPTY,
        midpoint(from_pos, to_pos): Cell.EMPTY,
        to_pos: Cell.MARBLE,
    })


def valid_destinations(board: Board, pos: Position) -> list[Position]:
    """Get legal landing cells for the marble at pos.

    Args:
        board: Current board
        pos: Cell of the marble

    Returns:
        Destinations in direction order (up, down, left, right).
    """
    destinations = []
    for dr, dc in DIRECTIONS:
        to_pos = Position(row=pos.row + dr, col=pos.col + dc)
        if is_move_valid(board, pos, to_pos):
            destinations.append(to_pos)
    return destinations


def get_possible_moves(board: Board) -> list[Move]:
    """Enumerate every legal move.

    Sources are scanned row-major; each source tries up, down, left, right.
    """
    moves: list[Move] = []
    for pos in board.positions():
        if board[pos] != Cell.MARBLE:
            continue
        for to_pos in valid_destinations(board, pos):
            moves.append(Move(from_pos=pos, to_pos=to_pos))
    return moves


def check_game_status(board: Board, require_center_finish: bool = False) -> GameStatus:
    """Classify a board.

    Args:
        board: Board to classify
        require_center_finish: If True, a lone marble only wins on the center

    Returns:
        PLAYING while any move exists, otherwise WON or LOST.
    """
    if get_possible_moves(board):
        return GameStatus.PLAYING

    remaining = count_marbles(board)
    if remaining == 1:
        if require_center_finish and board[CENTER] != Cell.MARBLE:
            logger.debug("Single marble left off center, counted as a loss")
            return GameStatus.LOST
        return GameStatus.WON

    return GameStatus.LOST
