"""Formatters for game log output."""

from brainvita.models.board import Board, Cell, Position

# Cell codes for log output
CELL_CODES: dict[Cell, str] = {
    Cell.INVALID: " ",
    Cell.EMPTY: ".",
    Cell.MARBLE: "o",
}


def format_position(pos: Position) -> str:
    """Format a position to string.

    Args:
        pos: Position to format.

    Returns:
        "row,col" (e.g., "3,3" for the center).
    """
    return f"{pos.row},{pos.col}"


def format_board(board: Board) -> list[str]:
    """Format a board to one string per row.

    Args:
        board: Board to format.

    Returns:
        Rows using "o" for marbles, "." for holes and " " for no hole.
    """
    return ["".join(CELL_CODES[cell] for cell in row) for row in board.rows]


def format_time(seconds: int) -> str:
    """Format seconds as mm:ss."""
    mins, secs = divmod(max(0, seconds), 60)
    return f"{mins:02d}:{secs:02d}"
