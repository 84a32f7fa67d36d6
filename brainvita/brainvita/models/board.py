"""Board and Position models."""

from enum import IntEnum
from typing import Iterator

from pydantic import BaseModel


class Cell(IntEnum):
    """State of one grid position (matches the layout table values)."""

    INVALID = -1  # No hole (corner region)
    EMPTY = 0  # Hole without a marble
    MARBLE = 1  # Hole with a marble


BOARD_SIZE = 7
TOTAL_MARBLES = 32


class Position(BaseModel, frozen=True):
    """Grid coordinate, 0-indexed.

    Out-of-range values are allowed; use is_on_board() to check them.
    """

    row: int
    col: int

    def __str__(self) -> str:
        return f"({self.row}, {self.col})"

    def __repr__(self) -> str:
        return f"Position(row={self.row}, col={self.col})"


CENTER = Position(row=3, col=3)

# English cross: -1 invalid, 1 marble, 0 empty (center)
INITIAL_LAYOUT: tuple[tuple[int, ...], ...] = (
    (-1, -1, 1, 1, 1, -1, -1),
    (-1, -1, 1, 1, 1, -1, -1),
    (1, 1, 1, 1, 1, 1, 1),
    (1, 1, 1, 0, 1, 1, 1),
    (1, 1, 1, 1, 1, 1, 1),
    (-1, -1, 1, 1, 1, -1, -1),
    (-1, -1, 1, 1, 1, -1, -1),
)


class Board:
    """Immutable 7x7 grid of cells.

    A board is never changed in place. with_cells() derives a new board,
    so earlier snapshots stay valid for anyone holding them.
    """

    def __init__(self, rows: "tuple[tuple[Cell, ...], ...] | list[list[int]]"):
        """Initialize board.

        Args:
            rows: BOARD_SIZE rows of BOARD_SIZE cell values each.
        """
        grid = tuple(tuple(Cell(v) for v in row) for row in rows)
        if len(grid) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in grid):
            raise ValueError(f"Board must be {BOARD_SIZE}x{BOARD_SIZE}")
        self._rows: tuple[tuple[Cell, ...], ...] = grid

    @property
    def rows(self) -> tuple[tuple[Cell, ...], ...]:
        """Get the grid as nested tuples."""
        return self._rows

    def get(self, row: int, col: int) -> Cell:
        """Get the cell at a row and column (must be on-board)."""
        return self._rows[row][col]

    def positions(self) -> Iterator[Position]:
        """Iterate over all positions in row-major order."""
        for r in range(BOARD_SIZE):
            for c in range(BOARD_SIZE):
                yield Position(row=r, col=c)

    def with_cells(self, updates: dict[Position, Cell]) -> "Board":
        """Create a new board with some cells replaced.

        Args:
            updates: Mapping of position to new cell state.

        Returns:
            New Board. This board is left untouched.
        """
        grid = [list(row) for row in self._rows]
        for pos, cell in updates.items():
            current = grid[pos.row][pos.col]
            if (current == Cell.INVALID) != (cell == Cell.INVALID):
                raise ValueError(f"Cannot change playability of {pos}")
            grid[pos.row][pos.col] = cell
        return Board(grid)

    def __getitem__(self, pos: Position) -> Cell:
        return self._rows[pos.row][pos.col]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._rows == other._rows

    def __hash__(self) -> int:
        return hash(self._rows)

    def __str__(self) -> str:
        symbols = {Cell.INVALID: " ", Cell.EMPTY: ".", Cell.MARBLE: "o"}
        return "\n".join(" ".join(symbols[c] for c in row) for row in self._rows)

    def __repr__(self) -> str:
        return f"Board(marbles={count_marbles(self)})"


def create_initial_board() -> Board:
    """Create the starting layout: 32 marbles, center empty."""
    return Board(INITIAL_LAYOUT)


def is_on_board(pos: Position) -> bool:
    """Check that a position lies inside the 7x7 grid."""
    return 0 <= pos.row < BOARD_SIZE and 0 <= pos.col < BOARD_SIZE


def is_playable(board: Board, pos: Position) -> bool:
    """Check that a position is on-board and has a hole."""
    return is_on_board(pos) and board[pos] != Cell.INVALID


def count_marbles(board: Board) -> int:
    """Count cells holding a marble."""
    return sum(1 for row in board.rows for cell in row if cell == Cell.MARBLE)


def removed_marbles(board: Board) -> int:
    """Count marbles captured so far."""
    return TOTAL_MARBLES - count_marbles(board)
