"""Move validation for proposed jumps."""

from dataclasses import dataclass

from brainvita.models.board import Board, Cell, Position, is_on_board


@dataclass
class ValidationResult:
    """Result of move validation."""

    is_valid: bool
    error_message: str = ""


def midpoint(from_pos: Position, to_pos: Position) -> Position:
    """Get the cell between two positions two steps apart."""
    return Position(
        row=(from_pos.row + to_pos.row) // 2,
        col=(from_pos.col + to_pos.col) // 2,
    )


class MoveValidator:
    """Validates proposed jumps against a board."""

    def validate(
        self,
        board: Board,
        from_pos: Position,
        to_pos: Position,
    ) -> ValidationResult:
        """Validate a jump.

        Args:
            board: Current board
            from_pos: Cell of the marble to move
            to_pos: Landing cell

        Returns:
            ValidationResult
        """
        if not is_on_board(from_pos) or not is_on_board(to_pos):
            return ValidationResult(
                is_valid=False,
                error_message="Position is off the board",
            )

        if board[to_pos] != Cell.EMPTY:
            return ValidationResult(
                is_valid=False,
                error_message=f"Destination {to_pos} is not an empty hole",
            )

        if board[from_pos] != Cell.MARBLE:
            return ValidationResult(
                is_valid=False,
                error_message=f"No marble at {from_pos}",
            )

        # Orthogonal jump of exactly two cells
        row_diff = abs(to_pos.row - from_pos.row)
        col_diff = abs(to_pos.col - from_pos.col)
        if (row_diff, col_diff) not in ((2, 0), (0, 2)):
            return ValidationResult(
                is_valid=False,
                error_message="Jump must be two cells along a row or column",
            )

        mid = midpoint(from_pos, to_pos)
        if board[mid] != Cell.MARBLE:
            return ValidationResult(
                is_valid=False,
                error_message=f"No marble to jump over at {mid}",
            )

        return ValidationResult(is_valid=True)


_validator = MoveValidator()


def is_move_valid(board: Board, from_pos: Position, to_pos: Position) -> bool:
    """Check if a jump is legal on the given board."""
    return _validator.validate(board, from_pos, to_pos).is_valid
