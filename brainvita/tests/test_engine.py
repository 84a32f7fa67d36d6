"""Tests for move validation and the move engine."""

import pytest

from brainvita.game.engine import (
    apply_move,
    check_game_status,
    get_possible_moves,
    valid_destinations,
)
from brainvita.game.validator import MoveValidator, is_move_valid, midpoint
from brainvita.models.board import (
    CENTER,
    INITIAL_LAYOUT,
    Board,
    Cell,
    Position,
    count_marbles,
    create_initial_board,
)
from brainvita.models.game_state import GameStatus
from brainvita.models.move import Move


def pos(row: int, col: int) -> Position:
    return Position(row=row, col=col)


def make_board(marbles: set[tuple[int, int]]) -> Board:
    """Build a cross-shaped board with marbles only at the given cells."""
    rows = [
        [Cell.INVALID if v == -1 else (Cell.MARBLE if (r, c) in marbles else Cell.EMPTY) for c, v in enumerate(row)]
        for r, row in enumerate(INITIAL_LAYOUT)
    ]
    return Board(rows)


def rotate(p: Position) -> Position:
    """Rotate a position 90 degrees clockwise about the center."""
    return pos(p.col, 6 - p.row)


@pytest.fixture
def board():
    return create_initial_board()


@pytest.fixture
def validator():
    return MoveValidator()


class TestIsMoveValid:
    """Tests for is_move_valid and MoveValidator."""

    def test_opening_move(self, board):
        """Test that a jump into the center is legal at the start."""
        assert is_move_valid(board, pos(1, 3), pos(3, 3))
        assert is_move_valid(board, pos(3, 1), pos(3, 3))

    def test_diagonal(self, board):
        """Test that diagonal jumps are rejected."""
        b = board.with_cells({pos(4, 4): Cell.EMPTY, CENTER: Cell.MARBLE})
        assert not is_move_valid(b, pos(2, 2), pos(4, 4))

    def test_distance_one(self, board):
        """Test that a single step is rejected."""
        assert not is_move_valid(board, pos(3, 2), pos(3, 3))

    def test_distance_three(self, board):
        """Test that a three-cell jump is rejected."""
        assert not is_move_valid(board, pos(3, 0), pos(3, 3))
        assert not is_move_valid(board, pos(0, 3), pos(3, 3))

    def test_destination_occupied(self, board):
        """Test that landing on a marble is rejected."""
        assert not is_move_valid(board, pos(1, 2), pos(3, 2))

    def test_destination_invalid(self, board):
        """Test that landing on a corner is rejected."""
        assert not is_move_valid(board, pos(2, 0), pos(0, 0))

    def test_source_not_marble(self, board):
        """Test that jumping from an empty hole is rejected."""
        b = board.with_cells({pos(1, 3): Cell.EMPTY})
        assert not is_move_valid(b, pos(3, 3), pos(1, 3))

    def test_source_invalid(self, board):
        """Test that jumping from a corner is rejected."""
        b = board.with_cells({pos(1, 2): Cell.EMPTY})
        assert not is_move_valid(b, pos(1, 0), pos(1, 2))

    def test_midpoint_empty(self, board):
        """Test that a jump over an empty hole is rejected."""
        b = board.with_cells({pos(2, 3): Cell.EMPTY})
        assert not is_move_valid(b, pos(1, 3), pos(3, 3))

    @pytest.mark.parametrize(
        "src,dst",
        [((3, 1), (3, -1)), ((-1, 3), (1, 3)), ((7, 3), (5, 3)), ((3, 5), (3, 7))],
    )
    def test_off_board(self, board, src, dst):
        """Test that off-board positions are rejected without raising."""
        assert not is_move_valid(board, pos(*src), pos(*dst))

    def test_error_messages(self, board, validator):
        """Test that rejections carry a reason."""
        assert validator.validate(board, pos(1, 3), pos(3, 3)).error_message == ""

        result = validator.validate(board, pos(1, 2), pos(3, 2))
        assert not result.is_valid
        assert "not an empty hole" in result.error_message

        result = validator.validate(board, pos(3, 2), pos(3, 3))
        assert "two cells" in result.error_message

        result = validator.validate(board, pos(3, 1), pos(3, -1))
        assert "off the board" in result.error_message

    def test_midpoint(self):
        """Test midpoint calculation."""
        assert midpoint(pos(1, 2), pos(3, 2)) == pos(2, 2)
        assert midpoint(pos(3, 5), pos(3, 3)) == pos(3, 4)


class TestApplyMove:
    """Tests for apply_move."""

    def test_scenario_column_two(self, board):
        """Test (1,2)->(3,2) once (3,2) has been cleared by an opening jump."""
        assert not is_move_valid(board, pos(1, 2), pos(3, 2))

        b = apply_move(board, pos(3, 1), pos(3, 3))
        assert is_move_valid(b, pos(1, 2), pos(3, 2))

        after = apply_move(b, pos(1, 2), pos(3, 2))
        assert after[pos(1, 2)] == Cell.EMPTY
        assert after[pos(2, 2)] == Cell.EMPTY
        assert after[pos(3, 2)] == Cell.MARBLE
        assert count_marbles(after) == 30
        assert check_game_status(after) == GameStatus.PLAYING

    def test_opening_jump(self, board):
        """Test the first jump into the center."""
        after = apply_move(board, pos(1, 3), pos(3, 3))

        assert after[pos(1, 3)] == Cell.EMPTY
        assert after[pos(2, 3)] == Cell.EMPTY
        assert after[pos(3, 3)] == Cell.MARBLE
        assert count_marbles(after) == 31
        assert check_game_status(after) == GameStatus.PLAYING

    def test_input_not_mutated(self, board):
        """Test that the original board is untouched."""
        before = create_initial_board()
        apply_move(board, pos(5, 3), pos(3, 3))
        assert board == before

    def test_each_move_removes_one_marble(self, board):
        """Test that every legal move removes exactly one marble."""
        b = board
        for _ in range(5):
            moves = get_possible_moves(b)
            assert moves
            for move in moves:
                after = apply_move(b, move.from_pos, move.to_pos)
                assert count_marbles(b) == count_marbles(after) + 1
            b = apply_move(b, moves[0].from_pos, moves[0].to_pos)

    def test_illegal_move_asserts(self, board):
        """Test that applying an unvalidated move is a programmer error."""
        with pytest.raises(AssertionError):
            apply_move(board, pos(1, 2), pos(3, 2))


class TestGetPossibleMoves:
    """Tests for get_possible_moves and valid_destinations."""

    def test_initial_moves(self, board):
        """Test the four opening moves in scan order."""
        moves = get_possible_moves(board)
        assert moves == [
            Move(from_pos=pos(1, 3), to_pos=pos(3, 3)),
            Move(from_pos=pos(3, 1), to_pos=pos(3, 3)),
            Move(from_pos=pos(3, 5), to_pos=pos(3, 3)),
            Move(from_pos=pos(5, 3), to_pos=pos(3, 3)),
        ]

    def test_initial_moves_symmetric(self, board):
        """Test that the opening moves are closed under 90-degree rotation."""
        moves = {(m.from_pos, m.to_pos) for m in get_possible_moves(board)}
        rotated = {(rotate(f), rotate(t)) for f, t in moves}
        assert moves == rotated

    def test_direction_order(self):
        """Test up, down, left, right order for a single source."""
        b = make_board({(3, 3), (2, 3), (4, 3), (3, 2), (3, 4)})
        assert valid_destinations(b, pos(3, 3)) == [pos(1, 3), pos(5, 3), pos(3, 1), pos(3, 5)]

    def test_no_moves_empty_board(self):
        """Test that a board without marbles has no moves."""
        assert get_possible_moves(make_board(set())) == []

    def test_destinations_of_empty_cell(self, board):
        """Test that an empty cell has no destinations."""
        assert valid_destinations(board, CENTER) == []


class TestCheckGameStatus:
    """Tests for check_game_status."""

    def test_initial_playing(self, board):
        """Test that the starting board is in play."""
        assert check_game_status(board) == GameStatus.PLAYING

    def test_won_single_marble(self):
        """Test that one marble with no moves is a win."""
        assert check_game_status(make_board({(3, 3)})) == GameStatus.WON

    def test_won_single_marble_off_center(self):
        """Test that any lone marble wins by default."""
        assert check_game_status(make_board({(0, 2)})) == GameStatus.WON

    def test_lost_multiple_marbles(self):
        """Test that two stranded marbles is a loss."""
        assert check_game_status(make_board({(0, 2), (6, 4)})) == GameStatus.LOST

    def test_lost_no_marbles(self):
        """Test that an empty board is a loss."""
        assert check_game_status(make_board(set())) == GameStatus.LOST

    def test_playing_with_one_move(self):
        """Test that a single available move keeps the game going."""
        assert check_game_status(make_board({(3, 2), (3, 3)})) == GameStatus.PLAYING

    def test_center_finish_required(self):
        """Test the stricter center-only win."""
        assert check_game_status(make_board({(3, 3)}), require_center_finish=True) == GameStatus.WON
        assert check_game_status(make_board({(0, 2)}), require_center_finish=True) == GameStatus.LOST
