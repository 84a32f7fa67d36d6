"""Tests for session state."""

from brainvita.models.board import Position, create_initial_board
from brainvita.models.game_state import GameStatus, MovePhase, Session
from brainvita.models.move import InFlightMove


class TestGameStatus:
    """Tests for GameStatus."""

    def test_terminal(self):
        assert GameStatus.WON.is_terminal
        assert GameStatus.LOST.is_terminal
        assert not GameStatus.PLAYING.is_terminal
        assert not GameStatus.IDLE.is_terminal


class TestSession:
    """Tests for Session class."""

    def test_phase(self):
        """Test phase derived from selection and in-flight move."""
        session = Session()
        assert session.phase == MovePhase.IDLE

        session.selected = Position(row=1, col=3)
        assert session.phase == MovePhase.SELECTING

        session.selected = None
        session.in_flight = InFlightMove(
            from_pos=Position(row=1, col=3),
            to_pos=Position(row=3, col=3),
            mid=Position(row=2, col=3),
        )
        assert session.phase == MovePhase.IN_FLIGHT

    def test_sessions_independent(self):
        """Test that two sessions do not share state."""
        a = Session()
        b = Session()
        a.selected = Position(row=1, col=3)
        assert b.selected is None
        assert a.board == b.board

    def test_elapsed(self):
        """Test the elapsed clock."""
        session = Session()
        assert session.elapsed_seconds() == 0

        session.started_at = 100.0
        assert session.elapsed_seconds(now=165.5) == 65

        session.finished_at = 130.0
        assert session.elapsed_seconds(now=500.0) == 30

    def test_mark_finished(self):
        """Test that the clock only stops once."""
        session = Session()
        session.mark_finished()
        assert session.finished_at is None

        session.started_at = 1.0
        session.mark_finished()
        first = session.finished_at
        session.mark_finished()
        assert session.finished_at == first

    def test_reset_for_new_game(self):
        """Test reset for start and for stop."""
        session = Session(moves_made=5, game_number=3)
        session.selected = Position(row=1, col=3)

        session.reset_for_new_game(GameStatus.PLAYING)
        assert session.status == GameStatus.PLAYING
        assert session.selected is None
        assert session.moves_made == 0
        assert session.game_number == 3
        assert session.started_at is not None
        assert session.board == create_initial_board()

        session.reset_for_new_game(GameStatus.IDLE)
        assert session.status == GameStatus.IDLE
        assert session.started_at is None

    def test_string(self):
        """Test the one-line summary."""
        session = Session()
        assert str(session) == "Status: idle | Marbles: 32"
