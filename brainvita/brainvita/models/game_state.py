"""Game state models."""

import time
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .board import Board, Position, count_marbles, create_initial_board
from .move import InFlightMove


class GameStatus(str, Enum):
    """Status of a session, derived from its board."""

    IDLE = "idle"  # No session active
    PLAYING = "playing"  # At least one legal move exists
    WON = "won"  # No legal move, one marble left
    LOST = "lost"  # No legal move, more than one marble left

    @property
    def is_terminal(self) -> bool:
        """Check if the game has ended."""
        return self in (GameStatus.WON, GameStatus.LOST)


class MovePhase(str, Enum):
    """Phase of the move lifecycle."""

    IDLE = "idle"  # Nothing selected
    SELECTING = "selecting"  # A marble is selected
    IN_FLIGHT = "in_flight"  # Move validated, waiting for the delay


class SessionCommand(str, Enum):
    """Session command from the host."""

    START = "start"
    STOP = "stop"


class Session(BaseModel):
    """All mutable state of one game session.

    Owned by the host and handed to the MoveController. The board itself is
    immutable; committing a move replaces it.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    board: Board = Field(default_factory=create_initial_board)
    status: GameStatus = GameStatus.IDLE
    selected: Position | None = None
    in_flight: InFlightMove | None = None

    # start/stop received while a move was in flight, run after it commits
    pending_command: SessionCommand | None = None

    game_number: int = 0  # Incremented on every start
    moves_made: int = 0
    started_at: float | None = None  # time.monotonic() at start
    finished_at: float | None = None  # time.monotonic() at WON/LOST

    @property
    def phase(self) -> MovePhase:
        """Get the current move lifecycle phase."""
        if self.in_flight is not None:
            return MovePhase.IN_FLIGHT
        if self.selected is not None:
            return MovePhase.SELECTING
        return MovePhase.IDLE

    @property
    def marbles_remaining(self) -> int:
        """Get number of marbles on the board."""
        return count_marbles(self.board)

    def elapsed_seconds(self, now: float | None = None) -> int:
        """Get whole seconds since the session started.

        The clock stops when the game ends and reads 0 while idle.
        """
        if self.started_at is None:
            return 0
        end = self.finished_at
        if end is None:
            end = time.monotonic() if now is None else now
        return max(0, int(end - self.started_at))

    def mark_finished(self) -> None:
        """Stop the clock."""
        if self.started_at is not None and self.finished_at is None:
            self.finished_at = time.monotonic()

    def reset_for_new_game(self, status: GameStatus) -> None:
        """Reset state for a new game (start) or for idling (stop).

        game_number is kept; the controller advances it on start.
        """
        self.board = create_initial_board()
        self.status = status
        self.selected = None
        self.in_flight = None
        self.pending_command = None
        self.moves_made = 0
        self.finished_at = None
        self.started_at = time.monotonic() if status == GameStatus.PLAYING else None

    def __str__(self) -> str:
        parts = [f"Status: {self.status.value}", f"Marbles: {self.marbles_remaining}"]
        if self.selected is not None:
            parts.append(f"Selected: {self.selected}")
        if self.in_flight is not None:
            parts.append(f"Moving: {self.in_flight}")
        return " | ".join(parts)
