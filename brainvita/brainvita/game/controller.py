"""Move lifecycle controller.

Sequences a move from selection through an in-flight phase to the board
update. The controller owns no state of its own: everything lives on the
Session passed in by the host, and every change goes through handle().

Phases (see MovePhase):

    IDLE --select marble--> SELECTING --select same marble--> IDLE
    SELECTING --select other marble--> SELECTING
    SELECTING --select empty, illegal--> IDLE
    SELECTING --select empty, legal--> IN_FLIGHT --delay elapsed--> IDLE
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING, Callable, Union

from brainvita.config import GameConfig
from brainvita.models.board import Board, Cell, Position, is_playable
from brainvita.models.game_state import GameStatus, Session, SessionCommand
from brainvita.models.move import InFlightMove

from .engine import apply_move, check_game_status
from .validator import MoveValidator, midpoint

if TYPE_CHECKING:
    from brainvita.logging import GameLogger

    from .scheduler import Scheduler

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectCell:
    """User clicked a cell."""

    pos: Position


@dataclass(frozen=True)
class DelayElapsed:
    """The in-flight delay is over.

    A scheduled delay carries the move it was started for and is dropped if
    that move is no longer in flight. None completes whatever is in flight.
    """

    move: InFlightMove | None = None


@dataclass(frozen=True)
class Start:
    """Start (or restart) a game."""


@dataclass(frozen=True)
class Stop:
    """Abort the game and go idle."""


Event = Union[SelectCell, DelayElapsed, Start, Stop]


class MoveController:
    """Drives a Session through selection, in-flight and commit."""

    def __init__(
        self,
        session: Session,
        config: GameConfig | None = None,
        scheduler: Scheduler | None = None,
        game_logger: GameLogger | None = None,
    ):
        """Initialize controller.

        Args:
            session: Session to operate on
            config: Game configuration (uses defaults if not provided)
            scheduler: Delay source for the commit. If None, the host must
                call complete_move() itself.
            game_logger: GameLogger instance for replay logging
        """
        self.session = session
        self.config = config or GameConfig()
        self.scheduler = scheduler
        self.game_logger = game_logger
        self.validator = MoveValidator()
        # True while commit callbacks run; start/stop is queued meanwhile
        self._notifying = False

        self._on_board_changed: Callable[[Board], None] | None = None
        self._on_status_changed: Callable[[GameStatus], None] | None = None
        self._on_selection_changed: Callable[[Position | None], None] | None = None
        self._on_move_started: Callable[[InFlightMove], None] | None = None
        self._on_move_completed: Callable[[InFlightMove], None] | None = None
        self._on_invalid_selection: Callable[[Position, Position, str], None] | None = None

    @property
    def move_delay(self) -> float:
        """Get the in-flight delay in seconds."""
        return self.config.move_delay_ms / 1000

    def set_callbacks(
        self,
        on_board_changed: Callable[[Board], None] | None = None,
        on_status_changed: Callable[[GameStatus], None] | None = None,
        on_selection_changed: Callable[[Position | None], None] | None = None,
        on_move_started: Callable[[InFlightMove], None] | None = None,
        on_move_completed: Callable[[InFlightMove], None] | None = None,
        on_invalid_selection: Callable[[Position, Position, str], None] | None = None,
    ) -> None:
        """Set event callbacks.

        Args:
            on_board_changed: Called with the new board
            on_status_changed: Called with the new status
            on_selection_changed: Called with the selected cell (None if cleared)
            on_move_started: Called when a move enters the in-flight phase
            on_move_completed: Called after the move is applied
            on_invalid_selection: Called with (from, to, reason) on a rejected jump

        When a move commits, the session is fully updated (board, status,
        move count, replay log) before any callback runs. Callbacks then fire
        in this order: on_board_changed, on_status_changed (only if the
        status changed), on_move_completed. Reading board and status together
        from any of them gives a consistent view. A start() or stop() issued
        from one of these callbacks runs after the last of them returns.
        """
        self._on_board_changed = on_board_changed
        self._on_status_changed = on_status_changed
        self._on_selection_changed = on_selection_changed
        self._on_move_started = on_move_started
        self._on_move_completed = on_move_completed
        self._on_invalid_selection = on_invalid_selection

    # Public commands

    def select_cell(self, pos: Position) -> None:
        """Handle a click on a cell."""
        self.handle(SelectCell(pos))

    def complete_move(self) -> None:
        """Signal that the in-flight delay has elapsed."""
        self.handle(DelayElapsed())

    def start(self) -> None:
        """Start a new game."""
        self.handle(Start())

    def stop(self) -> None:
        """Abort the current game."""
        self.handle(Stop())

    def handle(self, event: Event) -> None:
        """Apply one event to the session.

        Args:
            event: SelectCell, DelayElapsed, Start or Stop
        """
        if isinstance(event, SelectCell):
            self._handle_select(event.pos)
        elif isinstance(event, DelayElapsed):
            self._handle_delay_elapsed(event.move)
        elif isinstance(event, Start):
            self._handle_command(SessionCommand.START)
        elif isinstance(event, Stop):
            self._handle_command(SessionCommand.STOP)
        else:
            raise TypeError(f"Unknown event: {event!r}")

    # Selection

    def _handle_select(self, pos: Position) -> None:
        session = self.session
        if session.status != GameStatus.PLAYING or session.in_flight is not None:
            logger.debug(f"Ignoring selection of {pos} ({session.status.value}, {session.phase.value})")
            return
        if not is_playable(session.board, pos):
            logger.debug(f"Ignoring selection of non-playable cell {pos}")
            return

        cell = session.board[pos]

        if cell == Cell.MARBLE:
            if session.selected == pos:
                self._set_selected(None)
            else:
                self._set_selected(pos)
            return

        if cell == Cell.EMPTY and session.selected is not None:
            from_pos = session.selected
            result = self.validator.validate(session.board, from_pos, pos)
            if result.is_valid:
                self._begin_move(from_pos, pos)
            else:
                logger.debug(f"Rejected {from_pos} -> {pos}: {result.error_message}")
                self._set_selected(None)
                if self._on_invalid_selection:
                    self._on_invalid_selection(from_pos, pos, result.error_message)

    def _set_selected(self, pos: Position | None) -> None:
        self.session.selected = pos
        logger.debug(f"Selection: {pos}")
        if self._on_selection_changed:
            self._on_selection_changed(pos)

    # Commit sequence

    def _begin_move(self, from_pos: Position, to_pos: Position) -> None:
        """Phase one: clear the selection and mark the move as in flight."""
        move = InFlightMove(from_pos=from_pos, to_pos=to_pos, mid=midpoint(from_pos, to_pos))
        self._set_selected(None)
        self.session.in_flight = move
        logger.debug(f"Move started: {move}")
        if self._on_move_started:
            self._on_move_started(move)

        # Last step: a blocking scheduler completes the move inside this call
        if self.scheduler is not None:
            self.scheduler.schedule(self.move_delay, partial(self.handle, DelayElapsed(move)))

    def _handle_delay_elapsed(self, expected: InFlightMove | None = None) -> None:
        """Phase two: apply the move and recompute the status."""
        session = self.session
        move = session.in_flight
        if move is None:
            logger.debug("Delay elapsed with no move in flight")
            return
        if expected is not None and expected is not move:
            logger.debug(f"Ignoring stale delay for {expected}")
            return

        previous_status = session.status
        board = apply_move(session.board, move.from_pos, move.to_pos)
        status = check_game_status(board, require_center_finish=self.config.require_center_finish)
        session.board = board
        session.status = status
        session.moves_made += 1
        session.in_flight = None
        if status.is_terminal:
            session.mark_finished()

        logger.debug(f"Move {session.moves_made} committed: {move}")
        if self.game_logger:
            self.game_logger.log_move(session.game_number, session.moves_made, move, session)

        if status.is_terminal:
            logger.info(
                f"Game {session.game_number} {status.value} with "
                f"{session.marbles_remaining} marble(s) left after {session.moves_made} moves"
            )
            if self.game_logger:
                self.game_logger.log_game_end(session.game_number, session)

        was_notifying, self._notifying = self._notifying, True
        try:
            if self._on_board_changed:
                self._on_board_changed(board)
            if status != previous_status and self._on_status_changed:
                self._on_status_changed(status)
            if self._on_move_completed:
                self._on_move_completed(move)
        finally:
            self._notifying = was_notifying

        if session.pending_command is not None and not self._notifying:
            command = session.pending_command
            session.pending_command = None
            logger.info(f"Running deferred {command.value} command")
            self._handle_command(command)

    # Session commands

    def _handle_command(self, command: SessionCommand) -> None:
        session = self.session
        if session.in_flight is not None:
            logger.info(f"Deferring {command.value} until the move in flight completes")
            session.pending_command = command
            return
        if self._notifying:
            logger.debug(f"Deferring {command.value} until move callbacks return")
            session.pending_command = command
            return

        was_playing = session.status == GameStatus.PLAYING

        if command == SessionCommand.START:
            game_number = session.game_number + 1
            session.reset_for_new_game(GameStatus.PLAYING)
            session.game_number = game_number
            logger.info(f"Game {game_number} started")
            if self.game_logger:
                self.game_logger.log_game_start(game_number, session.board)
        else:
            if was_playing and self.game_logger:
                self.game_logger.log_game_stop(session.game_number, session)
            session.reset_for_new_game(GameStatus.IDLE)
            logger.info("Session stopped")

        if self._on_board_changed:
            self._on_board_changed(session.board)
        if self._on_status_changed:
            self._on_status_changed(session.status)
        if self._on_selection_changed:
            self._on_selection_changed(None)
