"""Logging utilities and game state display."""

import logging
import sys
from typing import TYPE_CHECKING, TextIO

from brainvita.logging.formatters import format_time
from brainvita.models.board import BOARD_SIZE, Cell, removed_marbles
from brainvita.models.game_state import GameStatus

if TYPE_CHECKING:
    from brainvita.models.board import Board, Position
    from brainvita.models.game_state import Session
    from brainvita.models.move import InFlightMove, Move


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
    )


class GameDisplay:
    """Display game state to a text stream."""

    def __init__(self, show_moves: bool = False, out: TextIO | None = None):
        """Initialize display.

        Args:
            show_moves: Whether to list legal moves after every commit
            out: Output stream (stdout if not provided)
        """
        self.show_moves = show_moves
        self.out = out or sys.stdout

    def _print(self, text: str = "") -> None:
        print(text, file=self.out)

    def print_message(self, message: str) -> None:
        """Print a plain message."""
        self._print(message)

    def print_separator(self) -> None:
        """Print a separator line."""
        self._print("=" * 40)

    def render_board(
        self,
        board: "Board",
        selected: "Position | None" = None,
        destinations: "list[Position] | None" = None,
    ) -> list[str]:
        """Render the board with row/column labels.

        The selected marble is drawn as "@", its legal landing cells as "*".
        """
        targets = {(p.row, p.col) for p in destinations or []}
        lines = ["    " + " ".join(str(c) for c in range(BOARD_SIZE))]
        for r, row in enumerate(board.rows):
            cells = []
            for c, cell in enumerate(row):
                if selected is not None and (selected.row, selected.col) == (r, c):
                    cells.append("@")
                elif (r, c) in targets:
                    cells.append("*")
                elif cell == Cell.MARBLE:
                    cells.append("o")
                elif cell == Cell.EMPTY:
                    cells.append(".")
                else:
                    cells.append(" ")
            lines.append(f"  {r} " + " ".join(cells))
        return lines

    def print_session(
        self,
        session: "Session",
        destinations: "list[Position] | None" = None,
    ) -> None:
        """Print board, counters and status."""
        self._print()
        for line in self.render_board(session.board, session.selected, destinations):
            self._print(line)
        self._print()
        self._print(
            f"Marbles: {session.marbles_remaining}  "
            f"Removed: {removed_marbles(session.board)}  "
            f"Moves: {session.moves_made}  "
            f"Time: {format_time(session.elapsed_seconds())}"
        )
        self._print(f"Status: {session.status.value.upper()}")

    def print_move_started(self, move: "InFlightMove") -> None:
        """Print the move entering the in-flight phase."""
        self._print(f"  -> Jump {move}")

    def print_invalid(self, from_pos: "Position", to_pos: "Position", reason: str) -> None:
        """Print a rejected jump."""
        self._print(f"  !! Cannot jump {from_pos} -> {to_pos}: {reason}")

    def print_moves(self, moves: "list[Move]") -> None:
        """Print the list of legal moves."""
        if not moves:
            self._print("No legal moves.")
            return
        self._print(f"Legal moves ({len(moves)}):")
        for move in moves:
            self._print(f"  {move}")

    def print_game_end(self, status: GameStatus, session: "Session") -> None:
        """Print game end results."""
        self.print_separator()
        if status == GameStatus.WON:
            self._print("VICTORY! One marble left.")
        else:
            self._print(f"GAME OVER. Marbles left: {session.marbles_remaining}")
        self._print(f"Time: {format_time(session.elapsed_seconds())}")
        self.print_separator()

    def print_help(self) -> None:
        """Print the command reference."""
        self._print("Commands:")
        self._print("  start          Start a new game")
        self._print("  stop           Abort the current game")
        self._print("  <row> <col>    Select a marble, or a hole to jump into")
        self._print("  moves          List legal moves")
        self._print("  help           Show this help")
        self._print("  quit           Exit")
