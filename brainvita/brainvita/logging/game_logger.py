"""Game logger for detailed game replay."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, TextIO

from brainvita.config import GameLogConfig
from brainvita.models.board import Board, removed_marbles
from brainvita.models.game_state import Session
from brainvita.models.move import InFlightMove

from .formatters import format_board, format_position


class GameLogger:
    """Logger for detailed game events in JSONL format.

    Each line in the output file is a JSON object representing one event.
    This allows step-by-step replay of the game.
    """

    def __init__(self, config: GameLogConfig | None = None):
        """Initialize game logger.

        Args:
            config: Logging configuration. If None, logging is disabled.
                output_path is the log file path.
        """
        self.config = config or GameLogConfig()
        self._file: TextIO | None = None

    def __enter__(self) -> "GameLogger":
        """Context manager entry."""
        if self.config.enabled and self.config.output_path:
            path = Path(self.config.output_path)
            path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(path, "a", encoding="utf-8")
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()

    def close(self) -> None:
        """Close the log file."""
        if self._file:
            self._file.close()
            self._file = None

    def _write(self, event: dict[str, Any]) -> None:
        if self._file:
            self._file.write(json.dumps(event, ensure_ascii=False) + "\n")
            self._file.flush()

    def log_session_start(self, move_delay_ms: int, require_center_finish: bool) -> None:
        """Log session start with the active rules."""
        self._write({
            "type": "session_start",
            "timestamp": datetime.now().isoformat(),
            "move_delay_ms": move_delay_ms,
            "require_center_finish": require_center_finish,
        })

    def log_game_start(self, game_num: int, board: Board) -> None:
        """Log game start with the initial board.

        Args:
            game_num: Game number.
            board: Starting board.
        """
        self._write({
            "type": "game_start",
            "game": game_num,
            "board": format_board(board),
        })

    def log_move(
        self,
        game_num: int,
        move_num: int,
        move: InFlightMove,
        session: Session,
    ) -> None:
        """Log a committed move.

        Args:
            game_num: Game number.
            move_num: Move number within the game (1-based).
            move: The move just applied.
            session: Session after the move.
        """
        self._write({
            "type": "move",
            "game": game_num,
            "move": move_num,
            "from": format_position(move.from_pos),
            "to": format_position(move.to_pos),
            "captured": format_position(move.mid),
            "marbles": session.marbles_remaining,
            "status": session.status.value,
            "board": format_board(session.board),
        })

    def log_game_end(self, game_num: int, session: Session) -> None:
        """Log game end (won or lost).

        Args:
            game_num: Game number.
            session: Session in its terminal state.
        """
        self._write({
            "type": "game_end",
            "game": game_num,
            "status": session.status.value,
            "marbles": session.marbles_remaining,
            "removed": removed_marbles(session.board),
            "moves": session.moves_made,
            "elapsed": session.elapsed_seconds(),
        })

    def log_game_stop(self, game_num: int, session: Session) -> None:
        """Log a game aborted by stop.

        Args:
            game_num: Game number.
            session: Session just before it was reset.
        """
        self._write({
            "type": "game_stop",
            "game": game_num,
            "marbles": session.marbles_remaining,
            "moves": session.moves_made,
            "elapsed": session.elapsed_seconds(),
        })

    def log_session_end(self, total_games: int, results: dict[str, int]) -> None:
        """Log session end.

        Args:
            total_games: Number of games started.
            results: Count of games per final status ("won", "lost", "stopped").
        """
        self._write({
            "type": "session_end",
            "total_games": total_games,
            "results": results,
        })
