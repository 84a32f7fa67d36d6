"""Main entry point for the Brainvita terminal game."""

import argparse
import logging
import sys
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import Iterable

from brainvita.config import Config, GameLogConfig, load_config
from brainvita.game.controller import MoveController
from brainvita.game.engine import get_possible_moves, valid_destinations
from brainvita.game.scheduler import BlockingScheduler
from brainvita.logging import GameLogger
from brainvita.models.board import Position
from brainvita.models.game_state import GameStatus, Session
from brainvita.utils.logger import GameDisplay, setup_logging

logger = logging.getLogger(__name__)

COMMANDS = ("start", "stop", "moves", "help", "quit")


def generate_log_filename(log_dir: str) -> str:
    """Generate log filename with timestamp.

    Format: {ISO timestamp}_brainvita.jsonl

    Args:
        log_dir: Directory for log files.

    Returns:
        Full path to log file.
    """
    timestamp = datetime.now().strftime("%Y%m%dT%H%M%S")
    return str(Path(log_dir) / f"{timestamp}_brainvita.jsonl")


def parse_command(line: str) -> tuple[str, Position | None]:
    """Parse one line of user input.

    Accepts a command word or a cell as "row col" / "row,col".

    Args:
        line: Raw input line.

    Returns:
        ("select", Position) for a cell, (command, None) otherwise.

    Raises:
        ValueError: If the line is not a known command or cell.
    """
    text = line.strip().lower()
    if not text:
        raise ValueError("Empty command")
    if text in COMMANDS:
        return text, None
    if text in ("q", "exit"):
        return "quit", None

    parts = text.replace(",", " ").split()
    if len(parts) != 2:
        raise ValueError(f"Unknown command: {line.strip()!r}")
    try:
        row, col = int(parts[0]), int(parts[1])
    except ValueError:
        raise ValueError(f"Unknown command: {line.strip()!r}") from None
    return "select", Position(row=row, col=col)


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        description="Brainvita (peg solitaire) in the terminal"
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Path to config file (YAML)",
    )
    parser.add_argument(
        "-d",
        "--delay-ms",
        type=int,
        help="In-flight delay per move in milliseconds (overrides config)",
    )
    parser.add_argument(
        "--center-finish",
        action="store_true",
        help="Only count a win if the last marble ends on the center",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "--show-moves",
        action="store_true",
        help="List legal moves after every jump",
    )
    parser.add_argument(
        "--game-log",
        type=Path,
        help="Directory for game log files (filename auto-generated)",
    )
    return parser


def apply_overrides(config: Config, args: argparse.Namespace) -> Config:
    """Apply command-line overrides to a loaded config."""
    if args.delay_ms is not None:
        config.game.move_delay_ms = args.delay_ms
    if args.center_finish:
        config.game.require_center_finish = True
    if args.verbose:
        config.logging.level = "DEBUG"
    if args.show_moves:
        config.logging.show_moves = True
    if args.game_log is not None:
        config.game_log.enabled = True
        config.game_log.output_path = str(args.game_log)
    return config


def run_session(
    controller: MoveController,
    display: GameDisplay,
    lines: Iterable[str],
) -> Counter:
    """Read commands and drive the controller until quit or end of input.

    Args:
        controller: Controller bound to the session
        display: Output for board and messages
        lines: Input lines (e.g. sys.stdin)

    Returns:
        Count of finished games per outcome ("won", "lost", "stopped")
    """
    session = controller.session
    results: Counter = Counter()

    def on_status_changed(status: GameStatus) -> None:
        if status.is_terminal:
            results[status.value] += 1
            display.print_game_end(status, session)

    def on_move_completed(_move) -> None:
        if display.show_moves and session.status == GameStatus.PLAYING:
            display.print_moves(get_possible_moves(session.board))

    controller.set_callbacks(
        on_status_changed=on_status_changed,
        on_move_started=display.print_move_started,
        on_move_completed=on_move_completed,
        on_invalid_selection=display.print_invalid,
    )

    display.print_help()
    display.print_session(session)

    for line in lines:
        if not line.strip():
            continue
        try:
            command, pos = parse_command(line)
        except ValueError as e:
            display.print_message(str(e))
            continue

        if command == "quit":
            break
        if command == "help":
            display.print_help()
            continue
        if command == "moves":
            display.print_moves(get_possible_moves(session.board))
            continue

        if command == "start":
            controller.start()
        elif command == "stop":
            if session.status == GameStatus.PLAYING:
                results["stopped"] += 1
            controller.stop()
        elif pos is not None:
            controller.select_cell(pos)

        destinations = valid_destinations(session.board, session.selected) if session.selected is not None else None
        display.print_session(session, destinations)

    return results


def main() -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success)
    """
    args = build_parser().parse_args()

    # Load config and apply command-line overrides
    config = apply_overrides(load_config(args.config), args)

    setup_logging(config.logging.level)

    display = GameDisplay(show_moves=config.logging.show_moves)

    if config.game_log.enabled:
        log_path = generate_log_filename(config.game_log.output_path)
        game_log_config = GameLogConfig(enabled=True, output_path=log_path)
        print(f"Game log: {log_path}")
    else:
        game_log_config = GameLogConfig(enabled=False)

    try:
        with GameLogger(game_log_config) as game_logger:
            game_logger.log_session_start(
                config.game.move_delay_ms,
                config.game.require_center_finish,
            )

            session = Session()
            controller = MoveController(
                session,
                config.game,
                scheduler=BlockingScheduler(),
                game_logger=game_logger,
            )

            results = run_session(controller, display, sys.stdin)

            game_logger.log_session_end(session.game_number, dict(results))
        return 0

    except KeyboardInterrupt:
        print("\nInterrupted by user")
        return 1
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
