"""Configuration management."""

from pathlib import Path

import yaml
from pydantic import BaseModel, Field


class GameConfig(BaseModel):
    """Game configuration."""

    move_delay_ms: int = Field(default=150, ge=0)  # In-flight phase length
    require_center_finish: bool = False  # Last marble must end on the center


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    show_moves: bool = False  # Print legal moves after every commit


class GameLogConfig(BaseModel):
    """Configuration for the JSONL game log."""

    enabled: bool = False
    output_path: str = "logs"  # Directory; filename is generated per run


class Config(BaseModel):
    """Root configuration."""

    game: GameConfig = GameConfig()
    logging: LoggingConfig = LoggingConfig()
    game_log: GameLogConfig = GameLogConfig()


def load_config(path: Path | str | None = None) -> Config:
    """Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses default config.

    Returns:
        Config object.
    """
    if path is None:
        return Config()

    config_path = Path(path)
    if not config_path.exists():
        return Config()

    with open(config_path) as f:
        data = yaml.safe_load(f)

    return Config(**data) if data else Config()
