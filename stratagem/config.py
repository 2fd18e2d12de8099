"""
Configuration - Environment driven settings.

Environment:
    STRATAGEM_DATA_DIR   Directory holding definition files
                         (default: the bundled data/games directory)
    STRATAGEM_LOG_LEVEL  Logging level name (default: WARNING)
    STRATAGEM_ENV        development | production (default: development)
    STRATAGEM_ALLOWED_ORIGINS
                         Comma separated CORS origins for the API (default: *)
"""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
import logging
import os

BUNDLED_DATA_DIR = Path(__file__).parent / "data" / "games"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    log_level: str
    env: str
    allowed_origins: tuple[str, ...] = ("*",)


def get_settings() -> Settings:
    """Read settings from the environment."""
    data_dir = os.getenv("STRATAGEM_DATA_DIR")
    return Settings(
        data_dir=Path(data_dir).expanduser() if data_dir else BUNDLED_DATA_DIR,
        log_level=os.getenv("STRATAGEM_LOG_LEVEL", "WARNING").upper(),
        env=os.getenv("STRATAGEM_ENV", "development"),
        allowed_origins=tuple(os.getenv("STRATAGEM_ALLOWED_ORIGINS", "*").split(",")),
    )


def configure_logging(level: str | int | None = None) -> None:
    """Set up root logging for the CLI and the API server."""
    if level is None:
        level = get_settings().log_level
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("stratagem").setLevel(level)
