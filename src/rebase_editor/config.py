import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

DEFAULT_DATA_DIR = Path.home() / ".rebase-editor"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Settings:
    """Runtime settings read from the environment."""

    data_dir: Path
    log_level: str


def _log_level(name: str) -> str:
    """Return name if loguru knows the level, else the default level."""
    try:
        logger.level(name)
    except ValueError:
        logger.warning(
            f"Unknown log level {name!r}, using {DEFAULT_LOG_LEVEL}"
        )
        return DEFAULT_LOG_LEVEL
    return name


def load_settings() -> Settings:
    """Load settings from the environment, after reading any .env file."""
    load_dotenv()
    data_dir = os.environ.get("REBASE_EDITOR_DATA_DIR")
    return Settings(
        data_dir=Path(data_dir).expanduser() if data_dir else DEFAULT_DATA_DIR,
        log_level=_log_level(
            os.environ.get("REBASE_EDITOR_LOG_LEVEL", DEFAULT_LOG_LEVEL)
            .strip()
            .upper()
        ),
    )
