import platform
import sys
from datetime import datetime
from pathlib import Path

from loguru import logger

from . import __version__


def _header(exc: BaseException) -> str:
    return "\n".join(
        [
            f"Crash::: {type(exc).__module__}.{type(exc).__qualname__}: {exc}",
            "",
            "----------------------------",
            f"Version: {__version__}",
            f"OS: {platform.platform()}",
            f"Python: {sys.version.split()[0]}",
            "----------------------------",
        ]
    )


def report_crash(exc: BaseException, data_dir: Path) -> Path:
    """
    Write a crash log for an exception that ended an editor callback.

    The log holds the exception, environment details and the full
    traceback, chained causes included.

    Returns:
        Path to the crash log.
    """
    data_dir.mkdir(parents=True, exist_ok=True)
    crash_file = data_dir / f"crash_{datetime.now():%Y-%m-%d_%H-%M-%S}.log"
    sink = logger.add(
        sink=crash_file,
        format="{message}",
        level="CRITICAL",
        backtrace=False,
        diagnose=False,
        filter=lambda record: record["extra"].get("crash", False),
    )
    try:
        logger.bind(crash=True).opt(exception=exc).critical(_header(exc))
    finally:
        logger.remove(sink)
    logger.error(f"{exc} (crash log: {crash_file})")
    return crash_file
