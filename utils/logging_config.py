"""Loguru sinks for the catalog: console output plus an optional rolling log file."""

from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path

from loguru import logger

from utils.errors import InvalidArgumentError

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{line} | {message}"
LOG_ROTATION = "5 MB"
LOG_RETENTION = 5

_SINK_OPTIONS = {"format": LOG_FORMAT, "backtrace": True, "diagnose": False, "enqueue": True}


def log_file_path(logs_dir: Path, now: datetime | None = None) -> Path:
    """Name of the log file for a run started at ``now``."""
    return logs_dir / f"quote_gallery_{(now or datetime.now()):%Y%m%d_%H%M%S}.log"


def configure_logging(logs_dir: Path | None, level: str = "INFO") -> Path | None:
    """
    Replace loguru's sinks with stderr and, when ``logs_dir`` is usable, a log file.

    Args:
        logs_dir: Directory for the rolling log file; None logs to stderr only
        level: Minimum level name, case-insensitive

    Returns:
        The log file in use, or None when only stderr is configured

    Raises:
        InvalidArgumentError: If ``level`` is not a known loguru level
    """
    level = (level or "INFO").upper()
    try:
        logger.level(level)
    except ValueError as exc:
        raise InvalidArgumentError(f"Unknown log level {level!r}") from exc

    logger.remove()
    logger.add(sys.stderr, level=level, **_SINK_OPTIONS)
    if logs_dir is None:
        return None

    log_file = log_file_path(logs_dir)
    try:
        logs_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level=level,
            rotation=LOG_ROTATION,
            retention=LOG_RETENTION,
            encoding="utf-8",
            **_SINK_OPTIONS,
        )
    except OSError as exc:
        logger.warning(f"File logging disabled; unable to write to {logs_dir}: {exc}")
        return None

    logger.debug(f"Logging to {log_file} at {level}")
    return log_file


__all__ = ["configure_logging", "log_file_path"]
