"""Logging configuration using Loguru.

Console and rotating file sinks are configured from :class:`Settings`, with
keyword overrides for one-off runs such as the CLI's ``--verbose`` flag.
Loggers can carry a ``game_id`` so that every line written by a live
session is attributable to its game; lines without one show ``-``.

Example:
    >>> from hoopstats.logging import setup_logging, get_logger
    >>> setup_logging(level="DEBUG")
    >>> log = get_logger(__name__, game_id="game-1")
    >>> log.info("Recorded {} for {}", "shot", "player-7")

Status Tags:
    >>> from hoopstats.logging import SUCCESS, FAIL, WARN
    >>> log.info(f"{SUCCESS} Game completed")
    >>> log.warning(f"{WARN} Statline for player-7 has more makes than attempts")
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

from loguru import logger

from hoopstats.config import Settings, get_settings

# Color-coded status tags for terminal output
SUCCESS = "\033[92m[SUCCESS]\033[0m"
FAIL = "\033[91m[FAIL]\033[0m"
WARN = "\033[93m[WARN]\033[0m"

NO_GAME = "-"

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan> | "
    "<magenta>{extra[game_id]}</magenta> | "
    "<level>{message}</level>"
)
FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | "
    "{extra[name]}:{function}:{line} | game={extra[game_id]} | {message}"
)


class InterceptHandler(logging.Handler):
    """Route stdlib logging records (e.g. from pandas) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.bind(name=record.name).opt(
            depth=depth, exception=record.exc_info
        ).log(level, record.getMessage())


def setup_logging(
    settings: Settings | None = None,
    *,
    level: str | None = None,
    log_dir: str | Path | None = None,
    rotation: str | None = None,
    retention: str | None = None,
    serialize: bool | None = None,
) -> Path:
    """Configure application logging.

    Every keyword left as None falls back to the matching ``log_*`` setting.
    Replaces any sinks installed by an earlier call.

    Args:
        settings: Settings to read defaults from; the singleton if omitted.
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_dir: Directory for log files, created if missing.
        rotation: When to rotate log files (e.g., "1 day", "100 MB").
        retention: How long to keep old log files.
        serialize: Whether to write JSON lines to the log file.

    Returns:
        The log directory in use.
    """
    settings = settings or get_settings()
    level = level or settings.log_level
    log_path = Path(log_dir) if log_dir is not None else settings.log_dir_obj
    log_path.mkdir(parents=True, exist_ok=True)

    logger.configure(
        handlers=[
            {
                "sink": sys.stderr,
                "level": level,
                "format": CONSOLE_FORMAT,
                "colorize": True,
            },
            {
                "sink": log_path / "hoopstats_{time:YYYY-MM-DD}.log",
                "level": level,
                "format": FILE_FORMAT,
                "rotation": rotation or settings.log_rotation,
                "retention": retention or settings.log_retention,
                "serialize": settings.log_serialize if serialize is None else serialize,
                "enqueue": True,
            },
        ],
        extra={"name": "hoopstats", "game_id": NO_GAME},
    )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    return log_path


def get_logger(name: str, **context: Any) -> Any:
    """Get a logger bound with a module name and optional context.

    Args:
        name: Logger name, typically __name__ of the calling module.
        **context: Extra fields to bind, such as ``game_id``.

    Returns:
        Bound Loguru logger.
    """
    return logger.bind(name=name, **context)


__all__ = [
    "get_logger",
    "logger",
    "setup_logging",
    "SUCCESS",
    "FAIL",
    "WARN",
    "NO_GAME",
]
