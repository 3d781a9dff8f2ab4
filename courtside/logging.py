"""Logging configuration using Loguru.

This module provides centralized logging setup for Courtside. Every record
carries the id of the game it belongs to (``-`` outside a game), so a log
file that spans several tracked games can be split per game.

Example:
    >>> from courtside.logging import setup_logging, get_logger
    >>> setup_logging(level="DEBUG")
    >>> logger = get_logger(__name__, game_id="3f2a")
    >>> logger.info("Quarter {} started", 2)
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

from loguru import logger

# Value of the ``game`` extra on records not bound to a game
NO_GAME = "-"

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<magenta>{extra[game]:.8}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> | "
    "<level>{message}</level>"
)

FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
    "{level: <8} | "
    "game={extra[game]} | "
    "{name}:{function}:{line} | "
    "{message}"
)


class InterceptHandler(logging.Handler):
    """Route stdlib logging records (asyncio, typer) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find the first frame outside the logging package
        frame = logging.currentframe()
        depth = 0
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(
    level: str = "INFO",
    log_dir: str | Path = "logs",
    rotation: str = "1 day",
    retention: str = "30 days",
    serialize: bool = True,
    console: bool = True,
) -> None:
    """Configure application logging.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_dir: Directory for the daily ``courtside_<date>.log`` files.
        rotation: When to rotate log files (e.g., "1 day", "100 MB").
        retention: How long to keep old log files.
        serialize: Write JSON records to the file sink.
        console: Also log to stderr.
    """
    logger.remove()
    logger.configure(extra={"game": NO_GAME})

    if console:
        logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, colorize=True)

    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_path / "courtside_{time:YYYY-MM-DD}.log",
        level=level,
        format=FILE_FORMAT,
        rotation=rotation,
        retention=retention,
        serialize=serialize,
        enqueue=True,  # Thread-safe
    )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)


def get_logger(name: str, game_id: str | None = None) -> Any:
    """Get a logger bound to a module and, optionally, a game.

    Args:
        name: Logger name, typically __name__ of the calling module.
        game_id: Game the records belong to.

    Returns:
        Loguru logger bound with ``name`` and ``game``.
    """
    return logger.bind(name=name, game=game_id or NO_GAME)


__all__ = ["NO_GAME", "get_logger", "logger", "setup_logging"]
