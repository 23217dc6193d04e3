"""Logging configuration using loguru.

The package logs through loguru's global logger. As a library it stays
silent until the host application opts in, either by calling
``setup_logging`` (which also installs handlers) or ``enable_logging``
(which keeps the host's own handlers).

Example:
    from async_image.logging import setup_logging

    setup_logging(level="DEBUG")

"""

import sys
from typing import Any

from loguru import logger

PACKAGE = "async_image"

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


def enable_logging() -> None:
    """Let records emitted by this package reach the configured handlers."""
    logger.enable(PACKAGE)


def disable_logging() -> None:
    """Silence records emitted by this package."""
    logger.disable(PACKAGE)


def setup_logging(
    level: str = "INFO",
    json_output: bool = False,
    log_file: str | None = None,
) -> Any:
    """Install stderr (and optionally file) handlers and enable package logs.

    Replaces any existing loguru handlers, so call it once from the
    application entry point rather than from library code.

    Args:
        level: Minimum log level. One of: DEBUG, INFO, WARNING, ERROR, CRITICAL.
        json_output: Serialize records as JSON lines instead of the colored format.
        log_file: Optional path of a rotating log file.

    Returns:
        The configured loguru logger.

    """
    logger.remove()

    if json_output:
        logger.add(sys.stderr, format="{message}", serialize=True, level=level)
    else:
        logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)

    if log_file:
        logger.add(
            log_file,
            format=CONSOLE_FORMAT,
            level=level,
            rotation="10 MB",
            retention="7 days",
            compression="gz",
        )

    enable_logging()
    return logger
