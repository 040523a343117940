"""
Logging Configuration Module

Root logging setup for the surfbeam-status CLI. Log records go to stderr so
that stdout carries only JSON, and optionally to a log file, which is useful
with --watch on a long-running poll.

License: MIT
"""

import logging
import sys
from typing import Optional

LIBRARY_LOGGER = "surfbeam-status"

SIMPLE_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
DEBUG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(funcName)s:%(lineno)d - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# HTTP stack loggers and their level outside debug mode
THIRD_PARTY_LEVELS = {
    "urllib3": logging.WARNING,
    "urllib3.connectionpool": logging.ERROR,
    "requests": logging.WARNING,
}

_logging_configured = False


def _build_handlers(level: int, formatter: logging.Formatter, silent: bool, log_file: Optional[str]) -> list:
    handlers: list[logging.Handler] = []

    if not silent:
        handlers.append(logging.StreamHandler(sys.stderr))
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    if not handlers:
        return [logging.NullHandler()]

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    return handlers


def setup_logging(
    debug: bool = False, quiet: bool = False, silent: bool = False, log_file: Optional[str] = None
) -> None:
    """
    Configure logging for the CLI application.

    Only the first call has an effect.

    Args:
        debug: Log at DEBUG, including urllib3/requests and source locations
        quiet: Log warnings and errors only
        silent: No console handler at all
        log_file: Also append log records to this file
    """
    global _logging_configured

    if _logging_configured:
        return
    _logging_configured = True

    level = logging.DEBUG if debug else logging.WARNING if quiet else logging.INFO
    formatter = logging.Formatter(DEBUG_FORMAT if debug else SIMPLE_FORMAT, datefmt=DATE_FORMAT)

    logging.basicConfig(level=level, handlers=_build_handlers(level, formatter, silent, log_file), force=True)

    for name, quiet_level in THIRD_PARTY_LEVELS.items():
        logging.getLogger(name).setLevel(logging.DEBUG if debug else quiet_level)
    if debug:
        logging.getLogger(LIBRARY_LOGGER).setLevel(logging.DEBUG)

    logger = logging.getLogger(__name__)
    logger.debug(f"Logging configured: level={logging.getLevelName(level)}, log_file={log_file}")


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for the given name."""
    return logging.getLogger(name)
