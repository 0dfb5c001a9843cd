"""Loggers for the parameterize engine.

The engine only logs at DEBUG level, so runs stay quiet unless debug logging
is enabled, either with `enable_debug_logging()` or by setting the
``PARAMETERIZE_LOG_LEVEL`` environment variable (e.g. ``DEBUG``) before import.
"""

import logging
import os
import sys
from typing import Optional

ROOT_LOGGER_NAME = "parameterize"
LOG_LEVEL_ENV_VAR = "PARAMETERIZE_LOG_LEVEL"

# Set once the "parameterize" logger has its handler
_ROOT_LOGGER_CONFIGURED = False


def _level_from_env(default: int) -> int:
    env_level = os.getenv(LOG_LEVEL_ENV_VAR)
    if not env_level:
        return default
    level = getattr(logging, env_level.upper(), None)
    return level if isinstance(level, int) else default


def setup_root_logger(
    level: Optional[int] = None,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Attach one handler to the "parameterize" logger and set its level.

    Calls after the first do nothing until `reset_logging()`.

    Args:
        level: Logging level. Defaults to ``PARAMETERIZE_LOG_LEVEL`` if set,
            otherwise INFO.
        format_string: Record format. Defaults to time, logger name, level
            and message.
        handler: Handler to attach. Defaults to a stderr StreamHandler.
    """
    global _ROOT_LOGGER_CONFIGURED

    if _ROOT_LOGGER_CONFIGURED:
        return

    if level is None:
        level = _level_from_env(logging.INFO)

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)

    # Replace handlers attached before configuration
    root_logger.handlers.clear()

    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Default to stderr so output doesn't mix with what the blocks print
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)

    formatter = logging.Formatter(format_string)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    # caplog and application handlers see records through the root logger
    root_logger.propagate = True

    _ROOT_LOGGER_CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return the logger `name`, configuring "parameterize" first if needed.

    Args:
        name: Logger name, normally the calling module's __name__.

    Returns:
        Logger whose records go through the "parameterize" handler.
    """
    setup_root_logger()

    logger = logging.getLogger(name)

    # Level comes from the "parameterize" logger
    logger.setLevel(logging.NOTSET)

    return logger


def set_global_log_level(level: int) -> None:
    """Set the level of the "parameterize" logger and its handlers.

    Args:
        level: Logging level (e.g., logging.DEBUG, logging.INFO).
    """
    setup_root_logger()

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)

    for handler in root_logger.handlers:
        handler.setLevel(level)


def enable_debug_logging() -> None:
    """Enable debug logging, including a trace of every iteration."""
    set_global_log_level(logging.DEBUG)


def disable_debug_logging() -> None:
    """Go back to INFO, hiding the iteration trace."""
    set_global_log_level(logging.INFO)


def reset_logging() -> None:
    """Drop the handler and level so the next get_logger() configures again."""
    global _ROOT_LOGGER_CONFIGURED
    _ROOT_LOGGER_CONFIGURED = False

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)


# Honor PARAMETERIZE_LOG_LEVEL from import time
setup_root_logger()
