"""Handler creation for the nibras-shell logging system.

The root ``nibras_shell`` logger only carries a QueueHandler; the console
and rotating file handlers hang off a QueueListener thread so a slow
terminal or disk never stalls a package install.
"""

import logging
import queue
import sys
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from pathlib import Path

from nibras_shell.constants import (
    LOG_BACKUP_COUNT,
    LOG_CONSOLE_DATE_FORMAT,
    LOG_CONSOLE_DEBUG_FORMAT,
    LOG_CONSOLE_FORMAT,
    LOG_FILE_DATE_FORMAT,
    LOG_FILE_FORMAT,
    LOG_ROTATION_THRESHOLD_BYTES,
    SUCCESS_LEVEL,
    SUCCESS_LEVEL_NAME,
)
from nibras_shell.logger.formatters import HybridConsoleFormatter


class ConfigurationError(Exception):
    """Error in logging configuration."""


def _resolve_level(level_name: str, fallback: int) -> int:
    """Map a level name from settings to a logging level number."""
    if level_name.upper() == SUCCESS_LEVEL_NAME:
        return SUCCESS_LEVEL
    return getattr(logging, level_name.upper(), fallback)


def _create_console_handler(console_level: str) -> logging.StreamHandler:
    """Create the console handler with the hybrid prefix formatter.

    Args:
        console_level: Log level for console (e.g., "DEBUG", "INFO")

    Returns:
        Configured StreamHandler writing to stdout

    """
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(
        HybridConsoleFormatter(
            LOG_CONSOLE_FORMAT,
            LOG_CONSOLE_DEBUG_FORMAT,
            datefmt=LOG_CONSOLE_DATE_FORMAT,
            use_color=sys.stdout.isatty(),
        )
    )
    console_handler.setLevel(_resolve_level(console_level, logging.INFO))
    return console_handler


def _create_file_handler(log_file: Path, file_level: str) -> RotatingFileHandler:
    """Create the rotating file handler.

    Args:
        log_file: Path to log file
        file_level: Log level for file (e.g., "DEBUG", "INFO")

    Returns:
        Configured RotatingFileHandler

    Raises:
        ConfigurationError: If the log directory or file cannot be opened

    """
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            filename=str(log_file),
            maxBytes=LOG_ROTATION_THRESHOLD_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
    except OSError as e:
        msg = f"Failed to setup file logging: {e}"
        raise ConfigurationError(msg) from e

    file_handler.setFormatter(
        logging.Formatter(LOG_FILE_FORMAT, datefmt=LOG_FILE_DATE_FORMAT)
    )
    file_handler.setLevel(_resolve_level(file_level, logging.INFO))
    return file_handler


def setup_root_logger(
    state,
    console_level: str,
    file_level: str,
    log_file: Path,
    enable_file_logging: bool,  # noqa: FBT001
) -> None:
    """Attach the QueueHandler to the root logger and start the listener.

    Called exactly once per process (or once per test after
    ``clear_logger_state``).

    Args:
        state: Logger state object (from logger.state module)
        console_level: Console log level
        file_level: File log level
        log_file: Path to log file
        enable_file_logging: Whether to add the rotating file handler

    Raises:
        ConfigurationError: If handler setup fails

    """
    logging.addLevelName(SUCCESS_LEVEL, SUCCESS_LEVEL_NAME)

    root_logger = logging.getLogger("nibras_shell")
    root_logger.setLevel(logging.DEBUG)  # Capture all, filter at handlers
    root_logger.propagate = False

    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)

    handlers: list[logging.Handler] = [_create_console_handler(console_level)]
    if enable_file_logging:
        handlers.append(_create_file_handler(log_file, file_level))

    state.log_queue = queue.Queue(-1)
    state.queue_listener = QueueListener(
        state.log_queue,
        *handlers,
        respect_handler_level=True,
    )
    state.queue_listener.start()

    root_logger.addHandler(QueueHandler(state.log_queue))
    state.root_initialized = True
