"""Main logger module providing public API functions.

- setup_logging(): Configure the queue-based root logger once
- get_logger(): Module logger accessor, the only entry point modules use
- log_success(): Emit a record at the custom SUCCESS level
- set_console_level(): Change console verbosity at runtime (--verbose)
- flush_all_handlers(): Ensure all pending log records are written
- clear_logger_state(): Reset global logger state for testing
"""

import atexit
import contextlib
import logging
import time
from logging.handlers import RotatingFileHandler
from pathlib import Path

from nibras_shell.constants import SUCCESS_LEVEL
from nibras_shell.logger.config import load_log_settings
from nibras_shell.logger.handlers import _resolve_level, setup_root_logger
from nibras_shell.logger.state import get_state


def flush_all_handlers() -> None:
    """Wait for the log queue to drain, then flush every handler.

    Example:
        >>> logger.info("Backup completed")
        >>> flush_all_handlers()  # Safe to read the log file now

    """
    state = get_state()
    if state.queue_listener is None or state.log_queue is None:
        return

    # QueueListener doesn't use task_done(), so poll the queue
    timeout = 5.0
    start_time = time.time()
    while not state.log_queue.empty():
        if time.time() - start_time > timeout:
            break
        time.sleep(0.01)

    # Give the listener thread time to hand the final records over
    time.sleep(0.1)

    for handler in state.queue_listener.handlers:
        with contextlib.suppress(OSError, ValueError):
            handler.flush()


def _cleanup_logging() -> None:
    """Stop the QueueListener on interpreter exit."""
    state = get_state()
    if state.queue_listener is not None:
        flush_all_handlers()
        state.queue_listener.stop()
        state.queue_listener = None


atexit.register(_cleanup_logging)


def setup_logging(
    name: str = "nibras_shell",
    console_level: str | None = None,
    file_level: str | None = None,
    log_file: Path | None = None,
    enable_file_logging: bool = True,  # noqa: FBT001, FBT002
) -> logging.Logger:
    """Initialize the root logger if needed and return the named logger.

    Logger Hierarchy:
        - Root logger: "nibras_shell" (QueueHandler -> Queue -> Listener)
        - Child loggers: "nibras_shell.core.backup.recorder", ...
          (propagate to root, never carry their own handlers)

    Args:
        name: Logger name, typically __name__
        console_level: Console log level ("DEBUG", "INFO", "WARNING")
        file_level: File log level ("DEBUG", "INFO")
        log_file: Path to log file
            (default: ~/.config/nibras-shell/logs/nibras-shell.log)
        enable_file_logging: Whether to enable file logging

    Returns:
        Logger instance

    Raises:
        ConfigurationError: If file logging setup fails

    """
    state = get_state()
    with state.lock:
        if not state.root_initialized:
            if console_level is None or file_level is None or log_file is None:
                cfg_console, cfg_file, cfg_path = load_log_settings()
                console_level = console_level or cfg_console
                file_level = file_level or cfg_file
                log_file = log_file or cfg_path

            setup_root_logger(
                state,
                console_level,
                file_level,
                log_file,
                enable_file_logging,
            )

    return logging.getLogger(name)


def get_logger(
    name: str = "nibras_shell",
    enable_file_logging: bool = True,  # noqa: FBT001, FBT002
) -> logging.Logger:
    """Get a logger, initializing the root logger on first use.

    Always call with ``__name__`` so records land under ``nibras_shell``:

        >>> from nibras_shell.logger import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("Backed up %s to %s", name, target)

    """
    return setup_logging(name=name, enable_file_logging=enable_file_logging)


def log_success(logger: logging.Logger, msg: str, *args: object) -> None:
    """Log ``msg`` at the SUCCESS level (cyan ``[SUCCESS]`` on console)."""
    logger.log(SUCCESS_LEVEL, msg, *args)


def set_console_level(level_name: str) -> None:
    """Change the console handler level without touching the file handler.

    Args:
        level_name: New console level, e.g. "DEBUG"

    """
    state = get_state()
    if state.queue_listener is None:
        return
    level = _resolve_level(level_name, logging.INFO)
    for handler in state.queue_listener.handlers:
        if isinstance(handler, logging.StreamHandler) and not isinstance(
            handler, RotatingFileHandler
        ):
            handler.setLevel(level)


def clear_logger_state() -> None:
    """Clear global logger state for testing purposes.

    Stops the QueueListener, closes handlers and forgets every
    ``nibras_shell`` logger so the next ``get_logger`` starts fresh.

    Warning:
        Test-only. Calling this in production drops pending log records.

    """
    state = get_state()
    with state.lock:
        if state.queue_listener is not None:
            flush_all_handlers()
            state.queue_listener.stop()
            state.queue_listener = None

        state.log_queue = None
        state.root_initialized = False
        state.config_applied = False

        for logger_name in list(logging.Logger.manager.loggerDict.keys()):
            if logger_name.startswith(("test-", "nibras_shell")):
                log_instance = logging.getLogger(logger_name)
                for handler in log_instance.handlers[:]:
                    handler.close()
                    log_instance.removeHandler(handler)
                logging.Logger.manager.loggerDict.pop(logger_name, None)
