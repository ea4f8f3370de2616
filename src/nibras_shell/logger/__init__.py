"""Logging utilities for nibras-shell.

Architecture:
    Application -> QueueHandler -> Queue -> QueueListener Thread
                                                 |
                                      Console + Rotating File Handlers

Console lines keep the prefixes the NibrasShell shell installers used
(``[INFO]``, ``[WARN]``, ``[ERROR]``, ``[SUCCESS]``), colored by severity.
The log file gets the full structured format.

Usage:
    >>> from nibras_shell.logger import get_logger, log_success
    >>> logger = get_logger(__name__)
    >>> logger.info("Backing up %s", name)
    >>> log_success(logger, "Configuration restored from backup")

Environment Variables:
    NIBRAS_SHELL_LOG_DIR: Override the log directory (used by pytest).

RULES FOR CONTRIBUTORS:
    1. Always use: logger = get_logger(__name__)
    2. Never call logging.basicConfig()
    3. Never attach handlers to child loggers
    4. Never use f-strings in log calls; use %-formatting
"""

from nibras_shell.logger.config import (
    update_logger_from_config as _update_config,
)
from nibras_shell.logger.formatters import (
    HybridConsoleFormatter,
    PrefixConsoleFormatter,
)
from nibras_shell.logger.handlers import ConfigurationError
from nibras_shell.logger.logger import (
    clear_logger_state,
    flush_all_handlers,
    get_logger,
    log_success,
    set_console_level,
    setup_logging,
)
from nibras_shell.logger.state import _state, get_state

__all__ = [
    "ConfigurationError",
    "HybridConsoleFormatter",
    "PrefixConsoleFormatter",
    "_state",  # For testing only
    "clear_logger_state",
    "flush_all_handlers",
    "get_logger",
    "log_success",
    "set_console_level",
    "setup_logging",
    "update_logger_from_config",
]


def update_logger_from_config() -> None:
    """Apply settings.conf log levels to the running handlers."""
    _update_config(get_state())
