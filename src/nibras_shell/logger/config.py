"""Configuration loading and updating for the logging system.

The logger is created before settings.conf is read, so it starts from
hardcoded defaults and ``update_logger_from_config`` re-applies levels
once the config package is importable.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from nibras_shell.constants import (
    CONFIG_DIR_NAME,
    DEFAULT_CONFIG_SUBDIR,
    DEFAULT_CONSOLE_LOG_LEVEL,
    DEFAULT_LOG_LEVEL,
    LOG_FILE_NAME,
)
from nibras_shell.logger.handlers import _resolve_level

if TYPE_CHECKING:
    from nibras_shell.logger.state import _LoggerState

LOG_DIR_ENV_VAR = "NIBRAS_SHELL_LOG_DIR"


def load_log_settings() -> tuple[str, str, Path]:
    """Load bootstrap console level, file level, and file path.

    Environment Variable Override:
        NIBRAS_SHELL_LOG_DIR: Overrides the log directory. The pytest
        configuration in pyproject.toml points it at a temp directory so
        test runs never write to ~/.config/nibras-shell/logs.

    Returns:
        Tuple of (console_level, file_level, log_path)

    """
    env_log_dir = os.getenv(LOG_DIR_ENV_VAR)
    if env_log_dir:
        log_path = Path(env_log_dir).expanduser() / LOG_FILE_NAME
    else:
        log_path = (
            Path.home()
            / CONFIG_DIR_NAME
            / DEFAULT_CONFIG_SUBDIR
            / "logs"
            / LOG_FILE_NAME
        )

    return DEFAULT_CONSOLE_LOG_LEVEL, DEFAULT_LOG_LEVEL, log_path


def update_logger_from_config(state: "_LoggerState") -> None:
    """Apply settings.conf log levels to the running handlers.

    Only handler levels change; handlers are never added or removed.

    Args:
        state: Logger state object (from logger.state module)

    """
    try:
        # Import here to avoid circular dependency
        from nibras_shell.config import ConfigManager  # noqa: PLC0415

        config = ConfigManager().load_global_config()
    except (ImportError, KeyError, OSError, ValueError):
        # Settings unavailable - keep bootstrap defaults
        return

    console_level = _resolve_level(config["console_log_level"], logging.INFO)
    file_level = _resolve_level(config["log_level"], logging.INFO)

    if state.queue_listener is not None:
        for handler in state.queue_listener.handlers:
            if isinstance(handler, RotatingFileHandler):
                handler.setLevel(file_level)
            elif isinstance(handler, logging.StreamHandler):
                handler.setLevel(console_level)

    state.config_applied = True
