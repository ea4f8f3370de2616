"""Centralized constants module for nibras-shell.

This module serves as the single source of truth for all shared constants
across the nibras-shell codebase. Constants are organized by logical
categories and use typing.Final annotations to ensure immutability.

Usage:
    from nibras_shell.constants import BACKUP_PREFIX
"""

from typing import Final

# =============================================================================
# Configuration Constants
# =============================================================================

# Settings file format version
CONFIG_VERSION: Final[str] = "1.0.0"

CONFIG_FILE_NAME: Final[str] = "settings.conf"

# Default config directory name under the user's home directory
CONFIG_DIR_NAME: Final[str] = ".config"

# Application-specific subdirectory under the config directory
DEFAULT_CONFIG_SUBDIR: Final[str] = "nibras-shell"

DEFAULT_LOG_LEVEL: Final[str] = "INFO"
DEFAULT_CONSOLE_LOG_LEVEL: Final[str] = "INFO"

# Install defaults
DEFAULT_AUR_HELPER: Final[str] = "yay"
DEFAULT_REPO_URL: Final[str] = "https://github.com/AhmedSaadi0/NibrasShell.git"
DEFAULT_BATCH_TIMEOUT: Final[int] = 1800
DEFAULT_PACKAGE_TIMEOUT: Final[int] = 600
DEFAULT_KEEPALIVE_INTERVAL: Final[int] = 60

ISO_DATETIME_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

# Config section and key names
SECTION_DEFAULT: Final[str] = "DEFAULT"
SECTION_DIRECTORY: Final[str] = "directory"
SECTION_INSTALL: Final[str] = "install"

KEY_CONFIG_VERSION: Final[str] = "config_version"
KEY_LOG_LEVEL: Final[str] = "log_level"
KEY_CONSOLE_LOG_LEVEL: Final[str] = "console_log_level"

KEY_AUR_HELPER: Final[str] = "aur_helper"
KEY_REPO_URL: Final[str] = "repo_url"
KEY_BATCH_TIMEOUT: Final[str] = "batch_timeout"
KEY_PACKAGE_TIMEOUT: Final[str] = "package_timeout"
KEY_KEEPALIVE_INTERVAL: Final[str] = "keepalive_interval"

# Known directory keys expected in the directory section
DIRECTORY_KEYS: Final[tuple[str, ...]] = (
    "config_root",
    "repo",
    "venv",
    "themes",
    "icons",
    "fonts",
)

# =============================================================================
# Backup Constants
# =============================================================================

BACKUP_PREFIX: Final[str] = "nibras-backup-"

# Zero-padded so lexicographic order equals chronological order
BACKUP_TIMESTAMP_FORMAT: Final[str] = "%Y%m%d-%H%M%S"

BACKUP_NAME_PATTERN: Final[str] = (
    r"^nibras-backup-(?P<stamp>\d{8}-\d{6})(?:-(?P<seq>\d+))?$"
)

BACKUP_MANIFEST_FILENAME: Final[str] = "nibras-manifest.json"
BACKUP_MANIFEST_TMP_PREFIX: Final[str] = ".nibras-manifest_"
BACKUP_MANIFEST_TMP_SUFFIX: Final[str] = ".tmp"
BACKUP_MANIFEST_VERSION: Final[str] = "1.0.0"

# Suffix applied to moved directory entries inside a container
BACKUP_ENTRY_SUFFIX: Final[str] = "-old"

# =============================================================================
# Profile Constants
# =============================================================================

PROFILE_FILE_NAME: Final[str] = "nibrasshell.json"
PROFILE_VERSION: Final[str] = "1.0.0"

LOCK_FILE_NAME: Final[str] = "nibras-shell.lock"

# =============================================================================
# Logging Constants
# =============================================================================

LOG_FILE_NAME: Final[str] = "nibras-shell.log"

LOG_ROTATION_THRESHOLD_BYTES: Final[int] = 10 * 1024 * 1024  # 10 MB
LOG_BACKUP_COUNT: Final[int] = 5

# Custom level between INFO and WARNING for completed steps
SUCCESS_LEVEL: Final[int] = 25
SUCCESS_LEVEL_NAME: Final[str] = "SUCCESS"

LOG_CONSOLE_FORMAT: Final[str] = "[%(levelname)s] %(message)s"
LOG_CONSOLE_DEBUG_FORMAT: Final[str] = (
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
LOG_CONSOLE_DATE_FORMAT: Final[str] = "%H:%M:%S"
LOG_FILE_FORMAT: Final[str] = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "%(funcName)s:%(lineno)d - %(message)s"
)
LOG_FILE_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

# Short console labels, matching the installer's historical prefixes
LOG_LABELS: Final[dict[str, str]] = {
    "WARNING": "WARN",
}

LOG_COLORS: Final[dict[str, str]] = {
    "DEBUG": "\033[0;34m",  # Blue
    "INFO": "\033[0;32m",  # Green
    "SUCCESS": "\033[0;36m",  # Cyan
    "WARNING": "\033[1;33m",  # Yellow
    "ERROR": "\033[0;31m",  # Red
    "CRITICAL": "\033[0;35m",  # Magenta
    "RESET": "\033[0m",
}
