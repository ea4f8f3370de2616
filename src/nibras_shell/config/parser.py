"""INI parser utilities for nibras-shell configuration.

Helpers for reading settings.conf values that may carry inline comments,
and the comment blocks written above each section.
"""

import configparser
from datetime import UTC, datetime
from typing import Any

from nibras_shell.constants import (
    CONFIG_VERSION,
    ISO_DATETIME_FORMAT,
    KEY_CONFIG_VERSION,
    SECTION_DEFAULT,
    SECTION_DIRECTORY,
    SECTION_INSTALL,
)


def _strip_inline_comment(value: str) -> str:
    """Strip inline comments from configuration values.

    Args:
        value: Configuration value that may contain inline comment

    Returns:
        Value with anything after ``"  #"`` removed
    """
    if "  #" in value:
        return value.split("  #")[0].strip()
    return value


class CommentAwareConfigParser(configparser.ConfigParser):
    """ConfigParser that strips inline comments when reading values."""

    def __init__(self) -> None:
        """Create a parser without interpolation (paths may contain %)."""
        super().__init__(
            inline_comment_prefixes=("#", ";"),
            interpolation=None,
        )

    def get(  # type: ignore[override]
        self,
        section: str,
        option: str,
        **kwargs: Any,  # noqa: ANN401
    ) -> str:
        """Get a configuration value with inline comments stripped."""
        value = super().get(section, option, **kwargs)
        return _strip_inline_comment(value)


class ConfigCommentManager:
    """Comment blocks that document settings.conf for the user."""

    @staticmethod
    def get_file_header() -> str:
        """Return the file header with a last-updated timestamp."""
        timestamp = datetime.now(tz=UTC).strftime(ISO_DATETIME_FORMAT)
        return f"""# NibrasShell Installer Configuration
# Settings used by nibras-shell when installing, backing up and
# removing the NibrasShell Hyprland configuration.
#
# Last updated: {timestamp}
# Configuration version: {CONFIG_VERSION}

"""

    @staticmethod
    def get_section_comments() -> dict[str, str]:
        """Return the comment block written above each section."""
        return {
            SECTION_DEFAULT: """# ========================================
# MAIN CONFIGURATION
# ========================================
# config_version: Version of configuration format (DO NOT EDIT)
# log_level: Detail level for log files (DEBUG, INFO, WARNING, ERROR)
# console_log_level: Console output detail level (DEBUG, INFO, etc.)

""",
            SECTION_DIRECTORY: """
# ========================================
# DIRECTORY PATHS
# ========================================
# Use absolute paths or paths starting with ~ for home directory.
#
# config_root: Where hypr, quickshell, wofi... live and where
#              nibras-backup-<timestamp> directories are created
# repo: Local clone of the NibrasShell repository
# venv: Python environment for wallpaper depth effects (rembg)
# themes: GTK themes directory
# icons: Icon themes directory
# fonts: User fonts directory

""",
            SECTION_INSTALL: """
# ========================================
# INSTALL SETTINGS
# ========================================
# aur_helper: AUR helper used to query/install/remove packages
# repo_url: NibrasShell git repository
# batch_timeout: Seconds allowed for the single batch install (per group)
# package_timeout: Seconds allowed per package on individual retry
# keepalive_interval: Seconds between sudo credential refreshes

""",
        }

    @staticmethod
    def get_key_comments() -> dict[str, dict[str, str]]:
        """Return inline comments keyed by section and option."""
        return {
            SECTION_DEFAULT: {
                KEY_CONFIG_VERSION: "# DO NOT MODIFY - Config format version",
            },
            SECTION_DIRECTORY: {},
            SECTION_INSTALL: {},
        }
