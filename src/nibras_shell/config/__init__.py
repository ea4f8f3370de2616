"""Configuration management - settings, install profile, and paths.

This package provides:
- ConfigManager: Unified facade for all configuration operations
- SettingsManager: settings.conf management (from settings.py)
- ProfileLoader: Bundled install profile access (from profile.py)
- Paths: Path constants and utilities (from paths.py)
"""

from nibras_shell.config.config import ConfigManager
from nibras_shell.config.parser import (
    CommentAwareConfigParser,
    ConfigCommentManager,
)
from nibras_shell.config.paths import Paths
from nibras_shell.config.profile import ProfileLoader
from nibras_shell.config.settings import SettingsManager
from nibras_shell.domain.types import GlobalConfig, Profile

__all__ = [
    "CommentAwareConfigParser",
    "ConfigCommentManager",
    "ConfigManager",
    "GlobalConfig",
    "Paths",
    "Profile",
    "ProfileLoader",
    "SettingsManager",
]
