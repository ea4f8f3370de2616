"""Path constants and utilities for nibras-shell configuration.

Centralizes the tool's own directories (settings, logs, lock file) and
the bundled profile location. Desktop configuration paths (hypr, themes,
icons...) come from settings.conf instead, see ``SettingsManager``.
"""

from pathlib import Path

from nibras_shell.constants import (
    CONFIG_DIR_NAME,
    CONFIG_FILE_NAME,
    DEFAULT_CONFIG_SUBDIR,
    LOCK_FILE_NAME,
    PROFILE_FILE_NAME,
)


class Paths:
    """Application paths and directory structure."""

    HOME_DIR = Path.home()
    CONFIG_BASE_DIR = HOME_DIR / CONFIG_DIR_NAME
    CONFIG_DIR = CONFIG_BASE_DIR / DEFAULT_CONFIG_SUBDIR

    # Bundled with the package
    PACKAGE_DIR = Path(__file__).parent.parent
    PROFILE_DIR = PACKAGE_DIR / "profile"
    PROFILE_FILE = PROFILE_DIR / PROFILE_FILE_NAME

    LOGS_DIR = CONFIG_DIR / "logs"
    GLOBAL_CONFIG_FILE = CONFIG_DIR / CONFIG_FILE_NAME
    LOCK_FILE = CONFIG_DIR / LOCK_FILE_NAME

    @classmethod
    def expand_path(cls, path_str: str | Path) -> Path:
        """Expand ``~`` and resolve a configured path.

        Example:
            >>> Paths.expand_path("~/NibrasShell")
            Path('/home/user/NibrasShell')

        """
        return Path(path_str).expanduser().resolve(strict=False)

    @classmethod
    def ensure_directories(cls, config_dir: Path | None = None) -> None:
        """Create the settings and logs directories if missing."""
        base = config_dir or cls.CONFIG_DIR
        for directory in (base, base / "logs"):
            directory.mkdir(parents=True, exist_ok=True)
