"""Configuration facade for nibras-shell.

Coordinates the specialized managers:
- settings.py: SettingsManager for settings.conf (INI)
- profile.py: ProfileLoader for the bundled install profile (JSON)
- paths.py: Path constants and utilities
"""

from pathlib import Path

from nibras_shell.config.paths import Paths
from nibras_shell.config.profile import ProfileLoader
from nibras_shell.config.settings import SettingsManager
from nibras_shell.domain.types import GlobalConfig, Profile
from nibras_shell.logger import get_logger

logger = get_logger(__name__)


class ConfigManager:
    """Facade that coordinates all configuration managers."""

    def __init__(
        self,
        config_dir: Path | None = None,
        profile_file: Path | None = None,
        home: Path | None = None,
    ) -> None:
        """Initialize configuration manager.

        Args:
            config_dir: Optional custom settings directory.
                Defaults to Paths.CONFIG_DIR
            profile_file: Optional custom profile.
                Defaults to the bundled profile
            home: Home directory used for default paths

        """
        self._config_dir = config_dir or Paths.CONFIG_DIR
        self.settings_manager = SettingsManager(self._config_dir, home=home)
        self.profile_loader = ProfileLoader(profile_file)
        Paths.ensure_directories(self._config_dir)

    @property
    def config_dir(self) -> Path:
        """Get the settings directory path."""
        return self._config_dir

    @property
    def settings_file(self) -> Path:
        """Get the settings file path."""
        return self.settings_manager.settings_file

    @property
    def lock_file(self) -> Path:
        """Get the process lock file path."""
        return self._config_dir / Paths.LOCK_FILE.name

    def load_global_config(self) -> GlobalConfig:
        """Load settings.conf."""
        return self.settings_manager.load_settings()

    def load_profile(self) -> Profile:
        """Load the validated install profile."""
        return self.profile_loader.load()

    def ensure_directories_from_config(self, config: GlobalConfig) -> None:
        """Create configured target directories that installs write into.

        The repository and venv directories are left alone; git and venv
        create them.

        Raises:
            ValueError: If a configured path is a file

        """
        for key in ("config_root", "themes", "icons", "fonts"):
            directory = config["directory"][key]  # type: ignore[literal-required]
            if directory.exists() and not directory.is_dir():
                msg = (
                    f"Configured {key} path '{directory}' is a file, "
                    "not a directory"
                )
                raise ValueError(msg)
            directory.mkdir(parents=True, exist_ok=True)
