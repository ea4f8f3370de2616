"""Settings manager for the INI file at ~/.config/nibras-shell/settings.conf."""

from pathlib import Path

from nibras_shell.config.parser import (
    CommentAwareConfigParser,
    ConfigCommentManager,
    _strip_inline_comment,
)
from nibras_shell.config.paths import Paths
from nibras_shell.constants import (
    CONFIG_FILE_NAME,
    CONFIG_VERSION,
    DEFAULT_AUR_HELPER,
    DEFAULT_BATCH_TIMEOUT,
    DEFAULT_CONSOLE_LOG_LEVEL,
    DEFAULT_KEEPALIVE_INTERVAL,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PACKAGE_TIMEOUT,
    DEFAULT_REPO_URL,
    DIRECTORY_KEYS,
    KEY_AUR_HELPER,
    KEY_BATCH_TIMEOUT,
    KEY_CONFIG_VERSION,
    KEY_CONSOLE_LOG_LEVEL,
    KEY_KEEPALIVE_INTERVAL,
    KEY_LOG_LEVEL,
    KEY_PACKAGE_TIMEOUT,
    KEY_REPO_URL,
    SECTION_DEFAULT,
    SECTION_DIRECTORY,
    SECTION_INSTALL,
)
from nibras_shell.domain.types import DirectoryConfig, GlobalConfig, InstallConfig
from nibras_shell.logger import get_logger

logger = get_logger(__name__)

# Raw INI values: scalars for [DEFAULT], nested dicts for sections
RawConfigDict = dict[str, str | dict[str, str]]

_INT_INSTALL_KEYS = (
    KEY_BATCH_TIMEOUT,
    KEY_PACKAGE_TIMEOUT,
    KEY_KEEPALIVE_INTERVAL,
)


class SettingsManager:
    """Reads and writes settings.conf, falling back to defaults."""

    def __init__(
        self, config_dir: Path | None = None, home: Path | None = None
    ) -> None:
        """Initialize settings manager.

        Args:
            config_dir: Directory holding settings.conf
                (defaults to Paths.CONFIG_DIR)
            home: Home directory used for default paths
                (defaults to Path.home())

        """
        self.config_dir = config_dir or Paths.CONFIG_DIR
        self.home = home or Path.home()
        self.settings_file = self.config_dir / CONFIG_FILE_NAME

    def get_default_settings(self) -> RawConfigDict:
        """Return default configuration values as raw strings."""
        home = self.home
        return {
            KEY_CONFIG_VERSION: CONFIG_VERSION,
            KEY_LOG_LEVEL: DEFAULT_LOG_LEVEL,
            KEY_CONSOLE_LOG_LEVEL: DEFAULT_CONSOLE_LOG_LEVEL,
            SECTION_DIRECTORY: {
                "config_root": str(home / ".config"),
                "repo": str(home / "NibrasShell"),
                "venv": str(home / ".nibras-venv"),
                "themes": str(home / ".themes"),
                "icons": str(home / ".local" / "share" / "icons"),
                "fonts": str(home / ".fonts"),
            },
            SECTION_INSTALL: {
                KEY_AUR_HELPER: DEFAULT_AUR_HELPER,
                KEY_REPO_URL: DEFAULT_REPO_URL,
                KEY_BATCH_TIMEOUT: str(DEFAULT_BATCH_TIMEOUT),
                KEY_PACKAGE_TIMEOUT: str(DEFAULT_PACKAGE_TIMEOUT),
                KEY_KEEPALIVE_INTERVAL: str(DEFAULT_KEEPALIVE_INTERVAL),
            },
        }

    def load_settings(self) -> GlobalConfig:
        """Load settings, writing a default file on first run.

        Returns:
            Parsed configuration with user values over defaults

        """
        defaults = self.get_default_settings()
        if not self.settings_file.exists():
            logger.debug("Creating default settings at %s", self.settings_file)
            self.save_settings(self._convert(defaults))
            return self._convert(defaults)

        parser = CommentAwareConfigParser()
        parser.read(self.settings_file, encoding="utf-8")

        merged: RawConfigDict = {}
        for key, value in defaults.items():
            if isinstance(value, dict):
                section = dict(value)
                if parser.has_section(key):
                    for option in section:
                        if parser.has_option(key, option):
                            section[option] = parser.get(key, option)
                merged[key] = section
            elif key in parser.defaults():
                merged[key] = _strip_inline_comment(parser.defaults()[key])
            else:
                merged[key] = value

        return self._convert(merged)

    def save_settings(self, config: GlobalConfig) -> None:
        """Write settings.conf with user-facing comments.

        Args:
            config: Configuration to save

        """
        self.config_dir.mkdir(parents=True, exist_ok=True)
        comment_manager = ConfigCommentManager()
        section_comments = comment_manager.get_section_comments()
        key_comments = comment_manager.get_key_comments()

        sections: dict[str, dict[str, str]] = {
            SECTION_DEFAULT: {
                KEY_CONFIG_VERSION: config["config_version"],
                KEY_LOG_LEVEL: config["log_level"],
                KEY_CONSOLE_LOG_LEVEL: config["console_log_level"],
            },
            SECTION_DIRECTORY: {
                key: str(path) for key, path in config["directory"].items()
            },
            SECTION_INSTALL: {
                key: str(value) for key, value in config["install"].items()
            },
        }

        with self.settings_file.open("w", encoding="utf-8") as f:
            f.write(comment_manager.get_file_header())
            for section, values in sections.items():
                f.write(section_comments[section])
                f.write(f"[{section}]\n")
                for key, value in values.items():
                    inline_comment = key_comments[section].get(key, "")
                    if inline_comment:
                        f.write(f"{key} = {value}  {inline_comment}\n")
                    else:
                        f.write(f"{key} = {value}\n")

    def _convert(self, raw: RawConfigDict) -> GlobalConfig:
        """Convert raw INI values into a typed GlobalConfig.

        Raises:
            ValueError: If an integer install option is not a number

        """
        directory_raw = raw[SECTION_DIRECTORY]
        install_raw = raw[SECTION_INSTALL]
        if not isinstance(directory_raw, dict) or not isinstance(
            install_raw, dict
        ):
            msg = "Malformed settings: sections must be tables"
            raise ValueError(msg)

        directory = {
            key: Paths.expand_path(directory_raw[key]) for key in DIRECTORY_KEYS
        }

        install: dict[str, str | int] = {}
        for key, value in install_raw.items():
            if key in _INT_INSTALL_KEYS:
                try:
                    install[key] = int(value)
                except ValueError as e:
                    msg = f"Setting '{key}' must be an integer, got '{value}'"
                    raise ValueError(msg) from e
            else:
                install[key] = value

        return GlobalConfig(
            config_version=str(raw[KEY_CONFIG_VERSION]),
            log_level=str(raw[KEY_LOG_LEVEL]).upper(),
            console_log_level=str(raw[KEY_CONSOLE_LOG_LEVEL]).upper(),
            directory=DirectoryConfig(**directory),  # type: ignore[typeddict-item]
            install=InstallConfig(**install),  # type: ignore[typeddict-item]
        )
