"""Fixtures for CLI tests."""

from pathlib import Path

import pytest

from nibras_shell.config import ConfigManager
from nibras_shell.core import system


@pytest.fixture(autouse=True)
def regular_user(monkeypatch: pytest.MonkeyPatch) -> None:
    """Run CLI tests as a regular user with settings-driven log levels off."""
    monkeypatch.setattr(system.os, "geteuid", lambda: 1000)
    monkeypatch.setattr(
        "nibras_shell.cli.runner.update_logger_from_config", lambda: None
    )


@pytest.fixture
def config_manager(tmp_path: Path, home: Path) -> ConfigManager:
    """Config manager with settings under tmp and paths under the fake home."""
    return ConfigManager(config_dir=tmp_path / "settings", home=home)


@pytest.fixture
def live_root(config_manager: ConfigManager) -> Path:
    """The config root as the settings resolve it."""
    root = config_manager.load_global_config()["directory"]["config_root"]
    root.mkdir(parents=True, exist_ok=True)
    return root
