"""Fixtures for workflow tests."""

from pathlib import Path

import pytest

from nibras_shell.core import system
from nibras_shell.core.workflows import install


@pytest.fixture(autouse=True)
def regular_user(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pretend the tests run as a regular user with yay installed."""
    monkeypatch.setattr(system.os, "geteuid", lambda: 1000)
    monkeypatch.setattr(install, "require_tool", lambda name: f"/usr/bin/{name}")


@pytest.fixture
def repo(global_config) -> Path:
    """A minimal NibrasShell checkout at the configured location."""
    root = global_config["directory"]["repo"]
    files = {
        "hyprland.conf": "new hyprland",
        "scripts/wallpaper.sh": "#!/bin/sh",
        "config/quickshell/shell.qml": "new shell",
        "config/config.fish": "new fish",
        "config/icons/Magma.tar.gz": "archive",
        "config/gtk-themes/Nibras-Dark/index.theme": "[Desktop Entry]",
        ".git/HEAD": "ref: refs/heads/main",
    }
    for relative, text in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text)
    return root


@pytest.fixture
def live_config(config_root: Path) -> Path:
    """An existing user configuration that an install must preserve."""
    (config_root / "hypr").mkdir()
    (config_root / "hypr" / "hyprland.conf").write_text("old hyprland")
    (config_root / "fish").mkdir()
    (config_root / "fish" / "config.fish").write_text("old fish")
    return config_root
