"""Tests for ConfigOverlay."""

import stat
from pathlib import Path

import pytest

from nibras_shell.core.overlay import ConfigOverlay
from nibras_shell.domain.backup import StepStatus
from nibras_shell.exceptions import MissingDirectoryError


@pytest.fixture
def repo(home: Path) -> Path:
    """A minimal NibrasShell checkout."""
    root = home / "NibrasShell"
    files = {
        "hyprland.conf": "source = x",
        "scripts/wallpaper.sh": "#!/bin/sh",
        "config/quickshell/shell.qml": "ShellRoot {}",
        "config/quickshell/scripts/bar.sh": "#!/bin/sh",
        "config/wofi/style.css": "window {}",
        "config/config.fish": "set -g fish_greeting",
        "config/plasma-colors/Nibras.colors": "[General]",
        "config/qt5ct.conf": "[Appearance]",
        "config/.fonts/JF-Flat.ttf": "font",
        "config/gtk-themes/Nibras-Dark/index.theme": "[Desktop Entry]",
        ".git/HEAD": "ref: refs/heads/main",
    }
    for relative, text in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text)
    return root


@pytest.fixture
def overlay(home, config_root, profile) -> ConfigOverlay:
    return ConfigOverlay(home, config_root, profile)


class TestInstallHypr:
    """Test copying the repository into ~/.config/hypr."""

    def test_missing_repository(self, overlay, home):
        with pytest.raises(MissingDirectoryError):
            overlay.install_hypr(home / "NibrasShell")

    def test_copies_without_top_level_dotfiles(self, overlay, repo, config_root):
        overlay.install_hypr(repo)

        hypr = config_root / "hypr"
        assert (hypr / "hyprland.conf").read_text() == "source = x"
        assert (hypr / "config" / ".fonts" / "JF-Flat.ttf").exists()
        assert not (hypr / ".git").exists()


class TestApplyOverlays:
    """Test the three overlay modes."""

    def test_modes(self, overlay, repo, home):
        overlay.install_hypr(repo)

        results = {r.name: r.status for r in overlay.apply_overlays()}

        assert (home / ".config" / "quickshell" / "shell.qml").exists()
        assert (home / ".config" / "fish" / "config.fish").read_text() == (
            "set -g fish_greeting"
        )
        assert (home / ".local" / "share" / "color-schemes" / "Nibras.colors").exists()
        assert (home / ".config" / "qt5ct" / "qt5ct.conf").exists()
        assert (home / ".fonts" / "JF-Flat.ttf").exists()
        assert results["config/quickshell"] is StepStatus.DONE
        assert results["config/easyeffects"] is StepStatus.SKIPPED
        assert results["config/qt6ct.conf"] is StepStatus.SKIPPED

    def test_make_executable(self, overlay, repo, home):
        overlay.install_hypr(repo)
        overlay.apply_overlays()

        results = overlay.make_executable()

        script = home / ".config" / "hypr" / "scripts" / "wallpaper.sh"
        assert script.stat().st_mode & stat.S_IXUSR
        bar = home / ".config" / "quickshell" / "scripts" / "bar.sh"
        assert bar.stat().st_mode & stat.S_IXUSR
        assert all(r.status is StepStatus.DONE for r in results)

    def test_make_executable_missing_dirs(self, overlay):
        results = overlay.make_executable()

        assert [r.status for r in results] == [StepStatus.SKIPPED, StepStatus.SKIPPED]


class TestGtkThemes:
    """Test GTK theme installation."""

    def test_installs_themes(self, overlay, repo, home):
        overlay.install_hypr(repo)

        result = overlay.install_gtk_themes(home / ".themes")

        assert result.status is StepStatus.DONE
        assert (home / ".themes" / "Nibras-Dark" / "index.theme").exists()

    def test_missing_source(self, overlay, home):
        result = overlay.install_gtk_themes(home / ".themes")

        assert result.status is StepStatus.SKIPPED
