"""Typed dictionaries for settings and the bundled install profile."""

from pathlib import Path
from typing import Literal, TypedDict


class DirectoryConfig(TypedDict):
    """Directory paths from the [directory] section of settings.conf."""

    config_root: Path
    repo: Path
    venv: Path
    themes: Path
    icons: Path
    fonts: Path


class InstallConfig(TypedDict):
    """Install tuning from the [install] section of settings.conf."""

    aur_helper: str
    repo_url: str
    batch_timeout: int
    package_timeout: int
    keepalive_interval: int


class GlobalConfig(TypedDict):
    """Parsed settings.conf."""

    config_version: str
    log_level: str
    console_log_level: str
    directory: DirectoryConfig
    install: InstallConfig


class PackageGroup(TypedDict):
    """Named group of packages installed in one pass."""

    description: str
    confirm: bool
    packages: list[str]


class OverlaySpec(TypedDict):
    """One copy step from the installed hypr tree into the home directory.

    ``source`` is relative to ``<config_root>/hypr``; ``target`` is relative
    to the home directory.
    """

    source: str
    target: str
    mode: Literal["tree", "contents", "file"]


class RemovalLists(TypedDict):
    """Package lists offered by the uninstaller."""

    specific: list[str]
    all: list[str]


class Profile(TypedDict):
    """Bundled install profile (profile/nibrasshell.json)."""

    profile_version: str
    package_groups: dict[str, PackageGroup]
    removal: RemovalLists
    python_packages: list[str]
    icon_archives: list[str]
    icon_theme_prefixes: list[str]
    gtk_themes_source: str
    overlays: list[OverlaySpec]
    executable_dirs: list[str]
    removal_paths: list[str]
