"""Top-level package for nibras-shell.

Installer, backup recorder and uninstaller for the NibrasShell
Hyprland configuration.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("nibras-shell")
except PackageNotFoundError:
    # Fallback for development environments where package isn't installed
    __version__ = "dev"
