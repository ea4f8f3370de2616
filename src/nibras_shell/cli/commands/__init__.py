"""Command handlers for the nibras-shell CLI."""

from .backup import BackupHandler
from .base import BaseCommandHandler
from .install import InstallHandler
from .uninstall import UninstallHandler

__all__ = [
    "BackupHandler",
    "BaseCommandHandler",
    "InstallHandler",
    "UninstallHandler",
]
