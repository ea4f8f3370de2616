"""Backup containers for live desktop configuration.

Public API:
    - BackupRecorder: Moves managed paths into a new container
    - RestoreSelector: Lists containers and moves entries back
    - BackupManifest: Per-container manifest file
"""

from nibras_shell.core.backup.manifest import BackupManifest
from nibras_shell.core.backup.recorder import BackupRecorder
from nibras_shell.core.backup.selector import RestoreSelector

__all__ = ["BackupManifest", "BackupRecorder", "RestoreSelector"]
