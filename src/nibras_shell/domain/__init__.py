"""Domain records shared by core services and the CLI."""

from nibras_shell.domain.backup import (
    BackupContainer,
    BackupEntry,
    PackageReport,
    RestoreOutcome,
    RestoreStatus,
    StepResult,
    StepStatus,
)
from nibras_shell.domain.managed import (
    MANAGED_PATHS,
    ManagedPath,
    PathKind,
    PreserveMode,
    get_managed_path,
)

__all__ = [
    "MANAGED_PATHS",
    "BackupContainer",
    "BackupEntry",
    "ManagedPath",
    "PackageReport",
    "PathKind",
    "PreserveMode",
    "RestoreOutcome",
    "RestoreStatus",
    "StepResult",
    "StepStatus",
    "get_managed_path",
]
