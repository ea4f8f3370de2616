"""Install and uninstall workflows."""

from nibras_shell.core.workflows.install import InstallReport, InstallWorkflow
from nibras_shell.core.workflows.uninstall import (
    PackageRemovalOption,
    UninstallMethod,
    UninstallReport,
    UninstallWorkflow,
)

__all__ = [
    "InstallReport",
    "InstallWorkflow",
    "PackageRemovalOption",
    "UninstallMethod",
    "UninstallReport",
    "UninstallWorkflow",
]
