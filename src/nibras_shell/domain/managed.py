"""Managed configuration paths.

The fixed table of configuration units the Backup Recorder moves aside and
the Restore Selector puts back. Both sides read the same records, so the
container layout is defined in exactly one place.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from nibras_shell.constants import BACKUP_ENTRY_SUFFIX


class PathKind(Enum):
    """Whether a managed path is a directory tree or a single file."""

    DIRECTORY = "directory"
    FILE = "file"


class PreserveMode(Enum):
    """How the recorder preserves live content."""

    MOVE = "move"
    COPY = "copy"


@dataclass(frozen=True)
class ManagedPath:
    """A logical configuration unit.

    Attributes:
        name: Symbolic name, e.g. "hypr"
        live_path: Location relative to the config root
        container_name: Name of the preserved copy inside a container
        kind: Directory or single file
        preserve: MOVE leaves the live path absent; COPY leaves it in place

    """

    name: str
    live_path: str
    container_name: str
    kind: PathKind = PathKind.DIRECTORY
    preserve: PreserveMode = PreserveMode.MOVE

    def resolve(self, config_root: Path) -> Path:
        """Return the absolute live location under ``config_root``."""
        return config_root / self.live_path

    def entry_path(self, container_path: Path) -> Path:
        """Return where this path's preserved contents live in a container."""
        return container_path / self.container_name


def _directory(name: str) -> ManagedPath:
    return ManagedPath(
        name=name,
        live_path=name,
        container_name=f"{name}{BACKUP_ENTRY_SUFFIX}",
    )


MANAGED_PATHS: tuple[ManagedPath, ...] = (
    _directory("hypr"),
    _directory("quickshell"),
    _directory("wofi"),
    _directory("easyeffects"),
    ManagedPath(
        name="fish-config",
        live_path="fish/config.fish",
        container_name="config.fish.backup",
        kind=PathKind.FILE,
        preserve=PreserveMode.COPY,
    ),
)


def get_managed_path(name: str) -> ManagedPath:
    """Look up a managed path by symbolic name.

    Raises:
        KeyError: If no managed path has that name

    """
    for managed in MANAGED_PATHS:
        if managed.name == name:
            return managed
    raise KeyError(name)
