"""Backup, restore and step result records.

Pure data types with no filesystem access. ``StepResult`` replaces the
shell scripts' ``|| true``: callers can tell "skipped because the source
was absent" apart from "failed".
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path


class StepStatus(Enum):
    """Outcome of a single filesystem or external-tool step."""

    DONE = "done"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class StepResult:
    """Result of one step, e.g. moving ``hypr`` into a container."""

    name: str
    status: StepStatus
    detail: str = ""

    @property
    def ok(self) -> bool:
        """True unless the step failed."""
        return self.status is not StepStatus.FAILED


@dataclass(frozen=True)
class BackupEntry:
    """A preserved managed path inside a container.

    Attributes:
        name: ManagedPath symbolic name
        relative_path: Location inside the container, e.g. "hypr-old"

    """

    name: str
    relative_path: str


@dataclass(frozen=True)
class BackupContainer:
    """A timestamped backup directory and the entries it holds."""

    name: str
    path: Path
    created: datetime
    entries: tuple[BackupEntry, ...] = ()
    sequence: int = 0

    @property
    def display_date(self) -> str:
        """Return the timestamp part of the name, e.g. ``20240102 000000``."""
        stamp = self.created.strftime("%Y%m%d %H%M%S")
        if self.sequence:
            return f"{stamp} #{self.sequence}"
        return stamp

    def entry_names(self) -> list[str]:
        """Return the managed path names present in this container."""
        return [entry.name for entry in self.entries]


class RestoreStatus(Enum):
    """Overall result of a Restore Selector run."""

    RESTORED = "restored"
    SKIPPED = "skipped"


@dataclass
class RestoreOutcome:
    """What a restore did, per managed path."""

    status: RestoreStatus
    container: BackupContainer | None = None
    results: list[StepResult] = field(default_factory=list)
    deleted: bool = False

    @property
    def restored(self) -> list[str]:
        """Names of managed paths moved back into place."""
        return [r.name for r in self.results if r.status is StepStatus.DONE]


@dataclass
class PackageReport:
    """Aggregated per-package outcome of an install or removal pass."""

    processed: list[str] = field(default_factory=list)
    unchanged: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """True when no package failed."""
        return not self.failed

    def merge(self, other: "PackageReport") -> None:
        """Fold another pass into this report."""
        self.processed.extend(other.processed)
        self.unchanged.extend(other.unchanged)
        self.failed.extend(other.failed)
