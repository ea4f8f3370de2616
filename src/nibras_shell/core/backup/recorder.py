"""Backup Recorder: moves live configuration aside before an overlay.

One call to ``create_backup`` makes one container and walks the managed
paths once, in table order. Each move is its own unit of atomicity: if the
run is interrupted, the container simply holds fewer entries.
"""

import shutil
from collections.abc import Callable, Sequence
from datetime import datetime
from pathlib import Path

from nibras_shell.core.backup.helpers import (
    allocate_container,
    move_path,
    path_exists,
)
from nibras_shell.core.backup.manifest import BackupManifest
from nibras_shell.domain.backup import (
    BackupContainer,
    BackupEntry,
    StepResult,
    StepStatus,
)
from nibras_shell.domain.managed import MANAGED_PATHS, ManagedPath, PreserveMode
from nibras_shell.logger import get_logger
from nibras_shell.utils.datetime_utils import get_current_datetime_local

logger = get_logger(__name__)


class BackupRecorder:
    """Creates timestamped backup containers under the config root."""

    def __init__(
        self,
        config_root: Path,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the recorder.

        Args:
            config_root: Directory holding the managed paths and containers
            clock: Optional time source, defaults to local now

        """
        self.config_root = config_root
        self.clock = clock or get_current_datetime_local
        self.last_results: list[StepResult] = []

    def create_backup(
        self, managed_paths: Sequence[ManagedPath] = MANAGED_PATHS
    ) -> BackupContainer:
        """Preserve every present managed path in a new container.

        Absent paths are skipped without error. Paths whose move fails are
        reported as FAILED in ``last_results`` and get no entry.

        Args:
            managed_paths: Paths to preserve, in order

        Returns:
            The created container with its entries

        """
        moment = self.clock()
        container_path, sequence = allocate_container(self.config_root, moment)
        logger.info("Creating backup in %s", container_path)

        entries: list[BackupEntry] = []
        results: list[StepResult] = []
        for managed in managed_paths:
            result = self._preserve(managed, container_path)
            results.append(result)
            if result.status is StepStatus.DONE:
                entries.append(
                    BackupEntry(managed.name, managed.container_name)
                )

        container = BackupContainer(
            name=container_path.name,
            path=container_path,
            created=moment.replace(tzinfo=None, microsecond=0),
            entries=tuple(entries),
            sequence=sequence,
        )

        try:
            BackupManifest(container_path).save(container, moment.isoformat())
        except OSError as e:
            logger.warning("Could not write manifest for %s: %s", container.name, e)

        self.last_results = results
        if entries:
            logger.info(
                "Backed up %s to %s",
                ", ".join(container.entry_names()),
                container.name,
            )
        else:
            logger.info("Nothing to back up; %s is empty", container.name)
        return container

    def _preserve(self, managed: ManagedPath, container_path: Path) -> StepResult:
        live = managed.resolve(self.config_root)
        # A copy reads through symlinks, so a dangling link counts as absent
        if managed.preserve is PreserveMode.COPY:
            present = live.exists()
        else:
            present = path_exists(live)
        if not present:
            logger.debug("Skipping %s: %s does not exist", managed.name, live)
            return StepResult(managed.name, StepStatus.SKIPPED, "absent")

        target = managed.entry_path(container_path)
        try:
            if managed.preserve is PreserveMode.COPY:
                shutil.copy2(live, target)
            else:
                move_path(live, target)
        except OSError as e:
            logger.error("Failed to back up %s: %s", live, e)
            return StepResult(managed.name, StepStatus.FAILED, str(e))

        logger.debug("Preserved %s as %s", live, target)
        return StepResult(managed.name, StepStatus.DONE, str(target))
