"""Restore Selector: discovers backup containers and swaps them back.

Discovery reads the directory names and contents only, so containers made
by older installers (no manifest) are offered too. Restoring is a
destructive overwrite of whatever lives at each managed path.
"""

import re
import shutil
from collections.abc import Sequence
from pathlib import Path

from nibras_shell.core.backup.helpers import (
    move_path,
    parse_container_name,
    path_exists,
    remove_path,
)
from nibras_shell.core.prompts import Prompter
from nibras_shell.domain.backup import (
    BackupContainer,
    BackupEntry,
    RestoreOutcome,
    RestoreStatus,
    StepResult,
    StepStatus,
)
from nibras_shell.domain.managed import MANAGED_PATHS, ManagedPath
from nibras_shell.exceptions import InvalidSelectionError, NoBackupsFoundError
from nibras_shell.logger import get_logger, log_success

logger = get_logger(__name__)

# ASCII digits without sign, separators or leading zeros
_MENU_NUMBER = re.compile(r"0|[1-9][0-9]*")


class RestoreSelector:
    """Lists, restores and deletes backup containers."""

    def __init__(
        self,
        config_root: Path,
        managed_paths: Sequence[ManagedPath] = MANAGED_PATHS,
    ) -> None:
        """Initialize the selector.

        Args:
            config_root: Directory holding the managed paths and containers
            managed_paths: Paths a container may hold entries for

        """
        self.config_root = config_root
        self.managed_paths = tuple(managed_paths)

    def list_backups(self) -> list[BackupContainer]:
        """Discover containers, most recent first.

        Returns:
            Containers sorted by (timestamp, disambiguator) descending

        """
        if not self.config_root.is_dir():
            return []

        containers: list[BackupContainer] = []
        for child in self.config_root.iterdir():
            if child.is_symlink() or not child.is_dir():
                continue
            parsed = parse_container_name(child.name)
            if parsed is None:
                continue
            created, sequence = parsed
            containers.append(
                BackupContainer(
                    name=child.name,
                    path=child,
                    created=created,
                    entries=self._discover_entries(child),
                    sequence=sequence,
                )
            )

        containers.sort(key=lambda c: (c.created, c.sequence), reverse=True)
        logger.debug("Found %d backup container(s)", len(containers))
        return containers

    def _discover_entries(self, container_path: Path) -> tuple[BackupEntry, ...]:
        return tuple(
            BackupEntry(managed.name, managed.container_name)
            for managed in self.managed_paths
            if path_exists(managed.entry_path(container_path))
        )

    def require_backups(self) -> list[BackupContainer]:
        """Like ``list_backups`` but raise when there are none.

        Raises:
            NoBackupsFoundError: If no container exists

        """
        backups = self.list_backups()
        if not backups:
            raise NoBackupsFoundError(
                "nothing to restore", target=str(self.config_root)
            )
        return backups

    @staticmethod
    def select(
        backups: Sequence[BackupContainer], choice: int | str
    ) -> BackupContainer | None:
        """Resolve a 1-based menu choice.

        Args:
            backups: Containers in the order they were offered
            choice: 1-based index; 0 means skip

        Returns:
            The chosen container, or None to skip restoring

        Raises:
            InvalidSelectionError: If the choice is not an integer in
                ``[0, len(backups)]``

        """
        if isinstance(choice, str):
            text = choice.strip()
            if _MENU_NUMBER.fullmatch(text) is None:
                raise InvalidSelectionError(f"'{text}' is not a menu number")
            index = int(text)
        else:
            index = choice

        if index < 0 or index > len(backups):
            msg = f"{index} is outside 0-{len(backups)}"
            raise InvalidSelectionError(msg)
        if index == 0:
            return None
        return backups[index - 1]

    def restore(
        self,
        container: BackupContainer,
        managed_paths: Sequence[ManagedPath] | None = None,
    ) -> RestoreOutcome:
        """Move a container's entries back to their live locations.

        Whatever currently lives at a managed path with an entry is
        removed first. Managed paths without an entry are left alone.
        Entries already moved out by an earlier call are reported as
        SKIPPED, so a repeated restore is a no-op.

        Args:
            container: Container to restore from
            managed_paths: Paths to consider, defaults to the selector's

        Returns:
            Per-path results

        """
        paths = self.managed_paths if managed_paths is None else managed_paths
        logger.info("Restoring from %s", container.name)

        results = [self._restore_one(container, managed) for managed in paths]
        outcome = RestoreOutcome(
            status=RestoreStatus.RESTORED
            if any(r.status is StepStatus.DONE for r in results)
            else RestoreStatus.SKIPPED,
            container=container,
            results=results,
        )
        if outcome.restored:
            log_success(logger, "Restored %s", ", ".join(outcome.restored))
        else:
            logger.info("Nothing left to restore in %s", container.name)
        return outcome

    def _restore_one(
        self, container: BackupContainer, managed: ManagedPath
    ) -> StepResult:
        entry = managed.entry_path(container.path)
        if not path_exists(entry):
            return StepResult(managed.name, StepStatus.SKIPPED, "no entry")

        live = managed.resolve(self.config_root)
        try:
            remove_path(live)
            move_path(entry, live)
        except OSError as e:
            logger.error("Failed to restore %s: %s", live, e)
            return StepResult(managed.name, StepStatus.FAILED, str(e))
        return StepResult(managed.name, StepStatus.DONE, str(live))

    def delete_backup(self, container: BackupContainer) -> bool:
        """Delete a container and every entry in it.

        Returns:
            True if deleted, False if it was already gone

        Raises:
            ValueError: If the path is not a container under the config root

        """
        path = container.path
        if path.parent != self.config_root or parse_container_name(path.name) is None:
            msg = f"Refusing to delete non-backup path: {path}"
            raise ValueError(msg)
        if not path.is_dir():
            return False
        shutil.rmtree(path)
        logger.info("Deleted backup %s", container.name)
        return True

    def delete_all_backups(self) -> int:
        """Delete every discovered container.

        Returns:
            Number of containers deleted

        """
        return sum(self.delete_backup(c) for c in self.list_backups())

    def show_backups(
        self, prompter: Prompter, backups: Sequence[BackupContainer]
    ) -> None:
        """Display a numbered list of containers."""
        prompter.show("Available backups:")
        for number, container in enumerate(backups, start=1):
            prompter.show(
                f"  {number}. {container.display_date} ({container.path})"
            )

    def restore_interactive(
        self,
        prompter: Prompter,
        *,
        choice: int | None = None,
        delete: bool | None = None,
        managed_paths: Sequence[ManagedPath] | None = None,
    ) -> RestoreOutcome:
        """List containers, ask which to restore, then restore it.

        Args:
            prompter: Used to show the list and ask questions
            choice: Preselected 1-based index, skips the question
            delete: Delete the container afterwards; None asks
            managed_paths: Restrict the restore to these paths

        Returns:
            The restore outcome; SKIPPED when there is nothing to restore,
            the user picked 0, or the choice was invalid

        """
        try:
            backups = self.require_backups()
        except NoBackupsFoundError as e:
            logger.warning("%s", e)
            return RestoreOutcome(RestoreStatus.SKIPPED)

        self.show_backups(prompter, backups)
        answer: int | str = (
            choice
            if choice is not None
            else prompter.ask("Enter backup number to restore (0 to skip):")
        )

        try:
            container = self.select(backups, answer)
        except InvalidSelectionError as e:
            logger.warning("%s; skipping restore", e)
            return RestoreOutcome(RestoreStatus.SKIPPED)

        if container is None:
            logger.info("Skipping restore")
            return RestoreOutcome(RestoreStatus.SKIPPED)

        outcome = self.restore(container, managed_paths)
        if delete is None:
            delete = prompter.confirm(
                f"Delete backup {container.name} now that it is restored?"
            )
        if delete:
            outcome.deleted = self.delete_backup(container)
        return outcome
