"""Backup command coordinator.

Thin coordinator that delegates to the Backup Recorder and Restore
Selector and displays results.
"""

from argparse import Namespace
from pathlib import Path

from nibras_shell.core.backup import BackupManifest, BackupRecorder, RestoreSelector
from nibras_shell.core.prompts import Prompter
from nibras_shell.domain.managed import ManagedPath, get_managed_path
from nibras_shell.exceptions import NoBackupsFoundError
from nibras_shell.logger import get_logger, log_success

from .base import BaseCommandHandler

logger = get_logger(__name__)


class BackupHandler(BaseCommandHandler):
    """Thin coordinator for the backup command."""

    @property
    def config_root(self) -> Path:
        """Directory holding the managed paths and containers."""
        return self.global_config["directory"]["config_root"]

    async def execute(self, args: Namespace) -> None:
        """Execute the backup command."""
        selector = RestoreSelector(self.config_root)
        prompter = self.get_prompter(args)
        match args.backup_action:
            case "list":
                self._list_backups(selector, prompter)
            case "create":
                self._create_backup(prompter)
            case "restore":
                self._restore(selector, prompter, args)

    @staticmethod
    def _list_backups(selector: RestoreSelector, prompter: Prompter) -> None:
        backups = selector.list_backups()
        if not backups:
            logger.warning("No NibrasShell backups found")
            return
        selector.show_backups(prompter, backups)
        for container in backups:
            names = ", ".join(container.entry_names()) or "empty"
            manifest = BackupManifest(container.path).load()
            recorded = manifest["created"] if manifest else "no manifest"
            logger.debug("%s: %s (recorded %s)", container.name, names, recorded)

    def _create_backup(self, prompter: Prompter) -> None:
        recorder = BackupRecorder(self.config_root)
        container = recorder.create_backup()
        for result in recorder.last_results:
            logger.debug("%s: %s", result.name, result.status.value)
        prompter.show(f"Backup created: {container.path}")

    @staticmethod
    def _managed_paths(args: Namespace) -> list[ManagedPath] | None:
        names = getattr(args, "only", None)
        if not names:
            return None
        return [get_managed_path(name) for name in dict.fromkeys(names)]

    def _restore(
        self, selector: RestoreSelector, prompter: Prompter, args: Namespace
    ) -> None:
        # --yes answers the delete question only when --delete was given
        delete: bool | None = True if args.delete else None
        if args.yes and not args.delete:
            delete = False

        managed = self._managed_paths(args)
        if args.index is None:
            outcome = selector.restore_interactive(
                prompter, delete=delete, managed_paths=managed
            )
        else:
            try:
                backups = selector.require_backups()
            except NoBackupsFoundError as e:
                logger.warning("%s", e)
                return
            # Out-of-range --index propagates as InvalidSelectionError
            container = selector.select(backups, args.index)
            if container is None:
                logger.info("Skipping restore")
                return
            outcome = selector.restore(container, managed)
            if delete is None:
                delete = prompter.confirm(f"Delete backup {container.name}?")
            if delete:
                outcome.deleted = selector.delete_backup(container)

        if outcome.restored:
            log_success(logger, "Configuration restored from backup")
        if outcome.deleted:
            logger.info("Backup directory removed")
