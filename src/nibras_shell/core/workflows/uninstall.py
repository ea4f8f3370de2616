"""Uninstall workflow.

Three methods, as offered by the interactive menu: restore the newest or a
chosen backup, remove everything, or pick what to remove.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from nibras_shell.core import system
from nibras_shell.core.backup import RestoreSelector
from nibras_shell.core.backup.helpers import remove_path
from nibras_shell.core.packages import PackageManager
from nibras_shell.core.prompts import Prompter
from nibras_shell.core.python_env import PythonEnvironment
from nibras_shell.core.repository import RepositoryManager
from nibras_shell.domain.backup import (
    PackageReport,
    RestoreOutcome,
    RestoreStatus,
    StepResult,
    StepStatus,
)
from nibras_shell.domain.managed import MANAGED_PATHS, PathKind
from nibras_shell.domain.types import GlobalConfig, Profile
from nibras_shell.exceptions import InstallCancelledError, InvalidSelectionError
from nibras_shell.logger import get_logger, log_success

logger = get_logger(__name__)


class UninstallMethod(Enum):
    """Top-level uninstall choices."""

    RESTORE = "restore"
    COMPLETE = "complete"
    CUSTOM = "custom"


class PackageRemovalOption(Enum):
    """Package removal choices."""

    SPECIFIC = "specific"
    ALL = "all"
    SKIP = "skip"


_METHOD_MENU = {
    "1": UninstallMethod.RESTORE,
    "2": UninstallMethod.COMPLETE,
    "3": UninstallMethod.CUSTOM,
}
_PACKAGE_MENU = {
    "1": PackageRemovalOption.SPECIFIC,
    "2": PackageRemovalOption.ALL,
    "3": PackageRemovalOption.SKIP,
}


@dataclass
class UninstallReport:
    """Summary of an uninstall run."""

    method: UninstallMethod
    restore: RestoreOutcome | None = None
    packages: PackageReport = field(default_factory=PackageReport)
    steps: list[StepResult] = field(default_factory=list)


class UninstallWorkflow:
    """Removes NibrasShell or restores the previous configuration."""

    def __init__(
        self,
        config: GlobalConfig,
        profile: Profile,
        prompter: Prompter,
        *,
        home: Path | None = None,
        packages: PackageManager | None = None,
        selector: RestoreSelector | None = None,
    ) -> None:
        """Initialize uninstall workflow.

        Args:
            config: Loaded settings
            profile: Install profile
            prompter: Used for every question
            home: Home directory, defaults to Path.home()
            packages: Package manager, built from settings when omitted
            selector: Restore selector for the config root

        """
        self.config = config
        self.profile = profile
        self.prompter = prompter
        self.home = home or Path.home()
        directory = config["directory"]
        self.config_root = directory["config_root"]
        self.packages = packages or PackageManager(config["install"]["aur_helper"])
        self.selector = selector or RestoreSelector(self.config_root)
        self.repository = RepositoryManager(
            config["install"]["repo_url"], directory["repo"]
        )
        self.python_env = PythonEnvironment(
            directory["venv"], profile["python_packages"]
        )

    def _choose_method(self) -> UninstallMethod:
        self.prompter.show("Choose uninstall method:")
        self.prompter.show("1. Restore from backup (recommended)")
        self.prompter.show("2. Complete removal (remove everything)")
        self.prompter.show("3. Custom removal (choose what to remove)")
        answer = self.prompter.ask("Select option (1-3):").strip()
        if answer not in _METHOD_MENU:
            raise InvalidSelectionError(f"'{answer}' is not an uninstall option")
        return _METHOD_MENU[answer]

    async def run(self, method: UninstallMethod | None = None) -> UninstallReport:
        """Run the uninstaller.

        Args:
            method: Uninstall method; None asks

        Raises:
            PreconditionError: If run as root
            InstallCancelledError: If the user declines to continue
            InvalidSelectionError: If the method menu answer is invalid

        """
        system.ensure_not_root()
        self.prompter.show(
            "This will remove NibrasShell configuration and optionally "
            "uninstall packages."
        )
        if not self.prompter.confirm("Do you want to continue?"):
            raise InstallCancelledError("uninstallation cancelled by user")

        if method is None:
            method = self._choose_method()
        report = UninstallReport(method)

        match method:
            case UninstallMethod.RESTORE:
                logger.info("Starting restoration from backup...")
                report.restore = self.restore_from_backup()
            case UninstallMethod.COMPLETE:
                logger.info("Starting complete removal...")
                report.steps.extend(self.remove_configs())
                report.steps.append(self.remove_python_env())
                report.steps.append(self.remove_repository())
                report.packages = await self.uninstall_packages()
                report.steps.extend(self.cleanup_backups())
            case UninstallMethod.CUSTOM:
                logger.info("Starting custom removal...")
                await self._run_custom(report)

        report.steps.extend(await self.refresh_caches())
        log_success(logger, "NibrasShell uninstallation completed!")
        self.prompter.show("You may want to reboot or restart your session.")
        return report

    async def _run_custom(self, report: UninstallReport) -> None:
        if self.prompter.confirm("Remove configuration files?"):
            if self.selector.list_backups() and self.prompter.confirm(
                "Restore from backup instead of removing?", default=True
            ):
                report.restore = self.restore_from_backup()
            else:
                report.steps.extend(self.remove_configs())
        if self.prompter.confirm("Remove Python environment?"):
            report.steps.append(self.remove_python_env())
        if self.prompter.confirm("Remove repository?"):
            report.steps.append(self.remove_repository(ask=False))
        if self.prompter.confirm("Remove packages?"):
            report.packages = await self.uninstall_packages()
        if self.prompter.confirm("Clean up backup directories?"):
            report.steps.extend(self.cleanup_backups(ask=False))

    def restore_from_backup(
        self, *, choice: int | None = None, delete: bool | None = None
    ) -> RestoreOutcome:
        """Offer the backups and restore the chosen one."""
        outcome = self.selector.restore_interactive(
            self.prompter, choice=choice, delete=delete
        )
        if outcome.status is RestoreStatus.RESTORED:
            log_success(logger, "Configuration restored from backup")
        return outcome

    def _confirm_removal(self, directory: Path, question: str) -> bool:
        if not directory.is_dir() or not any(directory.iterdir()):
            return False
        return self.prompter.confirm(question)

    def remove_configs(self) -> list[StepResult]:
        """Remove installed configuration; fonts, themes and icons ask first."""
        logger.info("Removing NibrasShell configuration files...")
        results: list[StepResult] = []
        for managed in MANAGED_PATHS:
            if managed.kind is not PathKind.DIRECTORY:
                continue
            results.append(self._remove(managed.name, managed.resolve(self.config_root)))

        logger.info("Removing theme configurations...")
        for relative in self.profile["removal_paths"]:
            results.append(self._remove(relative, self.home / relative))

        directory = self.config["directory"]
        fonts = directory["fonts"]
        if self._confirm_removal(fonts, f"Remove custom fonts from {fonts}?"):
            for child in list(fonts.iterdir()):
                remove_path(child)
            results.append(StepResult("fonts", StepStatus.DONE, str(fonts)))
            logger.info("Custom fonts removed")

        themes = directory["themes"]
        if self._confirm_removal(themes, f"Remove GTK themes from {themes}?"):
            results.append(self._remove("gtk-themes", themes))

        results.extend(self._remove_icon_themes(directory["icons"]))
        log_success(logger, "Configuration files removed")
        return results

    def _remove_icon_themes(self, icons: Path) -> list[StepResult]:
        if not icons.is_dir():
            return []
        prefixes = tuple(self.profile["icon_theme_prefixes"])
        matches = sorted(p for p in icons.iterdir() if p.name.startswith(prefixes))
        if not matches:
            return []
        self.prompter.show("Icon themes to remove:")
        for path in matches:
            self.prompter.show(f"  {path.name}")
        if not self.prompter.confirm("Remove NibrasShell icon themes?"):
            return []
        results = [self._remove(path.name, path) for path in matches]
        logger.info("Icon themes removed")
        return results

    @staticmethod
    def _remove(name: str, path: Path) -> StepResult:
        try:
            removed = remove_path(path)
        except OSError as e:
            logger.warning("Failed to remove %s: %s", path, e)
            return StepResult(name, StepStatus.FAILED, str(e))
        if not removed:
            return StepResult(name, StepStatus.SKIPPED, "absent")
        return StepResult(name, StepStatus.DONE, str(path))

    def remove_python_env(self) -> StepResult:
        """Delete the image-processing venv."""
        return self.python_env.remove()

    def remove_repository(self, *, ask: bool = True) -> StepResult:
        """Delete the repository checkout, asking first unless ``ask`` is False."""
        if not self.repository.exists:
            return StepResult("repository", StepStatus.SKIPPED, "absent")
        if ask and not self.prompter.confirm(
            f"Remove NibrasShell repository from {self.repository.repo_dir}?"
        ):
            return StepResult("repository", StepStatus.SKIPPED, "declined")
        result = self.repository.remove()
        log_success(logger, "Repository removed")
        return result

    async def uninstall_packages(
        self, option: PackageRemovalOption | None = None
    ) -> PackageReport:
        """Remove NibrasShell packages.

        Args:
            option: Which list to remove; None asks. ALL always asks for a
                second confirmation.

        """
        if option is None:
            self.prompter.show("Package removal options:")
            self.prompter.show("1. Remove NibrasShell-specific packages only")
            self.prompter.show("2. Remove all packages (including system packages)")
            self.prompter.show("3. Skip package removal")
            answer = self.prompter.ask("Choose option (1-3):").strip()
            option = _PACKAGE_MENU.get(answer)
            if option is None:
                logger.warning("Invalid choice, skipping package removal")
                return PackageReport()

        removal = self.profile["removal"]
        match option:
            case PackageRemovalOption.SPECIFIC:
                logger.info("Removing NibrasShell-specific packages...")
                report = await self.packages.remove(removal["specific"])
            case PackageRemovalOption.ALL:
                logger.warning("This will remove ALL packages installed by NibrasShell!")
                if not self.prompter.confirm(
                    "Are you sure? This may break your system!"
                ):
                    logger.info("Package removal cancelled")
                    return PackageReport()
                report = await self.packages.remove(removal["all"])
            case _:
                logger.info("Skipping package removal")
                return PackageReport()

        if report.failed:
            logger.warning("Failed to remove: %s", " ".join(report.failed))
        else:
            log_success(logger, "Packages removed")
        return report

    def cleanup_backups(self, *, ask: bool = True) -> list[StepResult]:
        """Delete every backup container, asking first unless ``ask`` is False."""
        backups = self.selector.list_backups()
        if not backups:
            return []
        self.prompter.show(f"Found {len(backups)} backup directories")
        if ask and not self.prompter.confirm("Remove all backup directories?"):
            return []
        results = []
        for container in backups:
            self.selector.delete_backup(container)
            results.append(StepResult(container.name, StepStatus.DONE))
        log_success(logger, "All backups cleaned up")
        return results

    async def refresh_caches(self) -> list[StepResult]:
        """Refresh font, desktop and icon caches."""
        return await system.refresh_caches(
            self.home, self.config["directory"]["icons"]
        )
