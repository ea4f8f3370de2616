"""Install workflow.

Runs the installer steps in their fixed order: preconditions, packages,
Python venv, repository, backup of the live configuration, overlay,
themes and icons, font cache. Package failures are collected; a missing
repository or an incomplete backup stops the run.
"""

from dataclasses import dataclass, field
from pathlib import Path

from nibras_shell.core.archives import ArchiveExtractor
from nibras_shell.core.backup import BackupRecorder
from nibras_shell.core.overlay import ConfigOverlay
from nibras_shell.core.packages import PackageManager
from nibras_shell.core.prompts import Prompter
from nibras_shell.core.python_env import PythonEnvironment
from nibras_shell.core.repository import RepositoryManager
from nibras_shell.core.sudo import SudoKeepAlive
from nibras_shell.core.system import ensure_not_root, refresh_font_cache, require_tool
from nibras_shell.domain.backup import (
    BackupContainer,
    PackageReport,
    StepResult,
    StepStatus,
)
from nibras_shell.domain.types import GlobalConfig, Profile
from nibras_shell.exceptions import InstallCancelledError, NibrasShellError
from nibras_shell.logger import get_logger, log_success

logger = get_logger(__name__)


@dataclass
class InstallReport:
    """Summary of an install run."""

    packages: PackageReport = field(default_factory=PackageReport)
    backup: BackupContainer | None = None
    steps: list[StepResult] = field(default_factory=list)

    @property
    def failed_steps(self) -> list[StepResult]:
        """Steps that failed (skips are not failures)."""
        return [step for step in self.steps if step.status is StepStatus.FAILED]


class InstallWorkflow:
    """Installs NibrasShell for the current user."""

    def __init__(
        self,
        config: GlobalConfig,
        profile: Profile,
        prompter: Prompter,
        *,
        home: Path | None = None,
        packages: PackageManager | None = None,
        recorder: BackupRecorder | None = None,
        archives: ArchiveExtractor | None = None,
    ) -> None:
        """Initialize install workflow.

        Args:
            config: Loaded settings
            profile: Install profile
            prompter: Used for every question
            home: Home directory, defaults to Path.home()
            packages: Package manager, built from settings when omitted
            recorder: Backup recorder for the config root
            archives: Archive extractor

        """
        self.config = config
        self.profile = profile
        self.prompter = prompter
        self.home = home or Path.home()
        directory = config["directory"]
        install = config["install"]
        self.packages = packages or PackageManager(
            install["aur_helper"],
            batch_timeout=install["batch_timeout"],
            package_timeout=install["package_timeout"],
        )
        self.recorder = recorder or BackupRecorder(directory["config_root"])
        self.archives = archives or ArchiveExtractor()
        self.overlay = ConfigOverlay(self.home, directory["config_root"], profile)
        self.repository = RepositoryManager(install["repo_url"], directory["repo"])
        self.python_env = PythonEnvironment(
            directory["venv"], profile["python_packages"]
        )

    def check_preconditions(self) -> None:
        """Refuse root and require the AUR helper.

        Raises:
            PreconditionError: If a precondition fails

        """
        ensure_not_root()
        require_tool(self.config["install"]["aur_helper"])

    async def install_packages(self) -> PackageReport:
        """Install each package group; groups marked ``confirm`` ask first."""
        report = PackageReport()
        for name, group in self.profile["package_groups"].items():
            if group["confirm"] and not self.prompter.confirm(
                f"Do you want to install {group['description']}?"
            ):
                logger.info("Skipping %s packages", name)
                continue
            logger.info("Installing %s...", group["description"])
            report.merge(await self.packages.install(group["packages"], self.prompter))
        return report

    def backup_configs(self) -> BackupContainer:
        """Move the live configuration into a new backup container.

        Raises:
            NibrasShellError: If any present path could not be preserved;
                overlaying on top of it would lose data

        """
        logger.info("Backing up existing configurations...")
        container = self.recorder.create_backup()
        failed = [
            r.name for r in self.recorder.last_results if r.status is StepStatus.FAILED
        ]
        if failed:
            raise NibrasShellError(
                f"could not back up {', '.join(failed)}", target=container.name
            )
        logger.info("Backup completed in: %s", container.path)
        return container

    def apply_configuration(self) -> list[StepResult]:
        """Copy hypr and the overlays, then mark scripts executable."""
        steps = [self.overlay.install_hypr(self.config["directory"]["repo"])]
        steps.extend(self.overlay.apply_overlays())
        steps.extend(self.overlay.make_executable())
        return steps

    async def install_themes(self) -> list[StepResult]:
        """Install GTK themes and extract icon archives."""
        directory = self.config["directory"]
        steps = [self.overlay.install_gtk_themes(directory["themes"])]
        logger.info("Extracting icon themes...")
        steps.extend(
            await self.archives.extract_all(
                self.profile["icon_archives"],
                self.overlay.hypr_dir / "config" / "icons",
                directory["icons"],
            )
        )
        return steps

    async def run(self) -> InstallReport:
        """Run the full installation.

        Raises:
            PreconditionError: Root user, missing helper or failed sudo
            InstallCancelledError: The user declined to continue
            MissingDirectoryError: The repository is not available
            NibrasShellError: The backup was incomplete

        """
        self.check_preconditions()
        logger.info("Starting NibrasShell installation...")
        self.prompter.show(
            "This will install NibrasShell and modify your system configuration."
        )
        self.prompter.show("Your existing configs will be backed up automatically.")
        if not self.prompter.confirm("Do you want to continue?"):
            raise InstallCancelledError("installation cancelled by user")

        report = InstallReport()
        async with SudoKeepAlive(self.config["install"]["keepalive_interval"]):
            report.packages = await self.install_packages()
            report.steps.append(await self.python_env.create())
            report.steps.append(await self.repository.clone())
            report.backup = self.backup_configs()
            report.steps.extend(self.apply_configuration())
            report.steps.extend(await self.install_themes())
            report.steps.append(await refresh_font_cache())

        if report.packages.failed:
            logger.warning(
                "Packages to install manually: %s", " ".join(report.packages.failed)
            )
        log_success(logger, "Installation completed successfully!")
        self.prompter.show("NibrasShell has been installed!")
        self.prompter.show("You can now reboot or restart your Hyprland session.")
        return report
