"""AUR helper wrapper for installing and removing packages.

Failures are per package: a package that won't install is recorded in the
report and the run continues with the next one.
"""

from collections.abc import Iterable

from nibras_shell.constants import (
    DEFAULT_AUR_HELPER,
    DEFAULT_BATCH_TIMEOUT,
    DEFAULT_PACKAGE_TIMEOUT,
)
from nibras_shell.core import process
from nibras_shell.core.prompts import Prompter
from nibras_shell.domain.backup import PackageReport
from nibras_shell.exceptions import InstallCancelledError, PackageInstallError
from nibras_shell.logger import get_logger, log_success

logger = get_logger(__name__)


class PackageManager:
    """Installs and removes packages through an AUR helper such as yay."""

    def __init__(
        self,
        helper: str = DEFAULT_AUR_HELPER,
        *,
        batch_timeout: int = DEFAULT_BATCH_TIMEOUT,
        package_timeout: int = DEFAULT_PACKAGE_TIMEOUT,
    ) -> None:
        """Initialize package manager.

        Args:
            helper: AUR helper executable
            batch_timeout: Seconds allowed for one batch install
            package_timeout: Seconds allowed per package when falling back

        """
        self.helper = helper
        self.batch_timeout = batch_timeout
        self.package_timeout = package_timeout

    async def is_installed(self, name: str) -> bool:
        """Return True if the package is installed."""
        result = await process.run_command([self.helper, "-Qi", name])
        return result.ok

    async def _partition(
        self, names: Iterable[str], *, installed: bool
    ) -> tuple[list[str], list[str]]:
        """Split names into (matching ``installed``, the rest)."""
        matching: list[str] = []
        rest: list[str] = []
        for name in names:
            if await self.is_installed(name) is installed:
                matching.append(name)
            else:
                rest.append(name)
        return matching, rest

    async def install(
        self, names: Iterable[str], prompter: Prompter | None = None
    ) -> PackageReport:
        """Install packages that are not installed yet.

        Tries one batch first, then falls back to one package at a time.

        Args:
            names: Packages to install
            prompter: When given, asked whether to continue after each
                failed package

        Returns:
            Report of installed, already present and failed packages

        Raises:
            InstallCancelledError: If the user declines to continue after
                a failure

        """
        logger.info("Checking which packages need to be installed...")
        to_install, present = await self._partition(names, installed=False)
        report = PackageReport(unchanged=present)
        for name in present:
            logger.debug("%s is already installed", name)

        if not to_install:
            logger.info("All packages are already installed")
            return report

        logger.info("Installing packages: %s", " ".join(to_install))
        batch = await process.run_command(
            [self.helper, "-S", "--needed", "--noconfirm", *to_install],
            timeout=self.batch_timeout,
            capture=False,
        )
        if batch.ok:
            report.processed.extend(to_install)
            log_success(logger, "All packages installed successfully")
            return report

        logger.warning(
            "Batch installation failed or timed out. "
            "Trying individual installation..."
        )
        for name in to_install:
            try:
                await self._install_one(name)
            except PackageInstallError as e:
                logger.error("%s", e)
                report.failed.append(name)
                if prompter is not None and not prompter.confirm(
                    f"Continue without {name}?", default=True
                ):
                    raise InstallCancelledError(
                        "installation stopped by user", target=name
                    ) from e
            else:
                report.processed.append(name)
                log_success(logger, "%s installed successfully", name)

        if report.failed:
            logger.warning(
                "The following packages failed to install: %s",
                " ".join(report.failed),
            )
            logger.warning("You may need to install these manually later")
        return report

    async def _install_one(self, name: str) -> None:
        """Install a single package.

        Raises:
            PackageInstallError: If the helper fails or times out

        """
        logger.info("Installing %s individually...", name)
        await process.run_command(["sudo", "-v"], capture=False)
        result = await process.run_command(
            [self.helper, "-S", "--needed", "--noconfirm", name],
            timeout=self.package_timeout,
            capture=False,
        )
        if result.timed_out:
            raise PackageInstallError(
                f"timed out after {self.package_timeout}s", target=name
            )
        if not result.ok:
            raise PackageInstallError(
                f"{self.helper} exited with {result.returncode}", target=name
            )

    async def remove(self, names: Iterable[str]) -> PackageReport:
        """Remove installed packages one at a time.

        Returns:
            Report of removed, not installed and failed packages

        """
        installed, absent = await self._partition(names, installed=True)
        report = PackageReport(unchanged=absent)
        for name in installed:
            logger.info("Removing %s...", name)
            result = await process.run_command(
                [self.helper, "-Rns", "--noconfirm", name]
            )
            if result.ok:
                report.processed.append(name)
            else:
                logger.warning("Failed to remove %s", name)
                report.failed.append(name)
        return report
