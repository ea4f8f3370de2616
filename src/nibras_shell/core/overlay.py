"""Copies the NibrasShell configuration into place.

Runs after the Backup Recorder has moved the old configuration aside. The
copy records come from the install profile; sources are relative to the
installed hypr directory and targets relative to the home directory.
"""

import shutil
import stat
from pathlib import Path

from nibras_shell.domain.backup import StepResult, StepStatus
from nibras_shell.domain.types import OverlaySpec, Profile
from nibras_shell.exceptions import MissingDirectoryError
from nibras_shell.logger import get_logger

logger = get_logger(__name__)

_EXEC_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


def _copy_any(source: Path, target: Path) -> None:
    if source.is_dir():
        shutil.copytree(source, target, dirs_exist_ok=True)
    else:
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source, target)


class ConfigOverlay:
    """Applies the profile's overlay, permission and theme steps."""

    def __init__(self, home: Path, config_root: Path, profile: Profile) -> None:
        """Initialize overlay.

        Args:
            home: Home directory that overlay targets are relative to
            config_root: Usually ``~/.config``
            profile: Install profile with overlay records

        """
        self.home = home
        self.config_root = config_root
        self.profile = profile

    @property
    def hypr_dir(self) -> Path:
        """Installed hypr configuration directory."""
        return self.config_root / "hypr"

    def install_hypr(self, repo_dir: Path) -> StepResult:
        """Copy the repository contents into the hypr directory.

        Top-level dot entries (``.git`` and friends) are not copied.

        Raises:
            MissingDirectoryError: If the repository is not checked out

        """
        if not repo_dir.is_dir():
            raise MissingDirectoryError(
                "NibrasShell directory not found. "
                "Please clone the repository first.",
                target=str(repo_dir),
            )

        def _ignore_top_level_dotfiles(directory: str, names: list[str]) -> list[str]:
            if Path(directory) == repo_dir:
                return [name for name in names if name.startswith(".")]
            return []

        shutil.copytree(
            repo_dir,
            self.hypr_dir,
            ignore=_ignore_top_level_dotfiles,
            dirs_exist_ok=True,
        )
        logger.info("Copied %s to %s", repo_dir, self.hypr_dir)
        return StepResult("hypr", StepStatus.DONE, str(self.hypr_dir))

    def apply_overlay(self, spec: OverlaySpec) -> StepResult:
        """Apply one copy record.

        Returns:
            DONE, SKIPPED when the source is missing, or FAILED on OSError

        """
        source = self.hypr_dir / spec["source"]
        target = self.home / spec["target"]
        name = spec["source"]
        if not source.exists():
            logger.warning("%s not found, skipping...", source)
            return StepResult(name, StepStatus.SKIPPED, "missing source")

        try:
            match spec["mode"]:
                case "tree":
                    shutil.copytree(source, target, dirs_exist_ok=True)
                case "contents":
                    target.mkdir(parents=True, exist_ok=True)
                    for child in source.iterdir():
                        _copy_any(child, target / child.name)
                case "file":
                    target.parent.mkdir(parents=True, exist_ok=True)
                    shutil.copy2(source, target)
        except OSError as e:
            logger.error("Failed to copy %s to %s: %s", source, target, e)
            return StepResult(name, StepStatus.FAILED, str(e))

        logger.debug("Copied %s -> %s (%s)", source, target, spec["mode"])
        return StepResult(name, StepStatus.DONE, str(target))

    def apply_overlays(self) -> list[StepResult]:
        """Apply every overlay record in profile order."""
        logger.info("Setting up configuration files...")
        results = [self.apply_overlay(spec) for spec in self.profile["overlays"]]
        logger.info("Configuration files copied")
        return results

    def make_executable(self) -> list[StepResult]:
        """Add execute permission to the files in each executable dir."""
        results: list[StepResult] = []
        for relative in self.profile["executable_dirs"]:
            directory = self.home / relative
            if not directory.is_dir():
                logger.warning("Could not set permissions for %s", directory)
                results.append(
                    StepResult(relative, StepStatus.SKIPPED, "missing")
                )
                continue
            for script in directory.iterdir():
                if script.is_file():
                    script.chmod(script.stat().st_mode | _EXEC_BITS)
            results.append(StepResult(relative, StepStatus.DONE))
        return results

    def install_gtk_themes(self, themes_dir: Path) -> StepResult:
        """Copy the bundled GTK themes into ``themes_dir``."""
        logger.info("Extracting GTK themes...")
        source = self.hypr_dir / self.profile["gtk_themes_source"]
        if not source.is_dir():
            logger.warning("GTK themes directory not found, skipping...")
            return StepResult("gtk-themes", StepStatus.SKIPPED, "missing source")

        themes_dir.mkdir(parents=True, exist_ok=True)
        for child in source.iterdir():
            _copy_any(child, themes_dir / child.name)
        logger.info("GTK themes extracted to %s", themes_dir)
        return StepResult("gtk-themes", StepStatus.DONE, str(themes_dir))
