"""System checks and desktop cache refreshes."""

import os
import shutil
from pathlib import Path

from nibras_shell.core import process
from nibras_shell.domain.backup import StepResult, StepStatus
from nibras_shell.exceptions import PreconditionError
from nibras_shell.logger import get_logger

logger = get_logger(__name__)


def ensure_not_root() -> None:
    """Refuse to run with root privileges.

    Raises:
        PreconditionError: If the effective user is root

    """
    if os.geteuid() == 0:
        raise PreconditionError("nibras-shell should not be run as root")


def require_tool(name: str) -> str:
    """Return the path of a required executable.

    Raises:
        PreconditionError: If it is not on PATH

    """
    found = shutil.which(name)
    if found is None:
        raise PreconditionError(
            f"{name} is required but not installed. Please install {name} first.",
            target=name,
        )
    return found


async def _refresh(name: str, cmd: list[str]) -> StepResult:
    result = await process.run_command(cmd)
    if result.returncode == process.COMMAND_NOT_FOUND:
        logger.debug("%s not available, skipping", cmd[0])
        return StepResult(name, StepStatus.SKIPPED, "not installed")
    if not result.ok:
        logger.warning("%s failed: %s", cmd[0], result.stderr.strip())
        return StepResult(name, StepStatus.FAILED, result.stderr)
    return StepResult(name, StepStatus.DONE)


async def refresh_font_cache() -> StepResult:
    """Run ``fc-cache -fv``."""
    logger.info("Refreshing font cache...")
    return await _refresh("font-cache", ["fc-cache", "-fv"])


async def refresh_caches(home: Path, icons_dir: Path) -> list[StepResult]:
    """Refresh font, desktop entry and icon caches, best effort.

    Args:
        home: User home, for ``~/.local/share/applications``
        icons_dir: Icon theme directory

    """
    logger.info("Refreshing system caches...")
    return [
        await refresh_font_cache(),
        await _refresh(
            "desktop-database",
            [
                "update-desktop-database",
                str(home / ".local" / "share" / "applications"),
            ],
        ),
        await _refresh("icon-cache", ["gtk-update-icon-cache", str(icons_dir)]),
    ]
