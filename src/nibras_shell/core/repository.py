"""The NibrasShell dotfiles repository checkout."""

from pathlib import Path

from nibras_shell.core import process
from nibras_shell.core.backup.helpers import remove_path
from nibras_shell.domain.backup import StepResult, StepStatus
from nibras_shell.logger import get_logger

logger = get_logger(__name__)


class RepositoryManager:
    """Clones and removes the dotfiles repository."""

    def __init__(self, repo_url: str, repo_dir: Path) -> None:
        self.repo_url = repo_url
        self.repo_dir = repo_dir

    @property
    def exists(self) -> bool:
        """True when the checkout directory is present."""
        return self.repo_dir.is_dir()

    async def clone(self) -> StepResult:
        """Clone the repository unless it is already checked out."""
        if self.exists:
            logger.info("NibrasShell repository already exists")
            return StepResult("repository", StepStatus.SKIPPED, "present")

        logger.info("Cloning NibrasShell repository...")
        result = await process.run_command(
            ["git", "clone", self.repo_url, str(self.repo_dir)], capture=False
        )
        if not result.ok:
            logger.error("git clone of %s failed", self.repo_url)
            return StepResult("repository", StepStatus.FAILED, result.stderr)
        return StepResult("repository", StepStatus.DONE, str(self.repo_dir))

    def remove(self) -> StepResult:
        """Delete the checkout."""
        if not remove_path(self.repo_dir):
            return StepResult("repository", StepStatus.SKIPPED, "absent")
        return StepResult("repository", StepStatus.DONE, str(self.repo_dir))
