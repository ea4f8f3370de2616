"""Virtual environment for the image-processing helpers."""

from collections.abc import Sequence
from pathlib import Path

from nibras_shell.core import process
from nibras_shell.core.backup.helpers import remove_path
from nibras_shell.domain.backup import StepResult, StepStatus
from nibras_shell.logger import get_logger

logger = get_logger(__name__)


class PythonEnvironment:
    """Creates and removes the venv used by wallpaper scripts."""

    def __init__(
        self,
        venv_dir: Path,
        packages: Sequence[str],
        python: str = "python",
    ) -> None:
        """Initialize.

        Args:
            venv_dir: Location of the virtual environment
            packages: Requirements to pip install into it
            python: Interpreter used to create the venv

        """
        self.venv_dir = venv_dir
        self.packages = list(packages)
        self.python = python

    @property
    def pip(self) -> Path:
        """Path to the venv's pip."""
        return self.venv_dir / "bin" / "pip"

    async def create(self) -> StepResult:
        """Create the venv and install the packages.

        Returns:
            DONE, or FAILED naming the step that broke

        """
        logger.info("Setting up Python environment for image processing...")
        steps = [
            ("venv", [self.python, "-m", "venv", str(self.venv_dir)]),
            ("pip upgrade", [str(self.pip), "install", "--upgrade", "pip"]),
        ]
        if self.packages:
            steps.append(("pip install", [str(self.pip), "install", *self.packages]))

        for label, cmd in steps:
            result = await process.run_command(cmd, capture=False)
            if not result.ok:
                logger.error("Python environment step '%s' failed", label)
                return StepResult("python-env", StepStatus.FAILED, label)

        logger.info("Python environment setup completed")
        return StepResult("python-env", StepStatus.DONE, str(self.venv_dir))

    def remove(self) -> StepResult:
        """Delete the venv."""
        if not remove_path(self.venv_dir):
            return StepResult("python-env", StepStatus.SKIPPED, "absent")
        logger.info("Removed Python virtual environment %s", self.venv_dir)
        return StepResult("python-env", StepStatus.DONE, str(self.venv_dir))
