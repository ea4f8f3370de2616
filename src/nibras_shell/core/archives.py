"""Archive extraction through ``tar``."""

from collections.abc import Iterable
from pathlib import Path

from nibras_shell.core import process
from nibras_shell.domain.backup import StepResult, StepStatus
from nibras_shell.logger import get_logger

logger = get_logger(__name__)


class ArchiveExtractor:
    """Unpacks archives into a target directory."""

    async def extract(self, archive: Path, target_dir: Path) -> StepResult:
        """Extract one archive.

        Returns:
            DONE, SKIPPED when the archive is missing, or FAILED when tar
            exits non-zero

        """
        if not archive.is_file():
            logger.warning("Archive %s not found, skipping...", archive.name)
            return StepResult(archive.name, StepStatus.SKIPPED, "missing")

        target_dir.mkdir(parents=True, exist_ok=True)
        logger.info("Extracting %s...", archive.name)
        result = await process.run_command(
            ["tar", "xf", str(archive), "-C", str(target_dir)]
        )
        if not result.ok:
            logger.error(
                "Failed to extract %s: %s", archive.name, result.stderr.strip()
            )
            return StepResult(archive.name, StepStatus.FAILED, result.stderr)
        return StepResult(archive.name, StepStatus.DONE, str(target_dir))

    async def extract_all(
        self, names: Iterable[str], source_dir: Path, target_dir: Path
    ) -> list[StepResult]:
        """Extract each named archive from ``source_dir``.

        A missing ``source_dir`` yields a single SKIPPED result.
        """
        if not source_dir.is_dir():
            logger.warning(
                "Archive directory %s not found, skipping extraction...",
                source_dir,
            )
            return [StepResult(str(source_dir), StepStatus.SKIPPED, "missing")]

        return [
            await self.extract(source_dir / name, target_dir) for name in names
        ]
