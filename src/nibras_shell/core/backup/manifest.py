"""Backup container manifest.

Each container gets a ``nibras-manifest.json`` written once, after all of
its entries have been moved in. Containers without one (interrupted runs,
or containers made by the old shell installer) remain valid: discovery
derives entries from the directory contents.
"""

import tempfile
from pathlib import Path
from typing import Any

import orjson

from nibras_shell.config.schemas import ConfigValidator, SchemaValidationError
from nibras_shell.constants import (
    BACKUP_MANIFEST_FILENAME,
    BACKUP_MANIFEST_TMP_PREFIX,
    BACKUP_MANIFEST_TMP_SUFFIX,
    BACKUP_MANIFEST_VERSION,
)
from nibras_shell.domain.backup import BackupContainer
from nibras_shell.logger import get_logger

logger = get_logger(__name__)


class BackupManifest:
    """Reads and writes the manifest of one backup container."""

    def __init__(
        self, container_path: Path, validator: ConfigValidator | None = None
    ) -> None:
        """Initialize manifest manager.

        Args:
            container_path: Backup container directory
            validator: Optional schema validator

        """
        self.container_path = container_path
        self.manifest_file = container_path / BACKUP_MANIFEST_FILENAME
        self.validator = validator or ConfigValidator()

    @staticmethod
    def build(container: BackupContainer, created_iso: str) -> dict[str, Any]:
        """Build the manifest document for a container."""
        return {
            "manifest_version": BACKUP_MANIFEST_VERSION,
            "name": container.name,
            "created": created_iso,
            "entries": [
                {"name": entry.name, "relative_path": entry.relative_path}
                for entry in container.entries
            ],
        }

    def save(self, container: BackupContainer, created_iso: str) -> Path:
        """Validate and write the manifest atomically.

        Args:
            container: Container whose entries are recorded
            created_iso: Creation time as ISO 8601 string

        Returns:
            Path to the manifest file

        Raises:
            SchemaValidationError: If the document violates the schema
            OSError: If writing fails

        """
        document = self.build(container, created_iso)
        self.validator.validate_manifest(document)

        with tempfile.NamedTemporaryFile(
            mode="wb",
            dir=self.container_path,
            prefix=BACKUP_MANIFEST_TMP_PREFIX,
            suffix=BACKUP_MANIFEST_TMP_SUFFIX,
            delete=False,
        ) as tmp_file:
            tmp_file.write(
                orjson.dumps(
                    document,
                    option=orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS,
                )
            )
            tmp_file.flush()
            temp_path = Path(tmp_file.name)

        try:
            temp_path.replace(self.manifest_file)
        except OSError:
            temp_path.unlink(missing_ok=True)
            raise
        logger.debug("Saved manifest to %s", self.manifest_file)
        return self.manifest_file

    def load(self) -> dict[str, Any] | None:
        """Load the manifest.

        Returns:
            Manifest dictionary, or None when absent or unreadable

        """
        if not self.manifest_file.exists():
            return None

        try:
            data: dict[str, Any] = orjson.loads(self.manifest_file.read_bytes())
            self.validator.validate_manifest(data)
        except (orjson.JSONDecodeError, OSError, SchemaValidationError) as e:
            logger.warning("Ignoring unreadable manifest %s: %s", self.manifest_file, e)
            return None
        return data
