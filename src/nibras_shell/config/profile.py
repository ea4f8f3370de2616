"""Loader for the bundled install profile.

The profile holds every list the installer and uninstaller iterate over
(package groups, icon archives, overlay copies, removal paths), so the
workflows contain no hard-coded names.
"""

from pathlib import Path

import orjson

from nibras_shell.config.paths import Paths
from nibras_shell.config.schemas.validator import ConfigValidator
from nibras_shell.domain.types import Profile
from nibras_shell.logger import get_logger

logger = get_logger(__name__)


class ProfileLoader:
    """Load and validate the install profile."""

    def __init__(
        self,
        profile_file: Path | None = None,
        validator: ConfigValidator | None = None,
    ) -> None:
        """Initialize profile loader.

        Args:
            profile_file: Optional custom profile path.
                Defaults to the bundled profile.
            validator: Optional validator instance

        """
        self.profile_file = profile_file or Paths.PROFILE_FILE
        self.validator = validator or ConfigValidator()
        self._cache: Profile | None = None

    def load(self) -> Profile:
        """Load the profile, validating it on first access.

        Returns:
            Validated profile dictionary

        Raises:
            FileNotFoundError: If the profile file doesn't exist
            ValueError: If the profile is not valid JSON
            SchemaValidationError: If the profile violates the schema

        """
        if self._cache is not None:
            return self._cache

        if not self.profile_file.exists():
            msg = f"Install profile not found: {self.profile_file}"
            raise FileNotFoundError(msg)

        try:
            data = orjson.loads(self.profile_file.read_bytes())
        except orjson.JSONDecodeError as e:
            msg = f"Invalid JSON in profile {self.profile_file}: {e}"
            raise ValueError(msg) from e

        self.validator.validate_profile(data)
        logger.debug("Loaded install profile %s", self.profile_file)
        self._cache = data
        return data  # type: ignore[no-any-return]
