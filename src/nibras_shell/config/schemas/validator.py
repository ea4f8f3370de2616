"""JSON Schema validation for the install profile and backup manifests."""

from pathlib import Path
from typing import Any

import orjson
from jsonschema import Draft7Validator, ValidationError
from jsonschema.exceptions import best_match

from nibras_shell.logger import get_logger

logger = get_logger(__name__)

SCHEMA_DIR = Path(__file__).parent
PROFILE_SCHEMA_PATH = SCHEMA_DIR / "profile.schema.json"
MANIFEST_SCHEMA_PATH = SCHEMA_DIR / "manifest.schema.json"


class SchemaValidationError(Exception):
    """Raised when JSON schema validation fails."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        schema_type: str | None = None,
    ) -> None:
        """Initialize schema validation error.

        Args:
            message: Error message
            path: JSON path where error occurred
            schema_type: Type of schema being validated

        """
        self.path = path
        self.schema_type = schema_type
        super().__init__(message)

    def __str__(self) -> str:
        """Format error message with path information."""
        parts = []
        if self.schema_type:
            parts.append(f"[{self.schema_type}]")
        if self.path:
            parts.append(f"at '{self.path}'")
        if parts:
            return f"{' '.join(parts)}: {super().__str__()}"
        return super().__str__()


class ConfigValidator:
    """Validates profile and manifest documents against JSON schemas."""

    def __init__(self) -> None:
        """Load schemas and build validators."""
        self._profile_validator = Draft7Validator(
            self._load_schema(PROFILE_SCHEMA_PATH)
        )
        self._manifest_validator = Draft7Validator(
            self._load_schema(MANIFEST_SCHEMA_PATH)
        )

    @staticmethod
    def _load_schema(schema_path: Path) -> dict[str, Any]:
        """Load JSON schema from file.

        Raises:
            FileNotFoundError: If schema file doesn't exist
            ValueError: If schema JSON is invalid

        """
        if not schema_path.exists():
            msg = f"Schema file not found: {schema_path}"
            raise FileNotFoundError(msg)

        try:
            return orjson.loads(schema_path.read_bytes())  # type: ignore[no-any-return]
        except orjson.JSONDecodeError as e:
            msg = f"Invalid JSON in schema file {schema_path}: {e}"
            raise ValueError(msg) from e

    @staticmethod
    def _format_validation_error(error: ValidationError) -> tuple[str, str]:
        """Turn a jsonschema error into (message, json path)."""
        path = (
            ".".join(str(p) for p in error.absolute_path)
            if error.absolute_path
            else "root"
        )

        message = error.message
        if error.validator == "required":
            missing = (
                error.message.split("'")[1]
                if "'" in error.message
                else "unknown"
            )
            message = f"Missing required field: '{missing}'"
        elif error.validator == "enum":
            message = f"Invalid value. {error.message}"
        elif error.validator == "type":
            expected_type = error.validator_value
            actual = type(error.instance).__name__
            message = f"Expected type '{expected_type}', got '{actual}'"

        return message, path

    def _validate(
        self,
        validator: Draft7Validator,
        document: dict[str, Any],
        schema_type: str,
    ) -> None:
        error = best_match(validator.iter_errors(document))
        if error is None:
            return
        message, path = self._format_validation_error(error)
        logger.debug("%s validation failed at %s: %s", schema_type, path, message)
        raise SchemaValidationError(message, path=path, schema_type=schema_type)

    def validate_profile(self, profile: dict[str, Any]) -> None:
        """Validate the install profile.

        Raises:
            SchemaValidationError: If validation fails

        """
        self._validate(self._profile_validator, profile, "profile")

    def validate_manifest(self, manifest: dict[str, Any]) -> None:
        """Validate a backup container manifest.

        Raises:
            SchemaValidationError: If validation fails

        """
        self._validate(self._manifest_validator, manifest, "manifest")
