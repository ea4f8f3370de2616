"""JSON schemas bundled with nibras-shell."""

from nibras_shell.config.schemas.validator import (
    ConfigValidator,
    SchemaValidationError,
)

__all__ = ["ConfigValidator", "SchemaValidationError"]
