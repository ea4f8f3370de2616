"""Exception classes for nibras-shell operations."""


class NibrasShellError(Exception):
    """Base exception for nibras-shell operations."""

    error_prefix: str = "Operation failed"

    def __init__(self, message: str, target: str | None = None) -> None:
        """Initialize error with message and optional target.

        Args:
            message: Error message describing the failure.
            target: Optional name of the target that failed.

        """
        super().__init__(message)
        self.message = message
        self.target = target

    def __str__(self) -> str:
        """Return formatted error message."""
        if self.target:
            return f"{self.error_prefix} for '{self.target}': {self.message}"
        return f"{self.error_prefix}: {self.message}"


class PreconditionError(NibrasShellError):
    """Raised when the environment cannot run the requested flow."""

    error_prefix = "Precondition failed"


class PackageInstallError(NibrasShellError):
    """Raised when a single package fails to install or remove."""

    error_prefix = "Package operation failed"


class NoBackupsFoundError(NibrasShellError):
    """Raised when no backup containers exist under the config root."""

    error_prefix = "No backups found"


class InvalidSelectionError(NibrasShellError):
    """Raised when a backup selection is outside the offered range."""

    error_prefix = "Invalid selection"


class MissingDirectoryError(NibrasShellError):
    """Raised when a directory required as input does not exist."""

    error_prefix = "Missing directory"


class InstallCancelledError(NibrasShellError):
    """Raised when the user declines to continue at a prompt."""

    error_prefix = "Cancelled"


class LockError(NibrasShellError):
    """Raised when another nibras-shell instance holds the process lock."""

    error_prefix = "Lock unavailable"

    def __init__(
        self,
        message: str,
        target: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        """Initialize lock error.

        Args:
            message: Error message describing the failure.
            target: Optional lock file path.
            cause: Underlying OS error, if any.

        """
        super().__init__(message, target)
        self.cause = cause
