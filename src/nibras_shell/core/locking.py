"""Single-instance guard for nibras-shell.

Two installers or uninstallers moving the same config directories at once
would corrupt the live configuration, so the CLI holds an exclusive
``fcntl.flock`` for the whole run.
"""

from __future__ import annotations

import asyncio
import fcntl
from pathlib import (
    Path,  # noqa: TC003 - Path used at runtime for file operations
)
from typing import IO, TYPE_CHECKING, Self

from nibras_shell.exceptions import LockError

if TYPE_CHECKING:
    import types


class LockManager:
    """Async context manager holding a non-blocking exclusive file lock.

    Example:
        >>> async with LockManager(Path("/tmp/nibras-shell.lock")):
        ...     pass

    """

    def __init__(self, lock_path: Path) -> None:
        """Initialize with the lock file path."""
        self._lock_path = lock_path
        self._lock_file: IO[str] | None = None

    @property
    def locked(self) -> bool:
        """True while this manager holds the lock."""
        return self._lock_file is not None

    def _acquire(self) -> None:
        self._lock_path.parent.mkdir(parents=True, exist_ok=True)
        lock_file = None
        try:
            lock_file = self._lock_path.open("w", encoding="utf-8")
            fcntl.flock(lock_file.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
        except BlockingIOError as e:
            if lock_file is not None:
                lock_file.close()
            msg = "Another nibras-shell instance is already running"
            raise LockError(msg, target=str(self._lock_path), cause=e) from e
        except OSError as e:
            if lock_file is not None:
                lock_file.close()
            msg = f"Failed to acquire lock: {e}"
            raise LockError(msg, target=str(self._lock_path), cause=e) from e
        self._lock_file = lock_file

    async def __aenter__(self) -> Self:
        """Acquire the lock.

        Raises:
            LockError: If another instance holds it or the file can't be
                opened

        """
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._acquire)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: types.TracebackType | None,
    ) -> None:
        """Release the lock; safe if it was never acquired."""
        if self._lock_file is not None:
            loop = asyncio.get_running_loop()
            await loop.run_in_executor(None, self._lock_file.close)
            self._lock_file = None
