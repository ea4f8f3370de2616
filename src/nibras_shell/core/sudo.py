"""Keeps sudo credentials fresh during long package installs."""

from __future__ import annotations

import asyncio
import contextlib
from typing import TYPE_CHECKING, Self

from nibras_shell.constants import DEFAULT_KEEPALIVE_INTERVAL
from nibras_shell.core import process
from nibras_shell.exceptions import PreconditionError
from nibras_shell.logger import get_logger

if TYPE_CHECKING:
    import types

logger = get_logger(__name__)


class SudoKeepAlive:
    """Async context manager that authenticates sudo and keeps it cached.

    On entry ``sudo -v`` prompts for the password. A background task then
    runs ``sudo -n true`` every ``interval`` seconds. The task lives on the
    same event loop as the caller and is cancelled on exit, so it can
    never outlive the process.
    """

    def __init__(self, interval: float = DEFAULT_KEEPALIVE_INTERVAL) -> None:
        """Initialize with the refresh interval in seconds."""
        self.interval = interval
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        """True while the refresh task is alive."""
        return self._task is not None and not self._task.done()

    async def _refresh_loop(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            result = await process.run_command(["sudo", "-n", "true"])
            if not result.ok:
                logger.debug("sudo keep-alive refresh failed")

    async def __aenter__(self) -> Self:
        """Authenticate and start refreshing.

        Raises:
            PreconditionError: If authentication fails

        """
        logger.info("Please authenticate for system-level operations...")
        result = await process.run_command(["sudo", "-v"], capture=False)
        if not result.ok:
            raise PreconditionError(
                "Authentication failed. Cannot continue without sudo access.",
                target="sudo",
            )
        self._task = asyncio.create_task(self._refresh_loop())
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: types.TracebackType | None,
    ) -> None:
        """Stop the refresh task."""
        if self._task is not None:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None
