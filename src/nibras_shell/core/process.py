"""Thin async wrapper around external commands.

Every external tool (yay, sudo, tar, git, fc-cache...) goes through
``run_command`` so tests can patch a single function.
"""

import asyncio
import contextlib
from dataclasses import dataclass

from nibras_shell.logger import get_logger

logger = get_logger(__name__)

COMMAND_NOT_FOUND = 127


@dataclass(frozen=True)
class CommandResult:
    """Outcome of an external command."""

    returncode: int
    stdout: str = ""
    stderr: str = ""
    timed_out: bool = False

    @property
    def ok(self) -> bool:
        """True when the command exited 0 within its timeout."""
        return self.returncode == 0 and not self.timed_out


async def run_command(
    cmd: list[str],
    *,
    timeout: float | None = None,
    capture: bool = True,
) -> CommandResult:
    """Run a command and wait for it.

    Args:
        cmd: Program and arguments
        timeout: Seconds before the process is killed
        capture: Capture output; False inherits the terminal so tools
            like sudo can prompt

    Returns:
        CommandResult; a missing program yields return code 127

    """
    logger.debug("Running: %s", " ".join(cmd))
    pipe = asyncio.subprocess.PIPE if capture else None
    try:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=pipe,
            stderr=pipe,
        )
    except FileNotFoundError:
        logger.debug("Command not found: %s", cmd[0])
        return CommandResult(COMMAND_NOT_FOUND, stderr=f"{cmd[0]}: not found")

    try:
        stdout, stderr = await asyncio.wait_for(
            process.communicate(), timeout=timeout
        )
    except TimeoutError:
        with contextlib.suppress(ProcessLookupError):
            process.kill()
        await process.wait()
        logger.warning("Command timed out after %ss: %s", timeout, cmd[0])
        return CommandResult(
            process.returncode if process.returncode is not None else -1,
            timed_out=True,
        )

    result = CommandResult(
        returncode=process.returncode if process.returncode is not None else -1,
        stdout=stdout.decode("utf-8", errors="ignore") if stdout else "",
        stderr=stderr.decode("utf-8", errors="ignore") if stderr else "",
    )
    if not result.ok:
        logger.debug(
            "%s exited %d: %s", cmd[0], result.returncode, result.stderr.strip()
        )
    return result
