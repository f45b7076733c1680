"""
Subprocess execution with an optional hard wall-clock budget.

Timeouts and non-zero exits raise distinct exceptions so callers can react
differently (a timeout usually means the scene is too heavy, a failure usually
means the input is broken).
"""

import asyncio
from dataclasses import dataclass
from typing import Optional, Sequence

from .logging import get_logger

logger = get_logger(__name__, component="process")


@dataclass
class CommandResult:
    returncode: int
    stdout: str
    stderr: str


class CommandError(Exception):
    """Base class for subprocess failures."""

    def __init__(self, cmd: Sequence[str], message: str, stderr: str = "", stdout: str = ""):
        self.cmd = list(cmd)
        self.stderr = stderr
        self.stdout = stdout
        super().__init__(message)


class CommandFailedError(CommandError):
    """Process could not start or exited non-zero."""

    def __init__(self, cmd: Sequence[str], returncode: Optional[int], stderr: str = "", stdout: str = ""):
        self.returncode = returncode
        if returncode is None:
            message = f"Command could not be started: {cmd[0]}: {stderr}".rstrip(": ")
        else:
            message = f"Command failed with exit code {returncode}: {' '.join(cmd)}"
            if stderr.strip():
                message += f"\n{stderr.strip()}"
        super().__init__(cmd, message, stderr=stderr, stdout=stdout)


class CommandTimeoutError(CommandError):
    """Process exceeded its budget and was killed."""

    def __init__(self, cmd: Sequence[str], timeout: float, stderr: str = "", stdout: str = ""):
        self.timeout = timeout
        super().__init__(
            cmd,
            f"Command timed out after {timeout:g}s: {' '.join(cmd)}",
            stderr=stderr,
            stdout=stdout,
        )


def _decode(data: Optional[bytes]) -> str:
    return data.decode("utf-8", errors="replace") if data else ""


async def run_command(cmd: Sequence[str], timeout: Optional[float] = None) -> CommandResult:
    """Run a command, capturing output.

    Args:
        cmd: Program and arguments
        timeout: Seconds before the process is killed; None waits forever

    Raises:
        CommandTimeoutError: The budget elapsed; the process has been killed and reaped
        CommandFailedError: The program is missing or exited non-zero
    """
    logger.debug("Running command", extra={"cmd": list(cmd), "timeout": timeout})
    try:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise CommandFailedError(cmd, None, stderr=str(e)) from e

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        try:
            process.kill()
        except ProcessLookupError:
            pass
        stdout, stderr = await process.communicate()
        raise CommandTimeoutError(cmd, timeout, stderr=_decode(stderr), stdout=_decode(stdout))

    result = CommandResult(
        returncode=process.returncode,
        stdout=_decode(stdout),
        stderr=_decode(stderr),
    )
    if result.returncode != 0:
        raise CommandFailedError(cmd, result.returncode, stderr=result.stderr, stdout=result.stdout)
    return result
