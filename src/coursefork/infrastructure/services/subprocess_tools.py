import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path

DEFAULT_TIMEOUT = 120

logger = logging.getLogger(__name__)


class SubprocessError(Exception):
    """Exception raised when a subprocess cannot be run to completion."""

    pass


@dataclass
class SubprocessResult:
    """Outcome of a finished subprocess.

    Attributes:
        return_code: Exit code of the process
        stdout: Decoded standard output
        stderr: Decoded standard error
    """

    return_code: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.return_code == 0


async def run_subprocess(
    cmd: list[str],
    cwd: Path | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    env: dict | None = None,
) -> SubprocessResult:
    """Run a subprocess command and wait for it to finish.

    A non-zero exit code is not an error at this level; callers inspect
    `SubprocessResult.return_code`. Failed commands are never retried.

    Args:
        cmd: Command and arguments to execute
        cwd: Working directory of the subprocess
        timeout: Seconds to wait before the process is terminated
        env: Environment variables for the subprocess. If None, inherits parent env.

    Raises:
        SubprocessError: If the executable cannot be started or the process
            times out
    """
    logger.debug(f"Running: {' '.join(cmd)}")

    try:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=cwd,
            env=env,
        )
    except (FileNotFoundError, PermissionError) as e:
        raise SubprocessError(
            f"Command failed with non-retriable error: {e}\nCommand: {' '.join(cmd)}"
        ) from e

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout)
    except asyncio.TimeoutError as e:
        await try_to_terminate_process(process)
        raise SubprocessError(
            f"Command timed out after {timeout} seconds\nCommand: {' '.join(cmd)}"
        ) from e

    assert process.returncode is not None
    return SubprocessResult(
        return_code=process.returncode,
        stdout=stdout.decode(errors="replace"),
        stderr=stderr.decode(errors="replace"),
    )


async def try_to_terminate_process(process):
    """Attempt to gracefully terminate a subprocess, then force kill if needed."""
    try:
        process.terminate()
        await asyncio.sleep(2.0)

        if process.returncode is None:
            process.kill()
            logger.debug("Process force killed")

    except ProcessLookupError:
        logger.debug("Process already terminated")

    except Exception as e:
        # Log unexpected errors but don't fail
        logger.warning(f"Error while terminating subprocess: {e}", exc_info=True)
