"""Run the generator tool as a subprocess."""

import asyncio
import logging
import shutil
from pathlib import Path
from typing import Callable, Optional, Sequence

from .builder import build_args, format_command
from .errors import (
    ConfigNotFoundError,
    ExecutableNotFoundError,
    InvocationTimeoutError,
    ProcessFailureError,
)
from .models import ExecutionOutcome, InvocationSpec

logger = logging.getLogger(__name__)

EXECUTABLE_NAME = "devinit"


def resolve_executable(
    executable_path: str,
    which: Callable[[str], Optional[str]] = shutil.which,
) -> str:
    """Resolve the generator tool to run.

    Args:
        executable_path: Explicit path. Used verbatim when non-empty.
        which: PATH lookup function.

    Returns:
        Path of the executable to spawn.

    Raises:
        ExecutableNotFoundError: If no explicit path is set and the tool is
            not on PATH.
    """
    if executable_path:
        return executable_path

    found = which(EXECUTABLE_NAME)
    if not found:
        raise ExecutableNotFoundError(
            f"Could not find '{EXECUTABLE_NAME}' on PATH. "
            f"Suggestion: install it or set environment.executable_path "
            f"in your settings."
        )
    return found


class ProcessInvoker:
    """Spawns the generator tool and captures its output."""

    def __init__(
        self,
        which: Callable[[str], Optional[str]] = shutil.which,
        timeout: Optional[float] = None,
    ):
        """Initialize the invoker.

        Args:
            which: PATH lookup used when no explicit executable is configured
            timeout: Seconds to wait for the process before killing it, or
                None to wait indefinitely
        """
        self._which = which
        self.timeout = timeout

    async def invoke(
        self, executable_path: str, args: Sequence[str]
    ) -> ExecutionOutcome:
        """Run the tool with ``args`` and wait for it to exit.

        Args:
            executable_path: Explicit tool path, or empty to search PATH
            args: Argument vector, excluding the executable

        Returns:
            Captured stdout and stderr of a clean exit

        Raises:
            ExecutableNotFoundError: If the tool cannot be found or started
            ProcessFailureError: If the tool exits with a non-zero status
            InvocationTimeoutError: If the timeout elapses first
        """
        executable = resolve_executable(executable_path, self._which)
        command = format_command(executable, args)
        logger.debug(f"Running: {command}")

        try:
            process = await asyncio.create_subprocess_exec(
                executable,
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise ExecutableNotFoundError(
                f"Failed to start '{executable}': {e}", path=executable
            ) from e

        try:
            stdout, stderr = await asyncio.wait_for(
                process.communicate(), timeout=self.timeout
            )
        except asyncio.TimeoutError as e:
            process.kill()
            await process.wait()
            logger.warning(f"Timed out after {self.timeout}s: {command}")
            raise InvocationTimeoutError(
                f"'{EXECUTABLE_NAME}' did not finish within {self.timeout} seconds",
                timeout=self.timeout,
                command=command,
            ) from e

        stdout_text = stdout.decode("utf-8", errors="replace")
        stderr_text = stderr.decode("utf-8", errors="replace")

        if process.returncode != 0:
            message = stderr_text.strip() or f"exit status {process.returncode}"
            logger.warning(f"Command failed ({process.returncode}): {command}")
            raise ProcessFailureError(
                f"Command failed: {command}\n{message}",
                stderr=stderr_text,
                returncode=process.returncode,
                command=command,
            )

        return ExecutionOutcome(stdout=stdout_text, stderr=stderr_text)

    async def run(self, spec: InvocationSpec) -> ExecutionOutcome:
        """Build the arguments for ``spec`` and invoke the tool.

        A failure while pointing at a configuration file that does not exist
        is reported as ``ConfigNotFoundError``.
        """
        try:
            return await self.invoke(spec.executable_path, build_args(spec))
        except ProcessFailureError as e:
            config_path = spec.config_file_path
            if config_path is not None and not Path(config_path).exists():
                raise ConfigNotFoundError(
                    f"Configuration file not found: {config_path}\n{e}",
                    config_path=config_path,
                    stderr=e.stderr,
                    returncode=e.returncode,
                    command=e.command,
                ) from e
            raise
