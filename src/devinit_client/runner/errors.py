"""Exceptions raised at the generator tool boundary."""

from typing import Optional


class RunnerError(Exception):
    """Base exception for generator tool invocation errors."""

    pass


class ExecutableNotFoundError(RunnerError):
    """The generator tool could not be located or started."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class ProcessFailureError(RunnerError):
    """The generator tool exited with a non-zero status."""

    def __init__(
        self,
        message: str,
        stderr: str = "",
        returncode: Optional[int] = None,
        command: str = "",
    ):
        super().__init__(message)
        self.stderr = stderr
        self.returncode = returncode
        self.command = command


class ConfigNotFoundError(ProcessFailureError):
    """The tool failed and the configuration file it was given does not exist."""

    def __init__(self, message: str, config_path: str, **kwargs):
        super().__init__(message, **kwargs)
        self.config_path = config_path


class MalformedOutputError(RunnerError):
    """Tool output did not parse as the expected JSON shape."""

    def __init__(self, message: str, stdout: str = ""):
        super().__init__(message)
        self.stdout = stdout


class InvocationTimeoutError(RunnerError):
    """The generator tool did not exit within the configured timeout."""

    def __init__(self, message: str, timeout: float, command: str = ""):
        super().__init__(message)
        self.timeout = timeout
        self.command = command


class InputCancelled(Exception):
    """A variable prompt was dismissed without a value.

    Not a ``RunnerError``: cancelling is a user decision, and callers filter
    it out before showing errors.
    """

    def __init__(self, identifier: str):
        super().__init__(f"Input cancelled for variable '{identifier}'")
        self.identifier = identifier
