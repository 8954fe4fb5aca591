"""Generator tool invocation: command building, subprocess execution, errors."""

from .builder import build_args, format_command
from .errors import (
    ConfigNotFoundError,
    ExecutableNotFoundError,
    InputCancelled,
    InvocationTimeoutError,
    MalformedOutputError,
    ProcessFailureError,
    RunnerError,
)
from .invoker import EXECUTABLE_NAME, ProcessInvoker, resolve_executable
from .models import (
    ExecutionOutcome,
    InvocationSpec,
    OutputMode,
    Subcommand,
    TemplateCatalog,
    TemplateDescriptor,
)

__all__ = [
    # Models
    "InvocationSpec",
    "Subcommand",
    "OutputMode",
    "ExecutionOutcome",
    "TemplateDescriptor",
    "TemplateCatalog",
    # Building and running
    "build_args",
    "format_command",
    "ProcessInvoker",
    "resolve_executable",
    "EXECUTABLE_NAME",
    # Errors
    "RunnerError",
    "ExecutableNotFoundError",
    "ProcessFailureError",
    "ConfigNotFoundError",
    "MalformedOutputError",
    "InvocationTimeoutError",
    "InputCancelled",
]
