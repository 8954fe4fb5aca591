"""Translate an InvocationSpec into the generator tool's argument vector."""

import shlex
from typing import List, Sequence

from .models import InvocationSpec, OutputMode, Subcommand

PARSABLE_FLAG = "--parsable"
DRY_RUN_FLAG = "--dry-run"
LIST_VARS_FLAG = "--list-vars"
ASSERT_EMPTY_FLAG = "--assert-empty"


def build_args(spec: InvocationSpec) -> List[str]:
    """Build the argument vector for ``spec``, excluding the executable.

    Arguments are handed to the process without a shell, so values are never
    quoted or escaped here.

    Args:
        spec: Invocation to translate.

    Returns:
        Ordered list of arguments.
    """
    args: List[str] = []

    if spec.config_file_path is not None:
        args.append(f"--config={spec.config_file_path}")

    args.append(PARSABLE_FLAG)
    args.append(spec.subcommand.value)

    if spec.subcommand is Subcommand.LIST:
        return args

    if spec.output_mode is OutputMode.WRITE_TO_PATH:
        args.append(f"--path={spec.output_path or ''}")
    elif spec.output_mode is OutputMode.DRY_RUN:
        args.append(DRY_RUN_FLAG)
    else:
        args.append(LIST_VARS_FLAG)

    for key, value in spec.variables.items():
        args.append(f"-D{key}={value}")

    if spec.assert_empty_target:
        args.append(ASSERT_EMPTY_FLAG)

    args.append(spec.template_name or "")

    return args


def format_command(executable: str, args: Sequence[str]) -> str:
    """Render a command as a shell-quoted string for logs and diagnostics."""
    return shlex.join([executable, *args])
