"""Data models for generator tool invocations."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Subcommand(str, Enum):
    """Subcommands understood by the generator tool."""

    LIST = "list"
    FILE = "file"
    PROJECT = "project"


class OutputMode(str, Enum):
    """What a file or project invocation should produce."""

    WRITE_TO_PATH = "write_to_path"
    DRY_RUN = "dry_run"
    LIST_VARIABLES = "list_variables"


class InvocationSpec(BaseModel):
    """Immutable description of one generator tool command.

    Instances are seeded by ``ConfigState.new_invocation_spec()`` and
    customised with ``model_copy(update=...)``.

    Attributes:
        executable_path: Path to the generator tool. Empty means discover it
            on PATH.
        config_file_path: devinitrc file to pass to the tool, if any.
        subcommand: Which subcommand to run.
        output_mode: Output flag to emit. Ignored for ``Subcommand.LIST``.
        output_path: Destination for ``OutputMode.WRITE_TO_PATH``.
        template_name: Template to operate on. Ignored for ``Subcommand.LIST``.
        variables: Variable bindings, emitted in insertion order.
        assert_empty_target: Ask the tool to only write into an absent or
            empty destination.
    """

    model_config = ConfigDict(frozen=True)

    executable_path: str = ""
    config_file_path: Optional[str] = None
    subcommand: Subcommand = Subcommand.FILE
    output_mode: OutputMode = OutputMode.WRITE_TO_PATH
    output_path: Optional[str] = None
    template_name: Optional[str] = None
    variables: Dict[str, str] = Field(default_factory=dict)
    assert_empty_target: bool = False


@dataclass
class ExecutionOutcome:
    """Captured output of a generator tool run that exited cleanly."""

    stdout: str
    stderr: str


class TemplateDescriptor(BaseModel):
    """A template known to the generator tool."""

    model_config = ConfigDict(frozen=True)

    name: str
    source: str


class TemplateCatalog(BaseModel):
    """Parsed output of the ``list`` subcommand."""

    file: List[TemplateDescriptor]
    project: List[TemplateDescriptor]
