"""Template catalog queries and variable resolution."""

from .associations import match_template
from .catalog import fetch_catalog, list_project_templates, list_templates, parse_catalog
from .prompts import ConsolePrompter, Prompter
from .resolver import (
    ResolutionStage,
    VariableResolutionState,
    VariableResolver,
    merge_variables,
    parse_variable_list,
)

__all__ = [
    "fetch_catalog",
    "list_templates",
    "list_project_templates",
    "parse_catalog",
    "Prompter",
    "ConsolePrompter",
    "VariableResolver",
    "VariableResolutionState",
    "ResolutionStage",
    "merge_variables",
    "parse_variable_list",
    "match_template",
]
