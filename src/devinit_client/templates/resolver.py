"""Resolve template variables and dispatch the final render.

A resolution runs strictly in sequence:

1. Seed the known variables from stored defaults and caller-supplied values.
2. Ask the generator tool which variables are still unspecified.
3. Prompt for each remaining variable, in the order the tool reported them.
4. Merge the answers over the known variables.
5. Run the render (or a dry run) with the merged variables.

A dismissed prompt aborts the whole resolution with ``InputCancelled``;
nothing is rendered from a partial set of answers.
"""

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping, Optional

from ..config.state import ConfigState
from ..runner.errors import InputCancelled, MalformedOutputError, RunnerError
from ..runner.invoker import ProcessInvoker
from ..runner.models import ExecutionOutcome, InvocationSpec, OutputMode, Subcommand
from .prompts import Prompter

logger = logging.getLogger(__name__)


class ResolutionStage(str, Enum):
    """Progress of a single resolution."""

    START = "start"
    LISTING_VARIABLES = "listing_variables"
    PROMPTING = "prompting"
    MERGING = "merging"
    DISPATCHING = "dispatching"
    DONE = "done"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass
class VariableResolutionState:
    """Working state of one resolution. Never persisted."""

    template_name: str
    known_variables: Dict[str, str] = field(default_factory=dict)
    remaining_identifiers: List[str] = field(default_factory=list)
    collected_answers: Dict[str, str] = field(default_factory=dict)
    merged_variables: Dict[str, str] = field(default_factory=dict)
    stage: ResolutionStage = ResolutionStage.START

    def advance(self, stage: ResolutionStage) -> None:
        logger.debug(f"[{self.template_name}] {self.stage.value} -> {stage.value}")
        self.stage = stage


def merge_variables(
    known_variables: Mapping[str, str], answers: Mapping[str, str]
) -> Dict[str, str]:
    """Combine known variables with prompt answers.

    Answers always take precedence over known values for the same key.
    Known variables keep their order and new answers follow in prompt order.
    """
    merged = dict(known_variables)
    for identifier, value in answers.items():
        merged[identifier] = value
    return merged


def parse_variable_list(stdout: str) -> List[str]:
    """Parse the JSON array printed by ``--list-vars``.

    Raises:
        MalformedOutputError: If stdout is not a JSON array of strings
    """
    try:
        data = json.loads(stdout)
    except json.JSONDecodeError as e:
        raise MalformedOutputError(
            f"Variable list is not valid JSON: {e}", stdout=stdout
        ) from e

    if not isinstance(data, list) or not all(isinstance(v, str) for v in data):
        raise MalformedOutputError(
            "Variable list must be a JSON array of strings", stdout=stdout
        )
    return data


class VariableResolver:
    """Fills in template variables and renders file templates."""

    def __init__(self, prompter: Prompter, invoker: Optional[ProcessInvoker] = None):
        """Initialize the resolver.

        Args:
            prompter: Asks the user for each unspecified variable
            invoker: Runs the generator tool
        """
        self.prompter = prompter
        self.invoker = invoker or ProcessInvoker()

    async def list_remaining_variables(
        self,
        config: ConfigState,
        template_name: str,
        known_variables: Optional[Mapping[str, str]] = None,
    ) -> List[str]:
        """Ask the tool which variables of ``template_name`` are still unset.

        Returns:
            Variable identifiers in first-occurrence order within the template
        """
        spec = config.new_invocation_spec().model_copy(
            update={
                "subcommand": Subcommand.FILE,
                "output_mode": OutputMode.LIST_VARIABLES,
                "template_name": template_name,
                "variables": dict(known_variables or {}),
            }
        )
        outcome = await self.invoker.run(spec)
        return parse_variable_list(outcome.stdout)

    async def _resolve(
        self,
        config: ConfigState,
        template_name: str,
        stored_defaults: Optional[Mapping[str, str]],
        skip_defaults: bool,
        known_variables: Optional[Mapping[str, str]],
    ) -> VariableResolutionState:
        state = VariableResolutionState(template_name=template_name)

        if not skip_defaults and stored_defaults:
            state.known_variables.update(stored_defaults)
        if known_variables:
            state.known_variables.update(known_variables)

        state.advance(ResolutionStage.LISTING_VARIABLES)
        try:
            state.remaining_identifiers = await self.list_remaining_variables(
                config, template_name, state.known_variables
            )
        except RunnerError:
            state.advance(ResolutionStage.FAILED)
            logger.error(f"Could not list variables for template '{template_name}'")
            raise

        logger.info(
            f"Template '{template_name}' needs {len(state.remaining_identifiers)} "
            f"more variable(s)"
        )

        for identifier in state.remaining_identifiers:
            state.advance(ResolutionStage.PROMPTING)
            value = await self.prompter.prompt_for_value(identifier)
            if value is None:
                state.advance(ResolutionStage.CANCELLED)
                state.collected_answers.clear()
                raise InputCancelled(identifier)
            state.collected_answers[identifier] = value

        state.advance(ResolutionStage.MERGING)
        state.merged_variables = merge_variables(
            state.known_variables, state.collected_answers
        )
        return state

    async def _dispatch(
        self, state: VariableResolutionState, spec: InvocationSpec
    ) -> ExecutionOutcome:
        state.advance(ResolutionStage.DISPATCHING)
        try:
            outcome = await self.invoker.run(spec)
        except RunnerError:
            state.advance(ResolutionStage.FAILED)
            logger.error(f"Could not render template '{state.template_name}'")
            raise
        state.advance(ResolutionStage.DONE)
        return outcome

    async def resolve_variables(
        self,
        config: ConfigState,
        template_name: str,
        stored_defaults: Optional[Mapping[str, str]] = None,
        skip_defaults: bool = False,
        known_variables: Optional[Mapping[str, str]] = None,
    ) -> Dict[str, str]:
        """Work out the complete variable set for ``template_name``.

        Args:
            config: Shared invocation configuration
            template_name: File template to resolve
            stored_defaults: Stored default values for this template
            skip_defaults: Ignore ``stored_defaults`` entirely
            known_variables: Caller-supplied values; these override defaults

        Returns:
            Merged variables, ready to render with

        Raises:
            InputCancelled: If any prompt is dismissed
            RunnerError: If listing the remaining variables fails
        """
        state = await self._resolve(
            config, template_name, stored_defaults, skip_defaults, known_variables
        )
        state.advance(ResolutionStage.DONE)
        return state.merged_variables

    def _render_spec(
        self,
        config: ConfigState,
        template_name: str,
        output_path: str,
        variables: Mapping[str, str],
        assert_empty_target: bool,
    ) -> InvocationSpec:
        return config.new_invocation_spec().model_copy(
            update={
                "subcommand": Subcommand.FILE,
                "output_mode": OutputMode.WRITE_TO_PATH,
                "output_path": output_path,
                "template_name": template_name,
                "variables": dict(variables),
                "assert_empty_target": assert_empty_target,
            }
        )

    async def render(
        self,
        config: ConfigState,
        template_name: str,
        output_path: str,
        variables: Mapping[str, str],
        assert_empty_target: bool = False,
    ) -> ExecutionOutcome:
        """Render ``template_name`` into ``output_path`` without prompting."""
        spec = self._render_spec(
            config, template_name, output_path, variables, assert_empty_target
        )
        return await self.invoker.run(spec)

    async def resolve_and_render(
        self,
        config: ConfigState,
        template_name: str,
        output_path: str,
        stored_defaults: Optional[Mapping[str, str]] = None,
        skip_defaults: bool = False,
        assert_empty_target: bool = False,
        known_variables: Optional[Mapping[str, str]] = None,
    ) -> ExecutionOutcome:
        """Prompt for any unspecified variables, then render into ``output_path``.

        Raises:
            InputCancelled: If any prompt is dismissed; nothing is rendered
            RunnerError: If listing variables or rendering fails
        """
        state = await self._resolve(
            config, template_name, stored_defaults, skip_defaults, known_variables
        )
        logger.info(f"Rendering '{template_name}' into {output_path}")
        spec = self._render_spec(
            config,
            template_name,
            output_path,
            state.merged_variables,
            assert_empty_target,
        )
        return await self._dispatch(state, spec)

    async def preview(
        self,
        config: ConfigState,
        template_name: str,
        stored_defaults: Optional[Mapping[str, str]] = None,
        skip_defaults: bool = False,
        known_variables: Optional[Mapping[str, str]] = None,
    ) -> ExecutionOutcome:
        """Resolve variables like ``resolve_and_render`` but only dry-run.

        The rendered text is in the returned stdout; nothing is written.
        """
        state = await self._resolve(
            config, template_name, stored_defaults, skip_defaults, known_variables
        )
        spec = config.new_invocation_spec().model_copy(
            update={
                "subcommand": Subcommand.FILE,
                "output_mode": OutputMode.DRY_RUN,
                "template_name": template_name,
                "variables": dict(state.merged_variables),
            }
        )
        return await self._dispatch(state, spec)
