"""Query the generator tool for available templates."""

import json
import logging
from typing import List, Optional

from pydantic import ValidationError

from ..config.state import ConfigState
from ..runner.errors import MalformedOutputError
from ..runner.invoker import ProcessInvoker
from ..runner.models import Subcommand, TemplateCatalog, TemplateDescriptor

logger = logging.getLogger(__name__)


def parse_catalog(stdout: str) -> TemplateCatalog:
    """Parse the JSON printed by ``devinit --parsable list``.

    Raises:
        MalformedOutputError: If stdout is not JSON of the expected shape
    """
    try:
        data = json.loads(stdout)
    except json.JSONDecodeError as e:
        raise MalformedOutputError(
            f"Template list is not valid JSON: {e}", stdout=stdout
        ) from e

    if not isinstance(data, dict):
        raise MalformedOutputError(
            f"Template list must be a JSON object, got {type(data).__name__}",
            stdout=stdout,
        )

    try:
        return TemplateCatalog(**data)
    except ValidationError as e:
        raise MalformedOutputError(
            f"Template list has an unexpected shape:\n{e}", stdout=stdout
        ) from e


async def fetch_catalog(
    config: ConfigState, invoker: Optional[ProcessInvoker] = None
) -> TemplateCatalog:
    """Run the ``list`` subcommand and parse both template collections."""
    invoker = invoker or ProcessInvoker()
    spec = config.new_invocation_spec().model_copy(
        update={"subcommand": Subcommand.LIST}
    )
    outcome = await invoker.run(spec)
    catalog = parse_catalog(outcome.stdout)
    logger.info(
        f"Found {len(catalog.file)} file and {len(catalog.project)} project templates"
    )
    return catalog


async def list_templates(
    config: ConfigState, invoker: Optional[ProcessInvoker] = None
) -> List[TemplateDescriptor]:
    """List the file templates known to the generator tool."""
    return (await fetch_catalog(config, invoker)).file


async def list_project_templates(
    config: ConfigState, invoker: Optional[ProcessInvoker] = None
) -> List[TemplateDescriptor]:
    """List the project templates known to the generator tool."""
    return (await fetch_catalog(config, invoker)).project
