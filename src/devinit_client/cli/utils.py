"""CLI utility functions for devinit-client."""

import logging
import os
import sys
from typing import Dict, Iterable, Optional, Sequence

import click
from rich.markup import escape
from rich.table import Table

from ..runner.models import TemplateDescriptor

LOG_LEVEL_ENV_VAR = "DEVINIT_CLIENT_LOG_LEVEL"

_FMT_MINIMAL = "%(message)s"
_FMT_VERBOSE = "%(asctime)s [%(name)s] %(message)s"
_FMT_DEBUG = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s"
_DATEFMT = "%H:%M:%S"


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure process logging once, writing to stderr.

    Level precedence: ``--debug`` > ``--verbose`` > ``$DEVINIT_CLIENT_LOG_LEVEL``
    > WARNING.
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        name = os.environ.get(LOG_LEVEL_ENV_VAR, "WARNING").upper()
        level = getattr(logging, name, logging.WARNING)
        if not isinstance(level, int):
            level = logging.WARNING

    if level <= logging.DEBUG:
        fmt = _FMT_DEBUG
    elif level <= logging.INFO:
        fmt = _FMT_VERBOSE
    else:
        fmt = _FMT_MINIMAL

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt, datefmt=_DATEFMT))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def parse_variable_options(
    ctx: Optional[click.Context], param: Optional[click.Parameter], values: Sequence[str]
) -> Dict[str, str]:
    """Click callback turning repeated ``--var KEY=VALUE`` options into a dict.

    Later options win for a repeated key. Values may contain ``=``.
    """
    variables: Dict[str, str] = {}
    for item in values:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(
                f"'{item}' is not in KEY=VALUE form", ctx=ctx, param=param
            )
        variables[key] = value
    return variables


def build_template_table(
    templates: Iterable[TemplateDescriptor], title: str
) -> Table:
    """Create a rich table listing templates by name and source."""
    table = Table(title=title)
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Source", style="dim")

    for template in templates:
        table.add_row(escape(template.name), escape(template.source))

    return table
