"""devinit-client command line interface."""

import asyncio
import json
import sys
from pathlib import Path
from typing import Dict, NoReturn, Optional, Tuple

import click
import yaml
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax

from .. import __version__
from ..config import ConfigState, SettingsError, YamlConfigurationProvider
from ..runner import InputCancelled, ProcessInvoker, RunnerError
from ..templates import (
    ConsolePrompter,
    VariableResolver,
    fetch_catalog,
    match_template,
)
from .utils import build_template_table, parse_variable_options, setup_logging

console = Console()


def _load_state(ctx: click.Context) -> Tuple[YamlConfigurationProvider, ConfigState]:
    """Load user settings and build the shared invocation state."""
    try:
        provider = YamlConfigurationProvider(ctx.obj["settings_path"])
        state = ConfigState(provider)
    except SettingsError as e:
        console.print(f"❌ [red]Error loading settings:[/red] {escape(str(e))}")
        sys.exit(1)
    return provider, state


def _make_resolver(ctx: click.Context) -> VariableResolver:
    invoker = ProcessInvoker(timeout=ctx.obj["timeout"])
    return VariableResolver(ConsolePrompter(console), invoker)


def _fail(template_name: Optional[str], error: Exception) -> NoReturn:
    if template_name:
        console.print(
            f"❌ [red]Template[/red] [bold]{escape(template_name)}[/bold] "
            f"[red]failed:[/red] {escape(str(error))}"
        )
    else:
        console.print(f"❌ [red]Error:[/red] {escape(str(error))}")
    sys.exit(1)


def _cancelled() -> None:
    console.print("[dim]Cancelled, nothing was rendered.[/dim]")


@click.group()
@click.version_option(version=__version__, prog_name="devinit-client")
@click.option(
    "--settings",
    "settings_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to settings.yml (default: per-user app directory).",
)
@click.option(
    "--timeout",
    type=float,
    default=None,
    help="Seconds to wait for each devinit run before giving up.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--debug", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(
    ctx: click.Context,
    settings_path: Optional[Path],
    timeout: Optional[float],
    verbose: bool,
    debug: bool,
) -> None:
    """devinit-client - render devinit templates, prompting for variables."""
    ctx.ensure_object(dict)
    ctx.obj["settings_path"] = settings_path
    ctx.obj["timeout"] = timeout
    setup_logging(verbose=verbose, debug=debug)


@cli.command("templates")
@click.option("--project", is_flag=True, help="List project templates instead.")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.pass_context
def list_templates_command(ctx: click.Context, project: bool, output_format: str):
    """List templates known to devinit."""
    _, state = _load_state(ctx)
    invoker = ProcessInvoker(timeout=ctx.obj["timeout"])

    try:
        catalog = asyncio.run(fetch_catalog(state, invoker))
    except RunnerError as e:
        _fail(None, e)

    templates = catalog.project if project else catalog.file
    kind = "project" if project else "file"

    if output_format == "json":
        click.echo(json.dumps([t.model_dump() for t in templates], indent=2))
        return

    if not templates:
        console.print(f"[yellow]No {kind} templates found[/yellow]")
        return

    console.print(build_template_table(templates, title=f"Available {kind} templates"))


@cli.command("vars")
@click.argument("template_name")
@click.option(
    "--var",
    "variables",
    multiple=True,
    callback=parse_variable_options,
    metavar="KEY=VALUE",
    help="Variable value to treat as known. Repeatable.",
)
@click.option("--skip-defaults", is_flag=True, help="Ignore stored default values.")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.pass_context
def list_variables_command(
    ctx: click.Context,
    template_name: str,
    variables: Dict[str, str],
    skip_defaults: bool,
    output_format: str,
):
    """Show which variables TEMPLATE_NAME still needs."""
    provider, state = _load_state(ctx)
    resolver = _make_resolver(ctx)

    known: Dict[str, str] = {}
    if not skip_defaults:
        known.update(provider.get_default_variables(template_name))
    known.update(variables)

    try:
        remaining = asyncio.run(
            resolver.list_remaining_variables(state, template_name, known)
        )
    except RunnerError as e:
        _fail(template_name, e)

    if output_format == "json":
        click.echo(json.dumps(remaining, indent=2))
        return

    if not remaining:
        console.print(
            f"✅ [green]All variables of[/green] [bold]{escape(template_name)}"
            f"[/bold] [green]are defined[/green]"
        )
        return

    console.print(f"[bold]{escape(template_name)}[/bold] still needs:")
    for identifier in remaining:
        console.print(f"  • {escape(identifier)}")


@cli.command("render")
@click.argument("template_name")
@click.argument("output_path", type=click.Path(dir_okay=False), required=False)
@click.option(
    "--var",
    "variables",
    multiple=True,
    callback=parse_variable_options,
    metavar="KEY=VALUE",
    help="Variable value to use without prompting. Repeatable.",
)
@click.option("--skip-defaults", is_flag=True, help="Ignore stored default values.")
@click.option(
    "--assert-empty",
    is_flag=True,
    help="Only write if OUTPUT_PATH is absent or empty.",
)
@click.option(
    "--dry-run", is_flag=True, help="Print the rendered output instead of writing."
)
@click.pass_context
def render_command(
    ctx: click.Context,
    template_name: str,
    output_path: Optional[str],
    variables: Dict[str, str],
    skip_defaults: bool,
    assert_empty: bool,
    dry_run: bool,
):
    """Render TEMPLATE_NAME into OUTPUT_PATH, prompting for missing variables."""
    if output_path is None and not dry_run:
        raise click.UsageError("OUTPUT_PATH is required unless --dry-run is given")
    if output_path is not None and dry_run:
        raise click.UsageError("OUTPUT_PATH cannot be combined with --dry-run")

    provider, state = _load_state(ctx)
    resolver = _make_resolver(ctx)
    defaults = provider.get_default_variables(template_name)

    try:
        if dry_run:
            outcome = asyncio.run(
                resolver.preview(
                    state,
                    template_name,
                    stored_defaults=defaults,
                    skip_defaults=skip_defaults,
                    known_variables=variables,
                )
            )
        else:
            outcome = asyncio.run(
                resolver.resolve_and_render(
                    state,
                    template_name,
                    output_path,
                    stored_defaults=defaults,
                    skip_defaults=skip_defaults,
                    assert_empty_target=assert_empty,
                    known_variables=variables,
                )
            )
    except InputCancelled:
        _cancelled()
        return
    except RunnerError as e:
        _fail(template_name, e)

    if dry_run:
        click.echo(outcome.stdout, nl=False)
        return

    console.print(
        f"✅ [green]Rendered[/green] [bold]{escape(template_name)}[/bold] "
        f"[green]into[/green] {escape(output_path)}"
    )


def _discard(path: Path, created: bool) -> None:
    """Remove a file that `new` created if nothing was rendered into it."""
    if created and path.is_file() and path.stat().st_size == 0:
        path.unlink()


@cli.command("new")
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--skip-defaults", is_flag=True, help="Ignore stored default values.")
@click.pass_context
def new_file_command(ctx: click.Context, path: Path, skip_defaults: bool):
    """Create PATH and fill it from its associated template.

    The template is chosen from automation.template_associations in the
    settings file. An existing non-empty file is never overwritten.
    """
    provider, state = _load_state(ctx)

    template_name = match_template(path, provider.get_template_associations())
    if template_name is None:
        console.print(
            f"[yellow]No template is associated with {escape(str(path))}[/yellow]"
        )
        sys.exit(1)

    created = not path.exists()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.touch(exist_ok=True)

    resolver = _make_resolver(ctx)
    try:
        asyncio.run(
            resolver.resolve_and_render(
                state,
                template_name,
                str(path),
                stored_defaults=provider.get_default_variables(template_name),
                skip_defaults=skip_defaults,
                assert_empty_target=True,
            )
        )
    except InputCancelled:
        _discard(path, created)
        _cancelled()
        return
    except RunnerError as e:
        _discard(path, created)
        _fail(template_name, e)

    console.print(
        f"✅ [green]Created[/green] {escape(str(path))} "
        f"[green]from[/green] [bold]{escape(template_name)}[/bold]"
    )


@cli.group("config")
def config_group() -> None:
    """Settings commands."""
    pass


@config_group.command("show")
@click.pass_context
def show_config(ctx: click.Context) -> None:
    """Show the effective settings."""
    provider, state = _load_state(ctx)

    console.print(f"[dim]Settings file:[/dim] {escape(str(provider.path))}")
    console.print(
        f"[dim]Executable:[/dim] "
        f"{escape(state.settings.executable_path or '(search PATH)')}"
    )
    console.print(
        f"[dim]Configuration file:[/dim] "
        f"{escape(state.settings.config_file_path or '(devinit default)')}\n"
    )

    content = yaml.safe_dump(provider.settings.model_dump(), sort_keys=False)
    console.print(Syntax(content, "yaml", theme="monokai"))


if __name__ == "__main__":
    cli()
