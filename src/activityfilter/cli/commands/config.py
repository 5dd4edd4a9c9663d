"""
Config Command

Create, inspect and validate configuration files.
"""

import json
from pathlib import Path
from typing import Annotated, Optional

import typer
import yaml

from activityfilter.cli.error_handling import handle_error
from activityfilter.cli.utils import console, print_warnings, setup_logging
from activityfilter.core.config.manager import ConfigManager
from activityfilter.core.exceptions import ActivityFilterError

app = typer.Typer(
    name="config",
    help="Manage filter configuration",
    rich_markup_mode="rich",
    no_args_is_help=True,
)


@app.command("validate")
def validate_config(
    config: Annotated[Optional[str], typer.Option("--config", "-c", help="Configuration file path")] = None,
    strict: Annotated[bool, typer.Option("--strict", help="Treat warnings as errors")] = False,
):
    """Check a configuration file and report problems."""
    setup_logging()
    manager = ConfigManager(config)
    try:
        app_config = manager.load_config()
    except ActivityFilterError as e:
        handle_error(e)
        return

    warnings = manager.validate_config(app_config)
    print_warnings(warnings)

    if warnings and strict:
        console.print("[red]Configuration has warnings[/red]")
        raise typer.Exit(1)
    console.print("[green]Configuration is valid[/green]")


@app.command("show")
def show_config(
    config: Annotated[Optional[str], typer.Option("--config", "-c", help="Configuration file path")] = None,
):
    """Print the effective configuration after all layers are merged."""
    setup_logging()
    try:
        app_config = ConfigManager(config).load_config()
    except ActivityFilterError as e:
        handle_error(e)
        return

    typer.echo(yaml.safe_dump(app_config.model_dump(mode='json', by_alias=True), sort_keys=False))
    groups = app_config.options.linked_groups
    if groups:
        typer.echo("# linked groups:")
        for group in groups:
            typer.echo(f"#   {' AND '.join(sorted(name.value for name in group)) or '(empty group)'}")


@app.command("init")
def init_config(
    output: Annotated[Path, typer.Argument(help="File to write (.yaml or .json)")],
    profile: Annotated[str, typer.Option("--profile", "-p", help="Profile: default, media-free, discussions-only")] = "default",
    force: Annotated[bool, typer.Option("--force", "-f", help="Overwrite an existing file")] = False,
):
    """Write an example configuration file."""
    if output.exists() and not force:
        console.print(f"[red]{output} already exists; use --force to overwrite[/red]")
        raise typer.Exit(1)

    try:
        ConfigManager().create_example_config(output, profile=profile)
    except ActivityFilterError as e:
        handle_error(e)
        return
    console.print(f"[green]Wrote {profile} configuration to {output}[/green]")


@app.command("schema")
def config_schema(
    output: Annotated[Optional[Path], typer.Option("--output", "-o", help="Write the schema to this file")] = None,
):
    """Print the JSON schema of the configuration."""
    schema = ConfigManager().generate_schema(output)
    if output is None:
        typer.echo(json.dumps(schema, indent=2))
    else:
        console.print(f"[green]Wrote schema to {output}[/green]")
