#!/usr/bin/env python3
"""
ActivityFilter CLI Main Application

Typer-based command-line interface for running the feed filter over entry
files and managing its configuration.
"""

import sys
from typing import Optional

import typer
from rich.console import Console

from activityfilter.cli import __version__
from activityfilter.cli.commands import config, filter as filter_command

console = Console()

app = typer.Typer(
    name="activityfilter",
    help="Keep or discard activity-feed entries with configurable conditions",
    context_settings={"help_option_names": ["-h", "--help"]},
    rich_markup_mode="rich",
    no_args_is_help=True,
)

app.command("filter", help="Filter a file of feed entries")(filter_command.filter_entries)
app.add_typer(config.app, name="config", help="Manage filter configuration")


def version_callback(value: bool):
    """Show version information."""
    if value:
        console.print(f"[bold cyan]ActivityFilter[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit()


@app.callback()
def app_callback(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version information and exit"
    ),
):
    """
    ActivityFilter - control the content displayed in your activity feeds

    [bold]Quick Start:[/bold]

    • Create a config: [cyan]activityfilter config init activityfilter.yaml[/cyan]
    • Filter entries: [cyan]activityfilter filter entries.json --remove uncommented[/cyan]
    • Keep only matches: [cyan]activityfilter filter entries.json --contains spoiler --reverse[/cyan]
    """
    pass


def main():
    """Entry point for the activityfilter console script."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(1)


if __name__ == "__main__":
    main()
