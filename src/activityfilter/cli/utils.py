"""
CLI Utilities

Shared utilities for CLI commands including logging setup, option parsing
and formatted output.
"""

import logging
from typing import Any, List, Optional

import typer
from rich.console import Console
from rich.panel import Panel

from activityfilter.core.conditions import parse_condition_names

console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Set up logging configuration for the application."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def parse_term_options(values: Optional[List[str]]) -> Optional[List[Any]]:
    """
    Convert repeated --contains options into term groups.

    'a+b' becomes the AND-group ['a', 'b']; a plain value stays a single term.
    """
    if not values:
        return None
    groups: List[Any] = []
    for value in values:
        terms = [term.strip() for term in value.split('+') if term.strip()]
        if not terms:
            raise typer.BadParameter(f"Empty term group: {value!r}")
        groups.append(terms[0] if len(terms) == 1 else terms)
    return groups


def parse_link_options(values: Optional[List[str]]) -> Optional[List[List[str]]]:
    """Convert repeated --link options ('images,videos') into linked groups."""
    if not values:
        return None
    groups = []
    for value in values:
        try:
            names = parse_condition_names(part for part in value.split(',') if part.strip())
        except ValueError as e:
            raise typer.BadParameter(str(e))
        groups.append([name.value for name in names])
    return groups


def parse_remove_options(values: Optional[List[str]]) -> dict:
    """Convert repeated --remove options into enabled structural conditions."""
    if not values:
        return {}
    try:
        names = parse_condition_names(values)
    except ValueError as e:
        raise typer.BadParameter(str(e))
    enabled = {}
    for name in names:
        if name.value == "containsStrings":
            raise typer.BadParameter("Use --contains to configure string conditions")
        enabled[name.value] = True
    return enabled


def print_header(title: str, subtitle: Optional[str] = None) -> None:
    """Print a formatted header for CLI output."""
    if subtitle:
        header_text = f"[bold cyan]{title}[/bold cyan]\n[dim]{subtitle}[/dim]"
    else:
        header_text = f"[bold cyan]{title}[/bold cyan]"

    console.print(Panel(header_text, border_style="cyan"))


def print_warnings(warnings: List[str]) -> None:
    """Print configuration warnings."""
    for warning in warnings:
        console.print(f"[yellow]Warning:[/yellow] {warning}")


def handle_keyboard_interrupt() -> None:
    """Handle keyboard interrupt gracefully."""
    console.print("\n[yellow]Operation cancelled by user[/yellow]")
    raise typer.Exit(1)
