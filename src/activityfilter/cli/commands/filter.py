"""
Filter Command

Run the condition engine over a file of feed entries and report which
entries would be kept or removed.
"""

import json
from pathlib import Path
from typing import Annotated, List, Optional

import typer
from rich.table import Table

from activityfilter.cli.error_handling import handle_error
from activityfilter.cli.utils import (
    console,
    handle_keyboard_interrupt,
    parse_link_options,
    parse_remove_options,
    parse_term_options,
    print_header,
    print_warnings,
    setup_logging,
)
from activityfilter.core.config.manager import ConfigManager
from activityfilter.core.exceptions import ActivityFilterError
from activityfilter.entries import load_entries
from activityfilter.feed.routing import DEFAULT_URL_PATTERNS
from activityfilter.feed.session import BatchResult, FeedSession


def filter_entries(
    entries_file: Annotated[Path, typer.Argument(help="JSON array or JSON-lines file of feed entries")],
    config: Annotated[Optional[str], typer.Option("--config", "-c", help="Configuration file path")] = None,
    url: Annotated[str, typer.Option("--url", help="Page URL the entries were loaded from")] = DEFAULT_URL_PATTERNS["home"],
    remove: Annotated[Optional[List[str]], typer.Option("--remove", "-r", help="Enable a removal condition (uncommented, unliked, text, images, videos)")] = None,
    contains: Annotated[Optional[List[str]], typer.Option("--contains", help="Remove entries containing this text; join terms with '+' to require all")] = None,
    link: Annotated[Optional[List[str]], typer.Option("--link", help="Linked condition group, e.g. 'images,videos'")] = None,
    reverse: Annotated[Optional[bool], typer.Option("--reverse/--no-reverse", help="Only keep entries the conditions would remove")] = None,
    case_sensitive: Annotated[Optional[bool], typer.Option("--case-sensitive/--case-insensitive", help="Case-sensitive string matching")] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print decisions as JSON")] = False,
    verbose: Annotated[Optional[bool], typer.Option("--verbose", "-v", help="Enable verbose output")] = None,
):
    """
    Decide for every entry in ENTRIES_FILE whether it is kept or removed.
    """
    setup_logging(bool(verbose))

    cli_args = {
        'verbose': verbose,
        'contains': parse_term_options(contains),
        'linked': parse_link_options(link),
        'reverse': reverse,
        'case_sensitive': case_sensitive,
        **parse_remove_options(remove),
    }

    try:
        manager = ConfigManager(config)
        app_config = manager.load_config(cli_args=cli_args)
        warnings = manager.validate_config(app_config)
        entries = load_entries(entries_file)

        session = FeedSession(app_config)
        result = session.handle_batch(url, entries)
    except ActivityFilterError as e:
        handle_error(e)
        return
    except KeyboardInterrupt:
        handle_keyboard_interrupt()
        return

    if result is None:
        if as_json:
            typer.echo(json.dumps({"url": url, "skipped": True}))
        else:
            console.print(f"[yellow]Filter does not run on {url} with the current runOn settings[/yellow]")
        return

    if as_json:
        typer.echo(json.dumps(_result_to_dict(result), indent=2))
        return

    print_header("Activity Feed Filter", f"{len(entries)} entries from {entries_file}")
    print_warnings(warnings)
    _print_result(result)


def _result_to_dict(result: BatchResult) -> dict:
    return {
        "url": result.url,
        "kept": len(result.kept),
        "removed": len(result.removed),
        "more_requested": result.more_requested,
        "decisions": [
            {"entry": entry.id, **decision.to_dict()}
            for entry, decision in result.decisions
        ],
    }


def _print_result(result: BatchResult) -> None:
    table = Table(title="Decisions", show_lines=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Entry", style="cyan")
    table.add_column("Decision")
    table.add_column("Reason")

    for index, (entry, decision) in enumerate(result.decisions, 1):
        verdict = "[red]remove[/red]" if decision.remove else "[green]keep[/green]"
        table.add_row(str(index), entry.id or "-", verdict, decision.reason)

    console.print(table)
    console.print(
        f"Kept [green]{len(result.kept)}[/green], removed [red]{len(result.removed)}[/red]"
    )
    if result.more_requested:
        console.print("[dim]Fewer entries kept than the target load count; more would be loaded[/dim]")
