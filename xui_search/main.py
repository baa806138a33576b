#!/usr/bin/env python3
"""
Main CLI entry point for xui-search
"""

import asyncio
import json

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from xui_search import __version__
from xui_search.config.constants import MIN_QUERY_LENGTH
from xui_search.config.settings import (
    PanelSettings,
    get_env_info,
    load_settings,
    validate_all_env_vars,
)
from xui_search.exceptions import ConfigurationError, RemoteFailure
from xui_search.models.results import ClientMatch, InboundMatch, ResultEntry
from xui_search.search.engine import SearchEngine
from xui_search.services.record_store import RecordStore
from xui_search.utils.logging_utils import setup_cli_logging, setup_tui_logging

console = Console()

app = typer.Typer(help="Search inbounds and clients of an x-ui style panel.")

_state = {"verbose": False}


def _settings() -> PanelSettings:
    try:
        return load_settings()
    except ConfigurationError as e:
        console.print(f"❌ {e}", style="red")
        raise typer.Exit(1) from e


def _entry_to_dict(entry: ResultEntry) -> dict:
    if isinstance(entry, InboundMatch):
        return {
            "type": entry.kind.value,
            "id": entry.id,
            "remark": entry.remark_display,
            "protocol": entry.protocol,
            "port": entry.port,
            "matched_fields": list(entry.matched_fields),
        }
    return {
        "type": entry.kind.value,
        "inbound_id": entry.parent_inbound_id,
        "inbound_remark": entry.parent_inbound_remark,
        "label": entry.client_label,
        "client_id": entry.client_id,
        "matched_fields": list(entry.matched_fields),
    }


def _results_table(query: str, results: list[ResultEntry]) -> Table:
    table = Table(title=escape(f"Results for {query!r}"))
    table.add_column("Type", style="cyan")
    table.add_column("Match")
    table.add_column("Details", style="dim")
    table.add_column("Matched on", style="magenta")
    table.add_column("Inbound", justify="right")
    for entry in results:
        if isinstance(entry, ClientMatch):
            details = f"inbound: {entry.parent_inbound_remark}"
        else:
            details = f"{entry.protocol} | port: {entry.port}"
        table.add_row(
            entry.kind.value,
            entry.highlighted_text,
            escape(details),
            ", ".join(entry.matched_fields),
            str(entry.target_id),
        )
    return table


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """
    xui-search - find inbounds and clients on a proxy panel

    [bold]Examples:[/bold]

    Open the search TUI:
        [cyan]xui-search tui[/cyan]

    Search once and print a table:
        [cyan]xui-search find alice[/cyan]
    """
    _state["verbose"] = verbose


@app.command()
def version():
    """Show xui-search version"""
    typer.echo(f"xui-search version {__version__}")


@app.command()
def tui():
    """Open the interactive search (Ctrl+F or / to search, Esc to close)."""
    from xui_search.ui.app import create_app

    settings = _settings()
    log_level = "DEBUG" if _state["verbose"] else settings.log_level
    setup_tui_logging(log_level)

    try:
        create_app(settings).run()
    except KeyboardInterrupt:
        pass


@app.command()
def find(
    query: str = typer.Argument(..., help="Text to look for in remarks, protocols, ports and clients"),
    as_json: bool = typer.Option(False, "--json", help="Print results as JSON"),
):
    """Run one search against the panel and print the results."""
    settings = _settings()
    setup_cli_logging("DEBUG" if _state["verbose"] else settings.log_level)

    if len(query) < MIN_QUERY_LENGTH:
        console.print(f"Query must be at least {MIN_QUERY_LENGTH} characters", style="yellow")
        raise typer.Exit(1)

    store = RecordStore(settings)
    try:
        results = asyncio.run(SearchEngine(store).run_cycle(query))
    finally:
        store.close()

    if as_json:
        typer.echo(json.dumps([_entry_to_dict(entry) for entry in results], indent=2))
        return

    if not results:
        console.print("No results", style="dim")
        return
    console.print(_results_table(query, results))


@app.command()
def dump():
    """Print the raw inbound list returned by the panel."""
    settings = _settings()
    setup_cli_logging("DEBUG" if _state["verbose"] else settings.log_level)

    store = RecordStore(settings)
    try:
        inbounds = asyncio.run(store.fetch_raw())
    except RemoteFailure as e:
        console.print(f"❌ {e}", style="red")
        raise typer.Exit(1) from e
    finally:
        store.close()

    typer.echo(json.dumps(inbounds, indent=2, ensure_ascii=False))


@app.command()
def env():
    """Show XUI_* environment variables and whether they are valid."""
    table = Table(title="Environment")
    table.add_column("Variable", style="cyan")
    table.add_column("Value")
    table.add_column("Default", style="dim")
    table.add_column("Valid")
    for name, info in get_env_info().items():
        table.add_row(
            name,
            escape(info["value"]) if info["is_set"] else "[dim]unset[/dim]",
            str(info["default"]),
            "✅" if info["valid"] else "❌",
        )
    console.print(table)
    for error in validate_all_env_vars():
        console.print(f"❌ {escape(error)}", style="red")


def run():
    app()


if __name__ == "__main__":
    run()
