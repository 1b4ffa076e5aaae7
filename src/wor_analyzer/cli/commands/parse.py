"""Parse command: batch-parse a complete server log."""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn
from rich.table import Table

from wor_analyzer.config.settings import ParserSettings, resolve_settings
from wor_analyzer.engine.interpreter import ParseResult, parse_log
from wor_analyzer.ingestion.file_reader import FileReader
from wor_analyzer.reporting.snapshot import format_clock, result_to_dict

console = Console()

STATUS_COLORS = {"Complete": "green", "Incomplete": "yellow", "Pseudo": "magenta"}


def parse(
    path: str = typer.Argument(help="Path to a server log file"),
    config: str = typer.Option("", help="JSON parsing config. Env: WOR_PARSING_CONFIG"),
    idle_gap: int = typer.Option(0, help="Idle gap seconds before a pseudo-round. Env: WOR_IDLE_GAP_SECONDS"),
    json_out: str = typer.Option("", "--json", help="Write the full result as JSON to this file"),
    rounds: bool = typer.Option(True, help="Show the per-round table"),
) -> None:
    """Parse a complete log file into rounds, respawns, and sessions."""
    p = Path(path)
    if not p.is_file():
        console.print(f"[red]Path not found: {path}[/red]")
        raise typer.Exit(1)

    try:
        settings = resolve_settings(config, idle_gap)
        result = _parse_file(str(p), settings)
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    _print_summary(p.name, result)
    if rounds and result.rounds:
        _print_rounds(result)
    _print_warnings(result)

    if json_out:
        Path(json_out).write_text(json.dumps(result_to_dict(result), indent=2), encoding="utf-8")
        console.print(f"[dim]Wrote {json_out}[/dim]")


def _parse_file(file_path: str, settings: ParserSettings) -> ParseResult:
    reader = FileReader(file_path)
    text = reader.read_text()

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
    ) as progress:
        task = progress.add_task(f"Parsing {reader.metadata.file_name}...", total=None)

        def on_progress(current: int, total: int) -> None:
            progress.update(task, completed=current, total=total)

        return parse_log(text, on_progress=on_progress, settings=settings)


def _print_summary(file_name: str, result: ParseResult) -> None:
    stats = result.stats
    table = Table(title=f"Log Summary: {file_name}")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Respawns", f"{stats.total_respawns:,}")
    table.add_row("Rounds", str(stats.total_rounds))
    table.add_row("Maps", ", ".join(stats.maps) or "-")
    table.add_row("Distinct players", str(stats.players))
    table.add_row("Distinct regiments", str(stats.regiments))
    table.add_row("Player sessions", str(len(result.player_sessions)))
    table.add_row("Warnings", str(len(result.warnings)))
    console.print(table)


def _print_rounds(result: ParseResult) -> None:
    table = Table(title=f"Rounds ({len(result.rounds)})")
    table.add_column("#", justify="right")
    table.add_column("Map")
    table.add_column("Rules")
    table.add_column("Start")
    table.add_column("End")
    table.add_column("Status", style="bold")
    table.add_column("Winner")
    table.add_column("Respawns", justify="right")

    for rnd in result.rounds:
        color = STATUS_COLORS.get(rnd.status.value, "white")
        table.add_row(
            str(rnd.id),
            rnd.map,
            rnd.game_rules or "-",
            format_clock(rnd.start_time),
            format_clock(rnd.end_time),
            f"[{color}]{rnd.status.value}[/{color}]",
            rnd.winner.value if rnd.winner is not None else "-",
            str(len(rnd.respawns)),
        )
    console.print(table)


def _print_warnings(result: ParseResult) -> None:
    if not result.warnings:
        console.print("[green]No warnings.[/green]")
        return
    console.print(f"[bold yellow]Warnings ({len(result.warnings)})[/bold yellow]")
    for warning in result.warnings:
        console.print(f"  [yellow]{warning.type.value}[/yellow] {escape(warning.message)}")
