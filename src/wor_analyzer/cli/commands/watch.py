"""Watch command: live-tail a server log as it is written."""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from wor_analyzer.config.settings import resolve_settings
from wor_analyzer.engine.interpreter import ChunkResult, LogInterpreter
from wor_analyzer.monitor.tailer import LogTailer
from wor_analyzer.reporting.snapshot import chunk_result_to_dict, format_clock
from wor_analyzer.segmentation.models import SessionAction

console = Console()


def watch(
    path: str = typer.Argument(help="Path to the server log to follow"),
    poll_interval: float = typer.Option(1.0, help="Seconds between file checks"),
    from_start: bool = typer.Option(True, "--from-start/--from-end", help="Replay existing content before following"),
    config: str = typer.Option("", help="JSON parsing config. Env: WOR_PARSING_CONFIG"),
    idle_gap: int = typer.Option(0, help="Idle gap seconds before a pseudo-round. Env: WOR_IDLE_GAP_SECONDS"),
    json_lines: bool = typer.Option(False, "--json", help="Print each update as one JSON line"),
) -> None:
    """Follow a log file and print respawns, sessions, and warnings live."""
    if not Path(path).is_file():
        console.print(f"[red]Path not found: {path}[/red]")
        raise typer.Exit(1)

    try:
        settings = resolve_settings(config, idle_gap)
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    tailer = LogTailer(path, LogInterpreter(settings), from_start=from_start)
    tailer.start()
    if not json_lines:
        console.print(f"[bold]Watching {path}[/bold] [dim](Ctrl+C to stop)[/dim]")

    on_update = _print_json_update if json_lines else _print_update
    try:
        tailer.run(on_update=on_update, poll_interval=poll_interval)
    except KeyboardInterrupt:
        tailer.stop()

    if json_lines:
        return

    state = tailer.interpreter.get_state()
    console.print(
        f"\nStopped. {state.stats.total_respawns:,} respawns in "
        f"{state.stats.total_rounds} rounds, {len(state.warnings)} warnings."
    )


def _print_json_update(result: ChunkResult) -> None:
    typer.echo(json.dumps(chunk_result_to_dict(result)))


def _print_update(result: ChunkResult) -> None:
    for session in result.new_player_sessions:
        verb = "joined" if session.action == SessionAction.JOIN else "left"
        console.print(f"[dim]{format_clock(session.time)}[/dim] {escape(session.player)} {verb}")
    for event in result.new_events:
        console.print(
            f"[dim]{format_clock(event.time)}[/dim] [cyan]{event.regiment}[/cyan] "
            f"{escape(event.player)} respawned (round {event.round_id}, {event.map})"
        )
    for warning in result.new_warnings:
        console.print(f"[yellow]{warning.type.value}[/yellow] {escape(warning.message)}")
