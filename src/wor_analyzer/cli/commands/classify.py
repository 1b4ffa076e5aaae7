"""Classify and patterns commands: inspect the regiment rule set."""

from __future__ import annotations

from typing import List

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from wor_analyzer.classification.regiment_classifier import RegimentClassifier
from wor_analyzer.config.settings import resolve_settings

console = Console()


def classify(
    names: List[str] = typer.Argument(help="Player display names to classify"),
    config: str = typer.Option("", help="JSON parsing config. Env: WOR_PARSING_CONFIG"),
) -> None:
    """Show the regiment each player name resolves to, and which rule matched."""
    try:
        classifier = RegimentClassifier(resolve_settings(config).regiment_patterns)
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    table = Table(title="Regiment Classification")
    table.add_column("Player")
    table.add_column("Regiment", style="cyan")
    table.add_column("Rule", style="dim")

    for name in names:
        match = classifier.match_rule(name)
        table.add_row(
            escape(name),
            classifier.classify(name),
            match[0].name if match is not None else "-",
        )
    console.print(table)


def patterns(
    config: str = typer.Option("", help="JSON parsing config. Env: WOR_PARSING_CONFIG"),
) -> None:
    """List the regiment rules in priority order."""
    try:
        settings = resolve_settings(config)
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    table = Table(title=f"Regiment Rules (idle gap {settings.idle_gap_seconds}s)")
    table.add_column("#", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Pattern")
    table.add_column("Group", justify="right")
    table.add_column("Normalize")

    for i, rule in enumerate(settings.regiment_patterns, start=1):
        table.add_row(
            str(i),
            rule.name,
            rule.pattern,
            str(rule.extract_group) if rule.extract_group is not None else "1",
            rule.normalize or "-",
        )
    console.print(table)
