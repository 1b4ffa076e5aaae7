"""Typer CLI application."""

import typer

from wor_analyzer.cli.commands.parse import parse
from wor_analyzer.cli.commands.watch import watch
from wor_analyzer.cli.commands.classify import classify, patterns

app = typer.Typer(
    name="wor-analyzer",
    help="War of Rights Server Log Analyzer",
    no_args_is_help=True,
)

app.command()(parse)
app.command()(watch)
app.command()(classify)
app.command()(patterns)
