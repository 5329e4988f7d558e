"""CLI entry point for the brand signal engine."""

from __future__ import annotations

import click

from brandsignal.cli.commands import analyze


@click.group()
def cli() -> None:
    """Brand signal extraction engine."""


cli.add_command(analyze)
