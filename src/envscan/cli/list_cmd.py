# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""``envscan list`` and ``envscan get`` commands."""

from __future__ import annotations

import click
from rich.table import Table

from envscan.cli import cli, collect_values, console
from envscan.util import mask


@cli.command("list")
@click.option("--show-values", is_flag=True, help="Print values unmasked.")
@click.pass_context
def list_keys(ctx: click.Context, show_values: bool) -> None:
    """List variables defined by the env files."""
    values = collect_values(ctx)
    if not values:
        console.print("[yellow]No variables found.[/yellow]")
        return
    table = Table(title="Variables")
    table.add_column("Key", style="cyan")
    table.add_column("Value" if show_values else "Value (masked)", style="dim")
    for key, value in values.items():
        table.add_row(key, value if show_values else mask(value))
    console.print(table)


@cli.command()
@click.argument("key")
@click.pass_context
def get(ctx: click.Context, key: str) -> None:
    """Print a single value."""
    values = collect_values(ctx)
    if key not in values:
        raise click.ClickException(f"Key '{key}' not found.")
    click.echo(values[key])
