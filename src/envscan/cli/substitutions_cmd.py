# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""``envscan substitutions`` command."""

from __future__ import annotations

from importlib.metadata import entry_points

import click
from rich.table import Table

from envscan.cli import cli, console
from envscan.substitutions import ENTRY_POINT_GROUP


@cli.command()
@click.pass_context
def substitutions(ctx: click.Context) -> None:
    """List registered substitution handlers, marking the enabled ones."""
    enabled = [] if ctx.obj["no_substitute"] else ctx.obj["config"].substitutions
    table = Table(title="Substitutions")
    table.add_column("Name", style="cyan")
    table.add_column("Enabled", style="green")
    table.add_column("Description", style="white")

    for ep in sorted(entry_points(group=ENTRY_POINT_GROUP), key=lambda e: e.name):
        handler_cls = ep.load()
        order = f"#{enabled.index(ep.name) + 1}" if ep.name in enabled else ""
        table.add_row(ep.name, order, handler_cls.description)

    console.print(table)
