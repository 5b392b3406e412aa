# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""``envscan check`` command."""

from __future__ import annotations

import click

from envscan.cli import cli, console, resolve_paths
from envscan.env_file import parse_env_file
from envscan.parser import FormatError


@cli.command()
@click.pass_context
def check(ctx: click.Context) -> None:
    """Validate env files without running any substitutions.

    Exits with status 1 if any file is missing or malformed.
    """
    encoding = ctx.obj["config"].encoding
    failures = 0
    for path in resolve_paths(ctx):
        if not path.is_file():
            console.print(f"[red]MISSING[/red] {path}", soft_wrap=True)
            failures += 1
            continue
        try:
            env = parse_env_file(path, encoding=encoding)
        except FormatError as e:
            console.print(f"[red]FAIL[/red] {e}", soft_wrap=True)
            failures += 1
            continue
        console.print(f"[green]OK[/green] {path} ({len(env)} variable(s))", soft_wrap=True)
    if failures:
        ctx.exit(1)
