# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""``envscan export`` command."""

from __future__ import annotations

import json
from pathlib import Path

import click

from envscan.cli import cli, collect_values, console
from envscan.env_file import dump_env
from envscan.util import powershell_escape, shell_escape

try:
    import yaml
    HAS_YAML = True
except ImportError:
    HAS_YAML = False


def _format_export_lines(pairs: dict[str, str], fmt: str) -> list[str]:
    lines: list[str] = []
    for key, value in pairs.items():
        if fmt == "unix":
            lines.append(f"export {key}={shell_escape(value)}")
        elif fmt == "win":
            lines.append(f"$env:{key} = '{powershell_escape(value)}'")
    return lines


def _render(pairs: dict[str, str], fmt: str) -> str:
    if fmt == "json":
        return json.dumps(pairs, indent=2) + "\n"
    if fmt == "yaml":
        return yaml.safe_dump(pairs, default_flow_style=False, sort_keys=False)
    if fmt == "dotenv":
        return dump_env(pairs)
    lines = _format_export_lines(pairs, fmt)
    return "\n".join(lines) + "\n" if lines else ""


@cli.command("export")
@click.option(
    "--format", "fmt",
    type=click.Choice(["dotenv", "unix", "win", "json", "yaml"]),
    default="dotenv",
    help="Output format: dotenv (default, KEY=\"value\"), unix (export KEY=value), win (PowerShell), json, yaml.",
)
@click.option(
    "--output", "-o",
    type=click.Path(exists=False, dir_okay=False),
    default=None,
    help="Output file path (default: stdout).",
)
@click.pass_context
def export(ctx: click.Context, fmt: str, output: str | None) -> None:
    """Export parsed values to stdout or a file.

    The dotenv format is canonical and parses back to the same values.
    Values containing $ are single-quoted so they are not substituted
    again when the file is loaded. Use --format unix for shell sourcing:
    eval "$(envscan export --format unix)".
    """
    if fmt == "yaml" and not HAS_YAML:
        raise click.ClickException("PyYAML is not installed. Install with: pip install envscan[yaml]")
    pairs = collect_values(ctx)
    text = _render(pairs, fmt)

    if output:
        with Path(output).open("w", encoding="utf-8", newline="") as f:
            f.write(text)
        console.print(f"[green]Exported {len(pairs)} variable(s) to {output}[/green]")
    else:
        click.echo(text, nl=False)
