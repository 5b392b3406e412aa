# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""envscan CLI -- inspect, validate and export .env files.

The CLI is split into per-command modules under this package.  The ``cli``
click group and shared helpers (``console``, ``collect_values``, etc.) live
here so every command module can import them.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from envscan import __version__
from envscan.config import load_config
from envscan.parser import FormatError
from envscan.sdk import dotenv_values
from envscan.substitutions import SubstitutionError

console = Console(stderr=True)


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def _setup_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_time=False, show_path=False)],
    )


def resolve_paths(ctx: click.Context) -> list[Path]:
    """Files selected by --file, else by ENVSCAN_FILES / config."""
    files = ctx.obj["files"]
    if files:
        return [Path(f) for f in files]
    return ctx.obj["config"].resolve_files()


def collect_values(ctx: click.Context) -> dict[str, str]:
    """Parse and merge the selected files, turning parse errors into click errors."""
    cfg = ctx.obj["config"]
    substitutions: list[str] | None = [] if ctx.obj["no_substitute"] else None
    try:
        return dotenv_values(
            resolve_paths(ctx),
            substitutions=substitutions,
            missing_ok=not ctx.obj["files"],
            config=cfg,
        )
    except KeyError as e:
        raise click.UsageError(str(e.args[0]) if e.args else str(e))
    except (FormatError, SubstitutionError, FileNotFoundError) as e:
        raise click.ClickException(str(e))


# ---------------------------------------------------------------------------
# Top-level click group
# ---------------------------------------------------------------------------

@click.group()
@click.option(
    "--file", "-f", "files", multiple=True, type=click.Path(dir_okay=False),
    help="Env file to read (repeatable, earlier files win). Default: ENVSCAN_FILES or config, else .env.",
)
@click.option("--no-substitute", is_flag=True, help="Do not expand $VAR, ${VAR} or $(command).")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output.")
@click.version_option(__version__)
@click.pass_context
def cli(
    ctx: click.Context,
    files: tuple[str, ...],
    no_substitute: bool,
    verbose: bool,
) -> None:
    """Parse .env files with a strict grammar and export their values."""
    _setup_logging(verbose)
    try:
        cfg = load_config()
    except ValueError as e:
        raise click.ClickException(f"Invalid config: {e}")
    ctx.ensure_object(dict)
    ctx.obj["config"] = cfg
    ctx.obj["files"] = list(files)
    ctx.obj["no_substitute"] = no_substitute
    ctx.obj["verbose"] = verbose


# ---------------------------------------------------------------------------
# Register all command modules (import triggers @cli.command registration)
# ---------------------------------------------------------------------------

from envscan.cli import (  # noqa: E402, F401
    check_cmd,
    list_cmd,
    export_cmd,
    run_cmd,
    substitutions_cmd,
)
