# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""``envscan run`` -- run a command with the env files applied."""

from __future__ import annotations

import logging
import os
import subprocess

import click

from envscan.cli import cli, collect_values

logger = logging.getLogger(__name__)


@cli.command(context_settings={"ignore_unknown_options": True})
@click.option(
    "--override/--no-override", default=None,
    help="Overwrite variables already set in the environment. Default: ENVSCAN_OVERRIDE or config, else no.",
)
@click.argument("command", nargs=-1, required=True, type=click.UNPROCESSED)
@click.pass_context
def run(ctx: click.Context, override: bool | None, command: tuple[str, ...]) -> None:
    """Run COMMAND with the env file variables in its environment.

    Use ``--`` to separate envscan options from the command's own:
    envscan -f .env.test run -- pytest -x
    """
    if override is None:
        override = ctx.obj["config"].override
    env = dict(os.environ)
    for key, value in collect_values(ctx).items():
        if key in env and not override:
            continue
        env[key] = value
    logger.debug("running %s", " ".join(command))
    try:
        result = subprocess.run(list(command), env=env)
    except FileNotFoundError:
        raise click.ClickException(f"Command not found: {command[0]}")
    ctx.exit(result.returncode)
