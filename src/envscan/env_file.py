# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Read and write .env files.

Parsing is delegated to :mod:`envscan.parser`; this module only deals with
getting the text in and out of files, plus the canonical serializer whose
output always parses back to the same mapping.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path

from envscan.parser import FormatError, parse
from envscan.substitutions import Substitution

logger = logging.getLogger(__name__)


def parse_env_file(
    path: str | Path,
    substitutions: Sequence[Substitution] = (),
    encoding: str = "utf-8",
) -> dict[str, str]:
    """Read a .env file and return an ordered dict of key-value pairs.

    Raises :class:`~envscan.parser.FormatError` (with ``path`` set) when the
    file is malformed.
    """
    path = Path(path)
    # newline="" keeps \r\n intact; the grammar handles it.
    with path.open(encoding=encoding, newline="") as f:
        text = f.read()
    try:
        env = parse(text, substitutions)
    except FormatError as e:
        raise e.with_path(str(path)) from None
    logger.debug("parsed %d key(s) from %s", len(env), path)
    return env


def format_env_value(value: str) -> str:
    """Quote *value* so that it parses back unchanged.

    Values are double-quoted with backslashes and double quotes escaped.  A
    value containing ``$`` is single-quoted instead (escaping backslashes and
    single quotes), since substitution never touches single-quoted values and
    ``$HOME`` or ``$(cmd)`` must not be expanded on reload.
    """
    escaped = value.replace("\\", "\\\\")
    if "$" in value:
        return "'" + escaped.replace("'", "\\'") + "'"
    return '"' + escaped.replace('"', '\\"') + '"'


def dump_env(env: Mapping[str, str]) -> str:
    """Serialize *env* as ``KEY="value"`` lines in mapping order."""
    lines = [f"{key}={format_env_value(value)}" for key, value in env.items()]
    return "\n".join(lines) + "\n" if lines else ""


def write_env_file(path: str | Path, env: Mapping[str, str], encoding: str = "utf-8") -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding=encoding, newline="") as f:
        f.write(dump_env(env))
