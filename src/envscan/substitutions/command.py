# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""``$(command)`` substitution."""

from __future__ import annotations

import logging
import re
import subprocess
from collections.abc import Mapping
from typing import Callable

from envscan.substitutions import Substitution, SubstitutionError

logger = logging.getLogger(__name__)

_COMMAND_START = re.compile(r"(\\)?\$\(")

Runner = Callable[[str], str]


def _closing_paren(text: str, start: int) -> int:
    """Index of the ``)`` balancing the ``(`` at *start*, or -1."""
    depth = 0
    for i in range(start, len(text)):
        c = text[i]
        if c == "(":
            depth += 1
        elif c == ")":
            depth -= 1
            if depth == 0:
                return i
    return -1


class CommandSubstitution(Substitution):
    """Replace ``$(command)`` with the command's stdout, trailing newlines removed.

    Parentheses inside the command must balance.  ``\\$(command)`` is kept
    literally (minus the backslash).  An unbalanced ``$(`` is left untouched.
    """

    name = "command"
    description = "Replace $(command) with the output of the command"

    def __init__(
        self,
        runner: Runner | None = None,
        timeout: float | None = None,
    ) -> None:
        self._runner = runner
        self._timeout = timeout

    def apply(self, raw_value: str, key: str, env: Mapping[str, str]) -> str:
        out: list[str] = []
        pos = 0
        while True:
            m = _COMMAND_START.search(raw_value, pos)
            if m is None:
                break
            paren = m.end() - 1
            close = _closing_paren(raw_value, paren)
            if close == -1:
                break
            out.append(raw_value[pos:m.start()])
            whole = raw_value[m.start():close + 1]
            if m.group(1):
                out.append(whole[1:])
            else:
                command = raw_value[paren + 1:close]
                out.append(self._run(command, key))
            pos = close + 1
        out.append(raw_value[pos:])
        return "".join(out)

    def _run(self, command: str, key: str) -> str:
        logger.debug("%s: running $(%s)", key, command)
        if self._runner is not None:
            output = self._runner(command)
        else:
            try:
                result = subprocess.run(
                    command,
                    shell=True,
                    capture_output=True,
                    text=True,
                    timeout=self._timeout,
                )
            except subprocess.TimeoutExpired as e:
                raise SubstitutionError(f"{key}: command timed out: {command}") from e
            if result.returncode != 0:
                raise SubstitutionError(
                    f"{key}: command exited with status {result.returncode}: {command}"
                    + (f" ({result.stderr.strip()})" if result.stderr.strip() else "")
                )
            output = result.stdout
        return output.rstrip("\r\n")
