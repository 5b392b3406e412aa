# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""``$VAR`` / ``${VAR}`` expansion."""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Mapping

from envscan.substitutions import Substitution

logger = logging.getLogger(__name__)

_VARIABLE = re.compile(
    r"""
    (\\)?               # escaped with a backslash?
    \$                  # literal $
    (?!\()              # $( belongs to command substitution
    (\{)?               # optional brace
    ([A-Za-z0-9_]+)?    # variable name
    (?(2)\})            # closing brace when opened
    """,
    re.VERBOSE,
)


class VariableSubstitution(Substitution):
    """Replace ``$NAME`` and ``${NAME}`` with earlier values or the process environment.

    Lookup order is the mapping parsed so far, then *environ*
    (``os.environ`` by default), then the empty string.  ``\\$NAME`` keeps the
    literal text without the backslash.
    """

    name = "variable"
    description = "Expand $VAR and ${VAR} from earlier keys, then the process environment"

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ

    def apply(self, raw_value: str, key: str, env: Mapping[str, str]) -> str:
        environ = os.environ if self._environ is None else self._environ

        def _replace(m: re.Match[str]) -> str:
            text = m.group(0)
            if m.group(1):
                return text[1:]
            name = m.group(3)
            if name is None:
                return text
            if name in env:
                return env[name]
            if name in environ:
                return environ[name]
            logger.debug("%s: $%s is not set, substituting empty string", key, name)
            return ""

        return _VARIABLE.sub(_replace, raw_value)
