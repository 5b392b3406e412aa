# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Substitution handlers -- discovered via the ``envscan.substitutions`` entry-point group.

Handlers rewrite a raw parsed value (``$VAR``, ``${VAR}``, ``$(command)``).
There is no global handler list: callers build the ordered list they want
and hand it to :func:`envscan.parser.parse`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping, Sequence
from importlib.metadata import entry_points
from typing import ClassVar, Union

ENTRY_POINT_GROUP = "envscan.substitutions"

# Order matters: variables first, then commands (matches the dotenv convention).
DEFAULT_SUBSTITUTIONS: tuple[str, ...] = ("variable", "command")


class SubstitutionError(RuntimeError):
    """A substitution handler could not produce a value."""


class Substitution(ABC):
    """Rewrites a raw value after quote and escape processing.

    ``env`` is the mapping parsed so far (earlier keys of the same document),
    so a handler can resolve references to previously assigned variables.
    """

    name: ClassVar[str] = ""
    description: ClassVar[str] = ""

    @abstractmethod
    def apply(self, raw_value: str, key: str, env: Mapping[str, str]) -> str:
        ...


SubstitutionSpec = Union[str, Substitution]


def get_substitution_class(name: str) -> type[Substitution]:
    """Load a handler class by its registered entry-point name.

    Raises ``KeyError`` with a helpful message when the name is unknown.
    """
    eps = entry_points(group=ENTRY_POINT_GROUP)
    for ep in eps:
        if ep.name == name:
            return ep.load()

    available = sorted(ep.name for ep in eps)
    raise KeyError(
        f"Unknown substitution {name!r}. Available substitutions: {', '.join(available) or '(none)'}"
    )


def list_substitution_names() -> list[str]:
    """Return sorted names of all registered substitution handlers."""
    eps = entry_points(group=ENTRY_POINT_GROUP)
    return sorted(ep.name for ep in eps)


def build_substitutions(specs: Iterable[SubstitutionSpec]) -> list[Substitution]:
    """Turn names and/or handler instances into an ordered handler list."""
    handlers: list[Substitution] = []
    for spec in specs:
        if isinstance(spec, Substitution):
            handlers.append(spec)
        else:
            handlers.append(get_substitution_class(spec)())
    return handlers


def apply_substitutions(
    value: str,
    key: str,
    env: Mapping[str, str],
    handlers: Sequence[Substitution],
) -> str:
    """Run *value* through *handlers* in order."""
    for handler in handlers:
        value = handler.apply(value, key, env)
    return value
