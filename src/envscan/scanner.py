# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Forward-only text scanner used by the .env grammar.

The scanner owns a single cursor into an immutable string.  Patterns are
matched anchored at the cursor with ``Pattern.match(text, pos)`` so the
remaining text is never sliced or copied.
"""

from __future__ import annotations

import functools
import re
from typing import Union

Pattern = Union[str, re.Pattern]


@functools.lru_cache(maxsize=64)
def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern)


def _as_regex(pattern: Pattern) -> re.Pattern[str]:
    if isinstance(pattern, str):
        return _compile(pattern)
    return pattern


class Scanner:
    """Cursor over *text* supporting peek/skip/scan with one match of lookahead."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0
        self._last: re.Match[str] | None = None

    @property
    def text(self) -> str:
        return self._text

    @property
    def pos(self) -> int:
        return self._pos

    def peek(self, pattern: Pattern) -> bool:
        """Return True if *pattern* matches at the cursor.  Never moves the cursor."""
        return _as_regex(pattern).match(self._text, self._pos) is not None

    def skip(self, pattern: Pattern) -> bool:
        """Consume text matching *pattern*; return False and stay put on no match."""
        return self._advance(pattern) is not None

    def scan(self, pattern: Pattern) -> str | None:
        """Consume and return text matching *pattern*, or None on no match."""
        m = self._advance(pattern)
        if m is None:
            return None
        return m.group(0)

    def group(self, index: int = 0) -> str | None:
        """Capture group *index* of the last successful skip/scan."""
        if self._last is None:
            return None
        return self._last.group(index)

    def at_end(self) -> bool:
        return self._pos >= len(self._text)

    def line_col(self, offset: int | None = None) -> tuple[int, int]:
        """1-based (line, column) of *offset* (default: the cursor)."""
        if offset is None:
            offset = self._pos
        line = self._text.count("\n", 0, offset) + 1
        column = offset - (self._text.rfind("\n", 0, offset) + 1) + 1
        return line, column

    def _advance(self, pattern: Pattern) -> re.Match[str] | None:
        m = _as_regex(pattern).match(self._text, self._pos)
        if m is None:
            return None
        self._last = m
        self._pos = m.end()
        return m

    def __repr__(self) -> str:
        return f"<Scanner {self._pos}/{len(self._text)} {self._text[self._pos:self._pos + 10]!r}>"
