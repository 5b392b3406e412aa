# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""State-machine parser for the .env file format.

Grammar::

    file             = line ("\\r"? "\\n" line)*
    line             = ws? statement? ws? comment? ws?
    statement        = export_statement | assignment
    export_statement = "export" ws+ assignment
    assignment       = key ws? "=" ws? value
    key              = [A-Za-z_][A-Za-z0-9_]*
    value            = dq_value | sq_value | unquoted_value
    dq_value         = '"' ( "\\" any | !'"' any )* '"'
    sq_value         = "'" ( "\\" any | !"'" any )* "'"
    unquoted_value   = ( !ws any )*
    comment          = "#" [^\\r\\n]*
    ws               = (" " | "\\t")+

Each rule maps onto one :class:`State`.  :meth:`Parser.step` evaluates a
single state against the scanner and returns the next state, or ``None`` once
the input is exhausted.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from enum import Enum
from typing import Callable

from envscan.scanner import Scanner
from envscan.substitutions import Substitution, apply_substitutions

_HSPACE = re.compile(r"[ \t]*")
_HSPACE_REQUIRED = re.compile(r"[ \t]+")
_NEWLINE = re.compile(r"\r?\n")
_HASH = re.compile(r"#")
_COMMENT = re.compile(r"#.*")
# ASCII whitespace only; a no-break space is part of an unquoted value.
_EXPORT_AHEAD = re.compile(r"export\s", re.ASCII)
_EXPORT = re.compile(r"export\b")
_NON_SPACE = re.compile(r"\S", re.ASCII)
_KEY = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_EQUALS = re.compile(r"=")
_UNQUOTED = re.compile(r"\S+", re.ASCII)
_ESCAPE = re.compile(r"\\(.)")
_DQUOTE = re.compile(r'"')
_DQ_RUN = re.compile(r'[^"\\]+')
_SQUOTE = re.compile(r"'")
_SQ_RUN = re.compile(r"[^'\\]+")


class FormatError(ValueError):
    """Raised when the input is not valid .env syntax.

    ``message`` is the bare description (``"expected key"``); ``line`` and
    ``column`` are 1-based and derived from ``offset``, the cursor position at
    the time of failure.
    """

    def __init__(
        self,
        message: str,
        offset: int,
        line: int,
        column: int,
        path: str | None = None,
    ) -> None:
        self.message = message
        self.offset = offset
        self.line = line
        self.column = column
        self.path = path
        super().__init__(self._describe())

    def with_path(self, path: str) -> FormatError:
        return FormatError(self.message, self.offset, self.line, self.column, path=path)

    def _describe(self) -> str:
        where = f"line {self.line} column {self.column}"
        if self.path:
            return f"{self.path}: {self.message} at {where}"
        return f"{self.message} at {where}"


class State(Enum):
    START = "start"
    LINE = "line"
    STATEMENT = "statement"
    EXPORT_STATEMENT = "export_statement"
    ASSIGNMENT_STATEMENT = "assignment_statement"
    ASSIGNMENT = "assignment"
    UNQUOTED_VALUE = "unquoted_value"
    DOUBLE_QUOTED_VALUE = "double_quoted_value"
    DOUBLE_QUOTED_VALUE_CONTENTS = "double_quoted_value_contents"
    SINGLE_QUOTED_VALUE = "single_quoted_value"
    SINGLE_QUOTED_VALUE_CONTENTS = "single_quoted_value_contents"
    ASSIGNMENT_END = "assignment_end"
    COMMENT = "comment"
    NEWLINE = "newline"


class Parser:
    """Parse one .env document into an ordered ``dict``.

    *substitutions* is an ordered sequence of handlers applied to every
    unquoted or double-quoted value before it is stored.  Single-quoted values
    are always stored as written.

    A parser instance is single-use: it owns its :class:`Scanner` and the
    mapping it builds.
    """

    def __init__(self, text: str, substitutions: Sequence[Substitution] = ()) -> None:
        self.scanner = Scanner(text)
        self.env: dict[str, str] = {}
        self.substitutions = tuple(substitutions)
        self.key = ""
        self.value = ""
        self._rules: dict[State, Callable[[], State | None]] = {
            State.START: self._start,
            State.LINE: self._line,
            State.STATEMENT: self._statement,
            State.EXPORT_STATEMENT: self._export_statement,
            State.ASSIGNMENT_STATEMENT: self._assignment_statement,
            State.ASSIGNMENT: self._assignment,
            State.UNQUOTED_VALUE: self._unquoted_value,
            State.DOUBLE_QUOTED_VALUE: self._double_quoted_value,
            State.DOUBLE_QUOTED_VALUE_CONTENTS: self._double_quoted_value_contents,
            State.SINGLE_QUOTED_VALUE: self._single_quoted_value,
            State.SINGLE_QUOTED_VALUE_CONTENTS: self._single_quoted_value_contents,
            State.ASSIGNMENT_END: self._assignment_end,
            State.COMMENT: self._comment,
            State.NEWLINE: self._newline,
        }

    def parse(self) -> dict[str, str]:
        state: State | None = State.START
        while state is not None:
            state = self.step(state)
        return self.env

    def step(self, state: State) -> State | None:
        """Evaluate *state* once and return the next state (None = done)."""
        return self._rules[state]()

    def fail(self, message: str) -> FormatError:
        offset = self.scanner.pos
        line, column = self.scanner.line_col(offset)
        return FormatError(message, offset, line, column)

    # -- rules ---------------------------------------------------------------

    def _start(self) -> State:
        return State.LINE

    def _line(self) -> State | None:
        s = self.scanner
        s.skip(_HSPACE)
        if s.at_end():
            return None
        if s.peek(_NEWLINE):
            return State.NEWLINE
        if s.peek(_HASH):
            return State.COMMENT
        return State.STATEMENT

    def _statement(self) -> State | None:
        s = self.scanner
        if s.peek(_EXPORT_AHEAD):
            return State.EXPORT_STATEMENT
        if s.peek(_NON_SPACE):
            return State.ASSIGNMENT_STATEMENT
        if s.at_end():
            return None
        raise self.fail("expected statement")

    def _export_statement(self) -> State:
        s = self.scanner
        if not s.skip(_EXPORT):
            raise self.fail("expected 'export'")
        if not s.skip(_HSPACE_REQUIRED):
            raise self.fail("expected whitespace")
        return State.ASSIGNMENT

    def _assignment_statement(self) -> State:
        return State.ASSIGNMENT

    def _assignment(self) -> State:
        s = self.scanner
        key = s.scan(_KEY)
        if key is None:
            raise self.fail("expected key")
        self.key = key
        self.value = ""
        s.skip(_HSPACE)
        if not s.skip(_EQUALS):
            raise self.fail("expected '='")
        s.skip(_HSPACE)
        if s.peek(_DQUOTE):
            return State.DOUBLE_QUOTED_VALUE
        if s.peek(_SQUOTE):
            return State.SINGLE_QUOTED_VALUE
        return State.UNQUOTED_VALUE

    def _unquoted_value(self) -> State:
        s = self.scanner
        self.value = s.scan(_UNQUOTED) or ""
        s.skip(_HSPACE)
        self._store(substitute=True)
        return State.ASSIGNMENT_END

    def _double_quoted_value(self) -> State:
        if not self.scanner.skip(_DQUOTE):
            raise self.fail("expected '\"'")
        self.value = ""
        return State.DOUBLE_QUOTED_VALUE_CONTENTS

    def _double_quoted_value_contents(self) -> State:
        return self._quoted_contents(
            State.DOUBLE_QUOTED_VALUE_CONTENTS, _DQ_RUN, _DQUOTE,
            "expected double quoted string contents", substitute=True,
        )

    def _single_quoted_value(self) -> State:
        if not self.scanner.skip(_SQUOTE):
            raise self.fail("expected \"'\"")
        self.value = ""
        return State.SINGLE_QUOTED_VALUE_CONTENTS

    def _single_quoted_value_contents(self) -> State:
        return self._quoted_contents(
            State.SINGLE_QUOTED_VALUE_CONTENTS, _SQ_RUN, _SQUOTE,
            "expected single quoted string contents", substitute=False,
        )

    def _assignment_end(self) -> State:
        if self.scanner.peek(_HASH):
            return State.COMMENT
        return State.NEWLINE

    def _comment(self) -> State:
        self.scanner.skip(_COMMENT)
        return State.NEWLINE

    def _newline(self) -> State | None:
        s = self.scanner
        if s.at_end():
            return None
        if not s.skip(_NEWLINE):
            raise self.fail("expected newline")
        # Continues at STATEMENT, not LINE: see DESIGN.md on blank lines.
        return State.STATEMENT

    # -- helpers -------------------------------------------------------------

    def _quoted_contents(
        self,
        state: State,
        run: re.Pattern[str],
        quote: re.Pattern[str],
        error: str,
        *,
        substitute: bool,
    ) -> State:
        s = self.scanner
        chunk = s.scan(run)
        if chunk is not None:
            self.value += chunk
            return state
        if s.skip(_ESCAPE):
            self.value += s.group(1) or ""
            return state
        if s.skip(quote):
            s.skip(_HSPACE)
            self._store(substitute=substitute)
            return State.ASSIGNMENT_END
        raise self.fail(error)

    def _store(self, *, substitute: bool) -> None:
        value = self.value
        if substitute:
            value = apply_substitutions(value, self.key, self.env, self.substitutions)
        self.env[self.key] = value


def parse(text: str, substitutions: Sequence[Substitution] = ()) -> dict[str, str]:
    """Parse .env *text* and return the key/value mapping.

    Raises :class:`FormatError` on malformed input; no partial mapping is
    returned.
    """
    return Parser(text, substitutions).parse()
