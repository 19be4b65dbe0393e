"""Concrete atoms implementing the Atom / FallibleAtom protocols.

Each atom is a frozen dataclass, immutable after construction and safe to
share between threads. Atoms also satisfy the Rule protocol, so they can be
used directly as top-level rules or as branch bodies. An atom that only has
``match`` is adapted with ``as_rule``.

``MatchAll`` is infallible and deliberately has no ``error`` method. ``Literal``
and ``Regex`` can fail and describe the failure with a diagnostic.

Regex uses ``google-re2`` for guaranteed linear-time matching. RE2 does not
support backreferences or lookahead/lookbehind because they require
backtracking; patterns using them are rejected at construction time.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import re2

from pegmatch._cursor import EOF
from pegmatch._errors import ExpectedLiteral, ExpectedPattern, GrammarError
from pegmatch._outcome import Failed, Matched, dispatch
from pegmatch._types import Atom, FallibleAtom, Rule

if TYPE_CHECKING:
    from pegmatch._cursor import Cursor, Position
    from pegmatch._errors import Diagnostic
    from pegmatch._outcome import Outcome
    from pegmatch._types import Dispatcher


@dataclass(frozen=True, slots=True)
class MatchAll:
    """Matches anything and consumes all remaining input.

    Typical use is a terminal catch-all ("rest of line", "rest of file").
    It cannot fail, so it has no failure-reporting operation.
    """

    def match(self, cursor: Cursor, /) -> bool:
        while cursor.peek() is not EOF:
            cursor.advance()
        return True

    def parse(self, cursor: Cursor, /) -> Outcome:
        self.match(cursor)
        return Matched(cursor.position)

    def try_match(self, cursor: Cursor, dispatcher: Dispatcher[Any], /) -> Any:
        return dispatch(self.parse(cursor), dispatcher)


@dataclass(frozen=True, slots=True)
class Literal:
    """Matches an exact run of symbols.

    ``text`` may be a ``str``, ``bytes`` or any sequence of symbols comparable
    with what the cursor yields. Sequences other than str/bytes are frozen
    into a tuple at construction time.

    Raises:
        GrammarError: If ``text`` is empty.
    """

    text: str | bytes | tuple[Any, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.text, (str, bytes)):
            object.__setattr__(self, "text", tuple(self.text))
        if len(self.text) == 0:
            msg = "literal must not be empty"
            raise GrammarError(msg)

    def match(self, cursor: Cursor, /) -> bool:
        for expected in self.text:
            if cursor.peek() != expected:
                return False
            cursor.advance()
        return True

    def error(self, cursor: Cursor, position: Position, /) -> Diagnostic:
        source = cursor.input
        index = 0
        while (
            index < len(self.text)
            and position + index < len(source)
            and source[position + index] == self.text[index]
        ):
            index += 1
        return ExpectedLiteral(position=position, literal=self.text, index=index)

    def parse(self, cursor: Cursor, /) -> Outcome:
        return _parse_fallible(self, cursor)

    def try_match(self, cursor: Cursor, dispatcher: Dispatcher[Any], /) -> Any:
        return dispatch(self.parse(cursor), dispatcher)


@dataclass(frozen=True, slots=True)
class Regex:
    """Matches a regular expression anchored at the cursor position.

    Only meaningful over ``str`` input. The pattern is compiled at
    construction time via ``google-re2``. A zero-length match succeeds
    without consuming input.

    Raises:
        GrammarError: If the pattern is not valid RE2 syntax.
    """

    pattern: str
    _compiled: re2.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        try:
            compiled = re2.compile(self.pattern)
        except re2.error as e:
            msg = f'invalid regex pattern "{self.pattern}": {e}'
            raise GrammarError(msg) from e
        object.__setattr__(self, "_compiled", compiled)

    def match(self, cursor: Cursor, /) -> bool:
        source = cursor.input
        if not isinstance(source, str):
            return False
        m = self._compiled.match(source, cursor.position)
        if m is None:
            return False
        while cursor.position < m.end():
            cursor.advance()
        return True

    def error(self, cursor: Cursor, position: Position, /) -> Diagnostic:
        return ExpectedPattern(position=position, pattern=self.pattern)

    def parse(self, cursor: Cursor, /) -> Outcome:
        return _parse_fallible(self, cursor)

    def try_match(self, cursor: Cursor, dispatcher: Dispatcher[Any], /) -> Any:
        return dispatch(self.parse(cursor), dispatcher)


def _parse_fallible(atom: FallibleAtom, cursor: Cursor) -> Outcome:
    start = cursor.snapshot()
    if atom.match(cursor):
        return Matched(cursor.position)
    diagnostic = atom.error(cursor, start)
    cursor.restore(start)
    return Failed(diagnostic)


def report_failure(atom: Atom, cursor: Cursor, position: Position) -> Diagnostic:
    """Return the diagnostic for a failed ``atom`` at ``position``.

    Only fallible atoms have a failure path. Calling this for an infallible
    atom such as ``MatchAll`` is a precondition violation.
    """
    assert isinstance(atom, FallibleAtom), f"{type(atom).__name__} cannot fail"
    return atom.error(cursor, position)


@dataclass(frozen=True, slots=True)
class AtomRule:
    """Adapts an atom that only has ``match`` to the Rule protocol.

    Success produces no values. A failing fallible atom reports its own
    diagnostic with the cursor restored.
    """

    atom: Atom

    def parse(self, cursor: Cursor, /) -> Outcome:
        start = cursor.snapshot()
        if self.atom.match(cursor):
            return Matched(cursor.position)
        diagnostic = report_failure(self.atom, cursor, start)
        cursor.restore(start)
        return Failed(diagnostic)

    def try_match(self, cursor: Cursor, dispatcher: Dispatcher[Any], /) -> Any:
        return dispatch(self.parse(cursor), dispatcher)


def as_rule(rule: Rule | Atom) -> Rule:
    """Return ``rule`` unchanged, or wrap a bare atom in an AtomRule.

    Raises:
        GrammarError: If ``rule`` is neither a rule nor an atom.
    """
    if isinstance(rule, Rule):
        return rule
    if isinstance(rule, Atom):
        return AtomRule(rule)
    msg = f"expected a rule or an atom, got {type(rule).__name__}"
    raise GrammarError(msg)


# ═══════════════════════════════════════════════════════════════════════════════
# Construction helpers
# ═══════════════════════════════════════════════════════════════════════════════

any_ = MatchAll()


def lit(text: str | bytes | Sequence[Any]) -> Literal:
    """Build a literal atom."""
    return Literal(text)  # type: ignore[arg-type]


def regex(pattern: str) -> Regex:
    """Build a regex atom."""
    return Regex(pattern)
