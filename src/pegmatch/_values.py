"""Discriminants and value-producing rules.

``Id`` is the opaque tag a branch carries so the dispatcher can tell which
alternative won. ``Empty``, ``IdRule`` and ``Capture`` are the body rules this
package ships; any other Rule works as a body too.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pegmatch._atoms import report_failure
from pegmatch._outcome import Failed, Matched, dispatch

if TYPE_CHECKING:
    from collections.abc import Hashable

    from pegmatch._cursor import Cursor
    from pegmatch._outcome import Outcome
    from pegmatch._types import Atom, Dispatcher


@dataclass(frozen=True, slots=True)
class Id:
    """Discriminant identifying which alternative of a choice succeeded.

    Compared by value. Two branches may share an Id; the dispatcher then
    cannot tell them apart, which is sometimes exactly what is wanted.
    """

    value: Hashable

    def __repr__(self) -> str:
        return f"Id({self.value!r})"


@dataclass(frozen=True, slots=True)
class Empty:
    """Consumes nothing and produces no values. The default branch body."""

    def parse(self, cursor: Cursor, /) -> Outcome:
        return Matched(cursor.position)

    def try_match(self, cursor: Cursor, dispatcher: Dispatcher[Any], /) -> Any:
        return dispatch(self.parse(cursor), dispatcher)


@dataclass(frozen=True, slots=True)
class Capture:
    """Runs an atom and produces the consumed slice as a single value.

    If the atom fails, the cursor is restored and the atom's diagnostic is
    reported.
    """

    atom: Atom

    def parse(self, cursor: Cursor, /) -> Outcome:
        start = cursor.snapshot()
        if self.atom.match(cursor):
            return Matched(cursor.position, (cursor.consumed_since(start),))
        diagnostic = report_failure(self.atom, cursor, start)
        cursor.restore(start)
        return Failed(diagnostic)

    def try_match(self, cursor: Cursor, dispatcher: Dispatcher[Any], /) -> Any:
        return dispatch(self.parse(cursor), dispatcher)


@dataclass(frozen=True, slots=True)
class IdRule:
    """Consumes nothing and produces ``id`` as its single value.

    Used as the body of an untagged branch it acts like a tag: the
    dispatcher sees ``id`` as the leading value.
    """

    id: Id

    def parse(self, cursor: Cursor, /) -> Outcome:
        return Matched(cursor.position, (self.id,))

    def try_match(self, cursor: Cursor, dispatcher: Dispatcher[Any], /) -> Any:
        return dispatch(self.parse(cursor), dispatcher)


EMPTY = Empty()


def capture(atom: Atom) -> Capture:
    """Build a capture rule around ``atom``."""
    return Capture(atom)
