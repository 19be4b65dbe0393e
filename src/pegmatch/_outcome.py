"""Outcomes — explicit result values passed from rule to caller.

Failure inside the engine is never an exception. Branches report
``NotMatched`` to their choice, rules report ``Failed`` with a diagnostic,
and only the top-level ``match()`` turns an outcome into a dispatcher call.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pegmatch._cursor import Cursor, as_cursor

if TYPE_CHECKING:
    from pegmatch._errors import Diagnostic
    from pegmatch._types import Dispatcher, Rule


@dataclass(frozen=True, slots=True)
class Matched:
    """The rule succeeded, ending at ``position`` with ``values`` captured."""

    position: int
    values: tuple[Any, ...] = ()


@dataclass(frozen=True, slots=True)
class NotMatched:
    """A branch condition did not match. The cursor has been restored."""


@dataclass(frozen=True, slots=True)
class Failed:
    """The rule failed with a user-facing diagnostic."""

    diagnostic: Diagnostic


type Outcome = Matched | NotMatched | Failed

NOT_MATCHED = NotMatched()


def dispatch[R](outcome: Matched | Failed, dispatcher: Dispatcher[R]) -> R:
    """Invoke exactly one dispatcher method for ``outcome`` and return its value."""
    match outcome:
        case Matched(position=position, values=values):
            return dispatcher.success(position, *values)
        case Failed(diagnostic=diagnostic):
            return dispatcher.error(diagnostic)
    msg = f"cannot dispatch {type(outcome).__name__}; only top-level outcomes are dispatched"
    raise TypeError(msg)


def match[R](rule: Rule, source: Cursor | Sequence[Any], dispatcher: Dispatcher[R]) -> R:
    """Run ``rule`` against ``source`` and hand the outcome to ``dispatcher``.

    ``source`` is either a cursor (position is shared with the caller) or a
    raw sequence (a fresh cursor is created for this invocation).
    """
    return rule.try_match(as_cursor(source), dispatcher)
