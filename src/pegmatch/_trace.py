"""Trace evaluation for debugging.

``trace()`` runs a choice through the same state machine as ``Choice.parse``
and records every branch it attempted. The result is identical to a plain
run; the trace only adds the steps that led to it.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pegmatch._cursor import Cursor, as_cursor
from pegmatch._outcome import Failed, Matched, NotMatched

if TYPE_CHECKING:
    from pegmatch._choice import Choice
    from pegmatch._outcome import Outcome
    from pegmatch._values import Id


@dataclass(frozen=True, slots=True)
class TraceStep:
    """One attempted alternative.

    ``index`` is the branch index, or None for the fallback. ``end`` is the
    cursor position after the attempt (equal to ``start`` for a rolled-back
    branch).
    """

    index: int | None
    tag: Id | None
    outcome: Outcome
    start: int
    end: int

    @property
    def kind(self) -> str:
        match self.outcome:
            case Matched():
                return "matched"
            case NotMatched():
                return "not_matched"
            case Failed():
                return "failed"
        return "unknown"  # pragma: no cover


@dataclass(frozen=True, slots=True)
class ChoiceTrace:
    """Full record of one choice evaluation."""

    result: Matched | Failed
    steps: tuple[TraceStep, ...]

    @property
    def used_fallback(self) -> bool:
        return bool(self.steps) and self.steps[-1].index is None

    @property
    def exhausted(self) -> bool:
        return isinstance(self.result, Failed) and not any(
            isinstance(s.outcome, Failed) for s in self.steps
        )

    @property
    def winner(self) -> TraceStep | None:
        """The step that produced the result, if any alternative matched."""
        if self.steps and isinstance(self.steps[-1].outcome, Matched):
            return self.steps[-1]
        return None


def trace(choice: Choice, source: Cursor | Sequence[Any]) -> ChoiceTrace:
    """Evaluate ``choice`` against ``source`` and record each attempt."""
    steps: list[TraceStep] = []
    result = choice._run(as_cursor(source), steps)
    return ChoiceTrace(result=result, steps=tuple(steps))
