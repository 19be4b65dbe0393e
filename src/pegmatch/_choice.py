"""Choice — ordered alternation with first-match-wins semantics.

Evaluation semantics:
- Branches are tried strictly in declaration order (first-match-wins)
- A failed branch condition is rolled back to the exact pre-attempt position
- A matched condition commits the choice to that branch (no fallback to sibling)
- The fallback is the Choice-level else: no condition, consumes nothing
- With no match and no fallback the choice reports ExhaustedChoice at its
  entry position, with the cursor back at that position
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pegmatch._atoms import as_rule
from pegmatch._errors import ExhaustedChoice, GrammarError
from pegmatch._outcome import NOT_MATCHED, Failed, Matched, NotMatched, dispatch
from pegmatch._trace import TraceStep
from pegmatch._types import Atom
from pegmatch._values import EMPTY, Id

if TYPE_CHECKING:
    from pegmatch._cursor import Cursor
    from pegmatch._outcome import Outcome
    from pegmatch._types import Dispatcher, Rule

MAX_DEPTH = 32
MAX_BRANCHES = 256


class TooManyBranchesError(GrammarError):
    """A choice has more branches than MAX_BRANCHES."""

    def __init__(self, count: int, max_: int) -> None:
        self.count = count
        self.max = max_
        super().__init__(f"too many branches: {count} exceeds maximum {max_}")


def _tagged(tag: Id | None, outcome: Matched) -> Matched:
    if tag is None:
        return outcome
    return Matched(outcome.position, (tag, *outcome.values))


@dataclass(frozen=True, slots=True)
class Branch:
    """Pairs a condition atom with a body rule and an optional discriminant.

    The condition is attempted against a snapshot. If it fails the cursor is
    restored and the branch reports NotMatched with no observable side
    effects. If it succeeds the consumption is kept and the body runs from
    the advanced position.

    A body that is a bare atom is wrapped with ``as_rule``.
    """

    condition: Atom
    body: Rule = EMPTY
    tag: Id | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.condition, Atom):
            msg = f"branch condition must be an atom, got {type(self.condition).__name__}"
            raise GrammarError(msg)
        object.__setattr__(self, "body", as_rule(self.body))

    def attempt(self, cursor: Cursor) -> Outcome:
        start = cursor.snapshot()
        if not self.condition.match(cursor):
            cursor.restore(start)
            return NOT_MATCHED
        outcome = self.body.parse(cursor)
        if isinstance(outcome, Matched):
            return _tagged(self.tag, outcome)
        # Committed: body failure propagates out of the enclosing choice.
        return outcome


@dataclass(frozen=True, slots=True)
class Fallback:
    """Always-matching alternative with no condition.

    Consumes no input. Only consulted after every explicit branch failed.
    """

    tag: Id | None = None

    def attempt(self, cursor: Cursor) -> Matched:
        return _tagged(self.tag, Matched(cursor.position))


# Untagged fallback marker, usable as the last operand of choice().
ELSE = Fallback()


@dataclass(frozen=True, slots=True)
class Choice:
    """Ordered alternation over branches with an optional fallback.

    Tries branches in order and returns the outcome of the first one whose
    condition matches. If none matches, returns the fallback's outcome (if
    present), otherwise ExhaustedChoice at the entry position.

    Depth and width validation run automatically at construction time.

    INV: First-match-wins: later branches are never attempted once an
    earlier one matched, even if they would also match.
    """

    branches: tuple[Branch, ...]
    fallback: Fallback | None = None

    def __post_init__(self) -> None:
        self.validate()

    def parse(self, cursor: Cursor, /) -> Matched | Failed:
        return self._run(cursor, None)

    def try_match(self, cursor: Cursor, dispatcher: Dispatcher[Any], /) -> Any:
        return dispatch(self.parse(cursor), dispatcher)

    def _run(self, cursor: Cursor, steps: list[TraceStep] | None) -> Matched | Failed:
        start = cursor.snapshot()
        for index, branch in enumerate(self.branches):
            outcome = branch.attempt(cursor)
            if steps is not None:
                steps.append(TraceStep(index, branch.tag, outcome, start, cursor.position))
            if isinstance(outcome, NotMatched):
                continue
            return outcome

        if self.fallback is not None:
            outcome = self.fallback.attempt(cursor)
            if steps is not None:
                steps.append(TraceStep(None, self.fallback.tag, outcome, start, cursor.position))
            return outcome

        cursor.restore(start)
        return Failed(ExhaustedChoice(position=start))

    def validate(self) -> None:
        """Validate width and nesting depth of this choice.

        Raises:
            TooManyBranchesError: If there are more than MAX_BRANCHES branches.
            GrammarError: If depth exceeds MAX_DEPTH.
        """
        if len(self.branches) > MAX_BRANCHES:
            raise TooManyBranchesError(len(self.branches), MAX_BRANCHES)
        d = self.depth()
        if d > MAX_DEPTH:
            msg = f"choice depth {d} exceeds maximum allowed depth {MAX_DEPTH}"
            raise GrammarError(msg)

    def depth(self) -> int:
        """Calculate the nesting depth of choices under this one."""
        return 1 + max((_body_depth(b.body) for b in self.branches), default=0)


def _body_depth(body: Rule) -> int:
    match body:
        case Choice():
            return body.depth()
        case _:
            return 0


# ═══════════════════════════════════════════════════════════════════════════════
# Construction helpers
# ═══════════════════════════════════════════════════════════════════════════════


def guard(condition: Atom | Fallback, then: Rule | Atom | Id | None = None) -> Branch | Fallback:
    """Combine a condition with a body or a discriminant.

    ``guard(lit("abc"), Id(0))`` is a branch tagged ``Id(0)`` with an empty
    body; ``guard(lit("abc"), rule)`` runs ``rule`` after the condition;
    ``guard(ELSE, Id(1))`` is a fallback tagged ``Id(1)``.
    """
    if isinstance(condition, Fallback):
        if then is not None and not isinstance(then, Id):
            msg = "a fallback takes only a discriminant, not a body"
            raise GrammarError(msg)
        return Fallback(tag=then)
    if then is None:
        return Branch(condition)
    if isinstance(then, Id):
        return Branch(condition, tag=then)
    return Branch(condition, body=then)


def else_(tag: Id | None = None) -> Fallback:
    """Build a fallback, optionally tagged."""
    return Fallback(tag=tag)


def choice(*alternatives: Atom | Branch | Fallback | Choice) -> Choice:
    """Build a Choice from alternatives, left to right.

    Bare atoms become untagged branches. A nested choice is spliced in place.
    A fallback (or a nested choice with a fallback) may only appear last.

    Raises:
        GrammarError: If there are no alternatives or a fallback is misplaced.
    """
    if not alternatives:
        msg = "choice requires at least one alternative"
        raise GrammarError(msg)

    branches: list[Branch] = []
    fallback: Fallback | None = None
    last = len(alternatives) - 1
    for position, alt in enumerate(alternatives):
        match alt:
            case Branch():
                branches.append(alt)
            case Fallback():
                if position != last:
                    msg = "fallback must be the last alternative of a choice"
                    raise GrammarError(msg)
                fallback = alt
            case Choice(branches=nested, fallback=nested_fallback):
                if nested_fallback is not None and position != last:
                    msg = "a choice with a fallback must be the last alternative"
                    raise GrammarError(msg)
                branches.extend(nested)
                fallback = nested_fallback
            case _ if isinstance(alt, Atom):
                branches.append(Branch(alt))
            case _:
                msg = f"choice alternative must be an atom or a branch, got {type(alt).__name__}"
                raise GrammarError(msg)
    return Choice(branches=tuple(branches), fallback=fallback)
