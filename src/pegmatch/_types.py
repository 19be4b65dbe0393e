"""Core protocols and type aliases for pegmatch.

The capability split mirrors how rules compose:
- Atom is the infallible matching port (match only, no failure reporting)
- FallibleAtom adds the failure-reporting operation
- Rule is the uniform capability every composite exposes
- Dispatcher is the caller-supplied sink for the final outcome
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from pegmatch._cursor import Cursor, Position
    from pegmatch._errors import Diagnostic
    from pegmatch._outcome import Outcome

R = TypeVar("R", covariant=True)


@runtime_checkable
class Atom(Protocol):
    """A stateless matcher with no internal alternation.

    ``match`` is a pure function of the cursor: it either consumes input and
    returns True, or returns False. Callers that need rollback take a
    snapshot first; atoms never restore on their own.

    An Atom without an ``error`` method cannot fail. Asking it for a
    diagnostic is a program defect, not a user-facing condition.
    """

    def match(self, cursor: Cursor, /) -> bool: ...


@runtime_checkable
class FallibleAtom(Atom, Protocol):
    """An atom that can fail and describe why."""

    def error(self, cursor: Cursor, position: Position, /) -> Diagnostic: ...


@runtime_checkable
class Rule(Protocol):
    """Uniform rule capability.

    ``parse`` runs the rule and returns an explicit outcome value.
    ``try_match`` runs it and hands the outcome to a dispatcher.
    """

    def parse(self, cursor: Cursor, /) -> Outcome: ...

    def try_match(self, cursor: Cursor, dispatcher: Dispatcher[Any], /) -> Any: ...


@runtime_checkable
class Dispatcher(Protocol[R]):
    """Caller-supplied sink for the result of a match.

    Exactly one method is invoked per top-level match. Its return value
    becomes the result of the match; the engine never inspects it.
    """

    def success(self, position: Position, /, *values: Any) -> R: ...

    def error(self, diagnostic: Diagnostic, /) -> R: ...
