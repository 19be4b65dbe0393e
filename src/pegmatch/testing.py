"""Test utilities for pegmatch.

Provides a recording dispatcher and a small custom atom for use in tests and
examples. These are NOT part of the engine; they exist to reduce
boilerplate when exploring pegmatch.

For real grammars, implement Dispatcher and your own atoms.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pegmatch._errors import ExpectedPattern, GrammarError

if TYPE_CHECKING:
    from pegmatch._cursor import Cursor, Position
    from pegmatch._errors import Diagnostic
    from pegmatch._registry import RegistryBuilder


@dataclass(frozen=True, slots=True)
class Success:
    """A recorded ``Dispatcher.success`` call."""

    position: int
    values: tuple[Any, ...] = ()


@dataclass(frozen=True, slots=True)
class Error:
    """A recorded ``Dispatcher.error`` call."""

    diagnostic: Diagnostic


class RecordingDispatcher:
    """Dispatcher that returns what it was called with.

    Every call is also appended to ``calls`` so tests can assert that exactly
    one dispatcher method ran.

    >>> from pegmatch import match, lit
    >>> match(lit("ab"), "abc", RecordingDispatcher())
    Success(position=2, values=())
    """

    def __init__(self) -> None:
        self.calls: list[Success | Error] = []

    def success(self, position: int, /, *values: Any) -> Success:
        result = Success(position, values)
        self.calls.append(result)
        return result

    def error(self, diagnostic: Diagnostic, /) -> Error:
        result = Error(diagnostic)
        self.calls.append(result)
        return result


@dataclass(frozen=True, slots=True)
class CharClass:
    """Fallible atom matching one or more symbols drawn from ``chars``.

    >>> from pegmatch import Cursor
    >>> c = Cursor("123abc")
    >>> CharClass("0123456789").match(c), c.position
    (True, 3)
    """

    chars: str

    def __post_init__(self) -> None:
        if not self.chars:
            msg = "CharClass requires at least one character"
            raise GrammarError(msg)

    def match(self, cursor: Cursor, /) -> bool:
        start = cursor.position
        while self._accepts(cursor.peek()):
            cursor.advance()
        return cursor.position > start

    def _accepts(self, symbol: Any) -> bool:
        return isinstance(symbol, str) and symbol in self.chars

    def error(self, cursor: Cursor, position: Position, /) -> Diagnostic:
        return ExpectedPattern(position=position, pattern=f"[{self.chars}]+")


def register(builder: RegistryBuilder) -> RegistryBuilder:
    """Register the test-domain CharClass atom.

    Type URL: pegmatch.test.v1.CharClass
    Config field: { "chars": "0123456789" }
    """
    return builder.atom("pegmatch.test.v1.CharClass", _char_class_factory)


def _char_class_factory(config: dict[str, Any]) -> CharClass:
    chars = config.get("chars")
    if not isinstance(chars, str):
        msg = "CharClass requires a 'chars' field (string)"
        raise ValueError(msg)
    return CharClass(chars=chars)
