"""Cursor — position over a sequential input.

The cursor never copies or mutates its input. All state is a single integer
offset, so a snapshot is just that integer and restore is an assignment.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Final, final

from pegmatch._errors import CursorError

type Position = int


@final
class _EndOfInput:
    """Sentinel type for the end of input. There is exactly one instance."""

    __slots__ = ()
    _instance: _EndOfInput | None = None

    def __new__(cls) -> _EndOfInput:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "EOF"

    def __reduce__(self) -> str:
        return "EOF"


EOF: Final = _EndOfInput()


class Cursor:
    """A read position into a sequence of symbols.

    Works over any ``Sequence``: ``str`` yields one-character strings,
    ``bytes`` yields ints, lists and tuples yield their items. A cursor is
    owned by exactly one match invocation.

    >>> c = Cursor("ab")
    >>> c.peek()
    'a'
    >>> c.advance(); c.peek()
    'b'
    >>> c.advance(); c.peek()
    EOF
    """

    __slots__ = ("_input", "_position")

    def __init__(self, input: Sequence[Any], position: Position = 0) -> None:
        if not 0 <= position <= len(input):
            msg = f"start position {position} outside input of length {len(input)}"
            raise CursorError(msg)
        self._input = input
        self._position = position

    def __repr__(self) -> str:
        return f"Cursor(position={self._position}, end={len(self._input)})"

    @property
    def input(self) -> Sequence[Any]:
        return self._input

    @property
    def position(self) -> Position:
        return self._position

    @property
    def end(self) -> Position:
        return len(self._input)

    @property
    def at_end(self) -> bool:
        return self._position >= len(self._input)

    def peek(self) -> Any:
        """Return the next symbol without consuming it, or ``EOF``."""
        if self._position >= len(self._input):
            return EOF
        return self._input[self._position]

    def advance(self) -> None:
        """Consume one symbol.

        Raises:
            CursorError: If the cursor is already at end of input.
        """
        if self._position >= len(self._input):
            msg = f"advance past end of input at position {self._position}"
            raise CursorError(msg)
        self._position += 1

    def snapshot(self) -> Position:
        return self._position

    def restore(self, position: Position) -> None:
        """Reset to ``position`` exactly, discarding any consumption since.

        Raises:
            CursorError: If ``position`` lies outside the input.
        """
        if not 0 <= position <= len(self._input):
            msg = f"cannot restore to position {position} (input length {len(self._input)})"
            raise CursorError(msg)
        self._position = position

    def remaining(self) -> Sequence[Any]:
        return self._input[self._position :]

    def consumed_since(self, position: Position) -> Sequence[Any]:
        """Slice of input between a snapshot and the current position."""
        return self._input[position : self._position]


def as_cursor(source: Cursor | Sequence[Any]) -> Cursor:
    """Wrap a raw sequence in a fresh cursor; pass cursors through."""
    if isinstance(source, Cursor):
        return source
    return Cursor(source)
