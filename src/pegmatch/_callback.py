"""Callback — a Dispatcher assembled from per-discriminant handlers.

Instead of resolving a success overload by type, a Callback looks up the
handler by the discriminant the winning branch carried (a tagged-union
match). Error handlers are keyed by diagnostic class.

Example::

    callback = (
        CallbackBuilder()
        .success(Id(0), lambda pos: "abc")
        .success(Id(1), lambda pos: "def")
        .error(ExhaustedChoice, lambda diag: None)
        .build()
    )
    match(rule, "abc", callback)

Success handlers receive ``(position, *values)`` without the discriminant.
The handler registered under ``None`` receives successes from untagged
alternatives.

The discriminant is whatever ``Id`` leads the values, wherever it came from.
An untagged branch whose body is a tagged choice (or an ``IdRule``) is
routed by the body's ``Id``; tag the outer branch to route by it instead.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from pegmatch._errors import UnhandledOutcomeError
from pegmatch._values import Id

if TYPE_CHECKING:
    from pegmatch._errors import Diagnostic

type SuccessHandler[R] = Callable[..., R]
type ErrorHandler[R] = Callable[[Diagnostic], R]


class CallbackBuilder[R]:
    """Builder for constructing a Callback.

    Register handlers, then call build() to produce an immutable Callback.
    """

    def __init__(self) -> None:
        self._success: dict[Id | None, SuccessHandler[R]] = {}
        self._error: dict[type, ErrorHandler[R]] = {}

    def success(self, tag: Id | None, handler: SuccessHandler[R]) -> CallbackBuilder[R]:
        """Register the success handler for discriminant ``tag``."""
        self._success[tag] = handler
        return self

    def error(self, kind: type, handler: ErrorHandler[R]) -> CallbackBuilder[R]:
        """Register the error handler for diagnostic class ``kind``."""
        self._error[kind] = handler
        return self

    def build(self) -> Callback[R]:
        """Freeze the callback. No further registration is possible."""
        return Callback(
            _success=MappingProxyType(dict(self._success)),
            _error=MappingProxyType(dict(self._error)),
        )


@dataclass(frozen=True, slots=True)
class Callback[R]:
    """Immutable Dispatcher keyed by discriminant and diagnostic kind."""

    _success: MappingProxyType[Id | None, SuccessHandler[R]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    _error: MappingProxyType[type, ErrorHandler[R]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def success(self, position: int, /, *values: Any) -> R:
        tag: Id | None = None
        if values and isinstance(values[0], Id):
            tag, values = values[0], values[1:]
        handler = self._success.get(tag)
        if handler is None:
            raise UnhandledOutcomeError("success", tag, [repr(k) for k in self._success])
        return handler(position, *values)

    def error(self, diagnostic: Diagnostic, /) -> R:
        handler = self._error.get(type(diagnostic))
        if handler is None:
            raise UnhandledOutcomeError(
                "error", type(diagnostic).__name__, [k.__name__ for k in self._error]
            )
        return handler(diagnostic)

    @property
    def tags(self) -> list[Id | None]:
        """Registered success discriminants."""
        return list(self._success)
