"""Error types and diagnostics.

Two different things live here and must not be confused:

- ``GrammarError`` and its subclasses are exceptions. They signal a broken
  grammar or a misused API (bad construction, precondition violations,
  malformed config). They are raised.
- ``Diagnostic`` variants are values. They describe why input did not match
  and are handed to ``Dispatcher.error``. They are never raised.
"""

from __future__ import annotations

from dataclasses import dataclass


class GrammarError(Exception):
    """Errors from grammar construction and engine misuse."""


class CursorError(GrammarError):
    """A cursor precondition was violated (advance at end, bad restore)."""


class UnhandledOutcomeError(GrammarError):
    """A Callback has no handler for the outcome it was given."""

    def __init__(self, kind: str, key: object, available: list[str]) -> None:
        self.kind = kind
        self.key = key
        self.available = sorted(available)
        if self.available:
            registered = ", ".join(self.available)
            msg = f"no {kind} handler for {key!r} (registered: {registered})"
        else:
            msg = f"no {kind} handler for {key!r} (no {kind} handlers are registered)"
        super().__init__(msg)


# ═══════════════════════════════════════════════════════════════════════════════
# Diagnostics
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class ExhaustedChoice:
    """No branch of a choice matched and there was no fallback.

    ``position`` is the choice's entry position, never an intermediate one.
    """

    position: int


@dataclass(frozen=True, slots=True)
class ExpectedLiteral:
    """A literal atom did not match.

    ``index`` is the number of symbols of ``literal`` that did match before
    the mismatch (or before end of input).
    """

    position: int
    literal: str | bytes | tuple[object, ...]
    index: int = 0


@dataclass(frozen=True, slots=True)
class ExpectedPattern:
    """A regex atom did not match at ``position``."""

    position: int
    pattern: str


type Diagnostic = ExhaustedChoice | ExpectedLiteral | ExpectedPattern
