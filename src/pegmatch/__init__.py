"""pegmatch — ordered-choice rule matching for parser combinators.

All public types are exported from this module for flat imports:

    from pegmatch import Choice, Branch, Id, lit, guard, choice, match
"""

__version__ = "0.1.0"

# Atoms
from pegmatch._atoms import (
    AtomRule,
    Literal,
    MatchAll,
    Regex,
    any_,
    as_rule,
    lit,
    regex,
    report_failure,
)

# Dispatch
from pegmatch._callback import Callback, CallbackBuilder

# Choice
from pegmatch._choice import (
    ELSE,
    MAX_BRANCHES,
    MAX_DEPTH,
    Branch,
    Choice,
    Fallback,
    TooManyBranchesError,
    choice,
    else_,
    guard,
)

# Config types — see pegmatch._config for details
from pegmatch._config import (
    AnyConfig,
    AtomConfig,
    BranchConfig,
    CaptureConfig,
    ChoiceConfig,
    ConfigParseError,
    CustomAtomConfig,
    FallbackConfig,
    IdConfig,
    LiteralConfig,
    RegexConfig,
    RuleConfig,
    TypedConfig,
    parse_rule_config,
)
from pegmatch._cursor import EOF, Cursor, Position

# Errors and diagnostics
from pegmatch._errors import (
    CursorError,
    Diagnostic,
    ExhaustedChoice,
    ExpectedLiteral,
    ExpectedPattern,
    GrammarError,
    UnhandledOutcomeError,
)
from pegmatch._outcome import Failed, Matched, NotMatched, Outcome, dispatch, match

# Registry — see pegmatch._registry for details
from pegmatch._registry import (
    MAX_PATTERN_LENGTH,
    MAX_REGEX_PATTERN_LENGTH,
    InvalidConfigError,
    PatternTooLongError,
    Registry,
    RegistryBuilder,
    UnknownTypeUrlError,
    load_grammar,
)
from pegmatch._trace import ChoiceTrace, TraceStep, trace

# Protocols
from pegmatch._types import Atom, Dispatcher, FallibleAtom, Rule
from pegmatch._values import EMPTY, Capture, Empty, Id, IdRule, capture

__all__ = [
    # Protocols
    "Atom",
    "FallibleAtom",
    "Rule",
    "Dispatcher",
    # Cursor
    "Cursor",
    "Position",
    "EOF",
    # Atoms
    "MatchAll",
    "Literal",
    "Regex",
    "any_",
    "lit",
    "regex",
    "report_failure",
    "AtomRule",
    "as_rule",
    # Values
    "Id",
    "Empty",
    "EMPTY",
    "IdRule",
    "Capture",
    "capture",
    # Choice
    "Branch",
    "Fallback",
    "Choice",
    "ELSE",
    "guard",
    "else_",
    "choice",
    "MAX_DEPTH",
    "MAX_BRANCHES",
    # Outcomes and dispatch
    "Matched",
    "NotMatched",
    "Failed",
    "Outcome",
    "dispatch",
    "match",
    "Callback",
    "CallbackBuilder",
    # Trace
    "trace",
    "ChoiceTrace",
    "TraceStep",
    # Errors and diagnostics
    "GrammarError",
    "CursorError",
    "UnhandledOutcomeError",
    "TooManyBranchesError",
    "Diagnostic",
    "ExhaustedChoice",
    "ExpectedLiteral",
    "ExpectedPattern",
    # Config types
    "TypedConfig",
    "LiteralConfig",
    "RegexConfig",
    "AnyConfig",
    "CustomAtomConfig",
    "AtomConfig",
    "CaptureConfig",
    "IdConfig",
    "BranchConfig",
    "FallbackConfig",
    "ChoiceConfig",
    "RuleConfig",
    "ConfigParseError",
    "parse_rule_config",
    # Registry
    "RegistryBuilder",
    "Registry",
    "load_grammar",
    "UnknownTypeUrlError",
    "InvalidConfigError",
    "PatternTooLongError",
    "MAX_PATTERN_LENGTH",
    "MAX_REGEX_PATTERN_LENGTH",
]
