"""Type registry for config-driven grammar construction.

The registry enables generic grammar loading: JSON/YAML config → compiled
rule objects without hand-written construction code.

- RegistryBuilder → .build() → Registry (immutable)
- Factories are plain callables: (config: dict) → Atom
- load_rule() walks the config tree and constructs runtime rules

Example::

    builder = RegistryBuilder()
    builder.atom("pegmatch.test.v1.CharClass", lambda cfg: CharClass(cfg["chars"]))
    registry = builder.build()

    config = parse_rule_config(yaml.safe_load(text))
    rule = registry.load_rule(config)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

import yaml

from pegmatch._atoms import Literal, Regex, any_, as_rule
from pegmatch._choice import MAX_BRANCHES, Branch, Choice, Fallback, TooManyBranchesError
from pegmatch._config import (
    AnyConfig,
    BranchConfig,
    CaptureConfig,
    ChoiceConfig,
    ConfigParseError,
    CustomAtomConfig,
    IdConfig,
    LiteralConfig,
    RegexConfig,
    parse_rule_config,
)
from pegmatch._errors import GrammarError
from pegmatch._types import Atom
from pegmatch._values import EMPTY, Capture, Id, IdRule

if TYPE_CHECKING:
    from collections.abc import Callable

    from pegmatch._config import AtomConfig, FallbackConfig, RuleConfig
    from pegmatch._types import Rule

logger = logging.getLogger(__name__)

# ═══════════════════════════════════════════════════════════════════════════════
# Limits
# ═══════════════════════════════════════════════════════════════════════════════

MAX_PATTERN_LENGTH = 8192
MAX_REGEX_PATTERN_LENGTH = 4096

# ═══════════════════════════════════════════════════════════════════════════════
# Error types
# ═══════════════════════════════════════════════════════════════════════════════


class UnknownTypeUrlError(GrammarError):
    """A type_url was not found in the registry."""

    def __init__(self, type_url: str, available: list[str]) -> None:
        self.type_url = type_url
        self.available = sorted(available)
        if self.available:
            registered = ", ".join(self.available)
            msg = f"unknown atom type_url: {type_url!r} (registered: {registered})"
        else:
            msg = f"unknown atom type_url: {type_url!r} (no atom types are registered)"
        super().__init__(msg)


class InvalidConfigError(GrammarError):
    """A config payload was malformed or semantically invalid."""

    def __init__(self, source: str) -> None:
        self.source = source
        super().__init__(f"invalid config: {source}")


class PatternTooLongError(GrammarError):
    """A literal or regex pattern exceeds the length limit."""

    def __init__(self, length: int, max_: int) -> None:
        self.length = length
        self.max = max_
        super().__init__(f"pattern length {length} exceeds maximum {max_}")


# ═══════════════════════════════════════════════════════════════════════════════
# Builder
# ═══════════════════════════════════════════════════════════════════════════════

type AtomFactory = Callable[[dict[str, Any]], Atom]


class RegistryBuilder:
    """Builder for constructing a Registry.

    Register custom atom factories with type URLs, then call build() to
    produce an immutable Registry. Built-in atoms (literal, regex, any) need
    no registration.
    """

    def __init__(self) -> None:
        self._atom_factories: dict[str, AtomFactory] = {}

    def atom(self, type_url: str, factory: AtomFactory) -> RegistryBuilder:
        """Register an Atom factory with a type URL."""
        self._atom_factories[type_url] = factory
        return self

    def build(self) -> Registry:
        """Freeze the registry. No further registration is possible."""
        return Registry(_atom_factories=MappingProxyType(dict(self._atom_factories)))


# ═══════════════════════════════════════════════════════════════════════════════
# Registry
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Registry:
    """Immutable registry of atom factories.

    Constructed via RegistryBuilder. Use load_rule() to compile config into
    runtime rules.
    """

    _atom_factories: MappingProxyType[str, AtomFactory] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def load_rule(self, config: RuleConfig) -> Rule:
        """Load a rule from configuration.

        Raises:
            UnknownTypeUrlError: custom atom type_url not registered
            InvalidConfigError: config payload malformed
            TooManyBranchesError: too many branches in a choice
            PatternTooLongError: pattern exceeds length limit
            GrammarError: choice nesting too deep
        """
        match config:
            case ChoiceConfig():
                return self._load_choice(config)
            case CaptureConfig(atom=atom):
                return Capture(self._load_atom(atom))
            case IdConfig(value=value):
                return IdRule(Id(value))
            case _:
                return as_rule(self._load_atom(config))

    def load_file(self, path: str | Path) -> Rule:
        """Read a YAML grammar file and load its rule.

        Raises:
            ConfigParseError: file is not a YAML mapping or is malformed
            GrammarError: see load_rule()
        """
        path = Path(path)
        with path.open() as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                msg = f"{path}: {e}"
                raise ConfigParseError(msg) from e
        rule = self.load_rule(parse_rule_config(data))
        logger.debug("loaded grammar %s: %r", path, rule)
        return rule

    @property
    def atom_count(self) -> int:
        """Number of registered custom atom types."""
        return len(self._atom_factories)

    def contains_atom(self, type_url: str) -> bool:
        """Check if an atom type URL is registered."""
        return type_url in self._atom_factories

    def atom_type_urls(self) -> list[str]:
        """Return all registered atom type URLs (sorted)."""
        return sorted(self._atom_factories.keys())

    # ── Private loading methods ────────────────────────────────────────────

    def _load_choice(self, config: ChoiceConfig) -> Choice:
        if len(config.branches) > MAX_BRANCHES:
            raise TooManyBranchesError(len(config.branches), MAX_BRANCHES)

        branches = tuple(self._load_branch(b) for b in config.branches)
        fallback = self._load_fallback(config.fallback) if config.fallback else None
        logger.debug(
            "compiled choice: %d branches, fallback=%s", len(branches), fallback is not None
        )
        return Choice(branches=branches, fallback=fallback)

    def _load_branch(self, config: BranchConfig) -> Branch:
        condition = self._load_atom(config.condition)
        body = EMPTY if config.body is None else self.load_rule(config.body)
        return Branch(condition=condition, body=body, tag=_load_tag(config.tag))

    def _load_fallback(self, config: FallbackConfig) -> Fallback:
        return Fallback(tag=_load_tag(config.tag))

    def _load_atom(self, config: AtomConfig) -> Atom:
        match config:
            case LiteralConfig(text=text):
                if not text:
                    msg = "literal must not be empty"
                    raise InvalidConfigError(msg)
                if len(text) > MAX_PATTERN_LENGTH:
                    raise PatternTooLongError(len(text), MAX_PATTERN_LENGTH)
                return Literal(text)
            case RegexConfig(pattern=pattern):
                if len(pattern) > MAX_REGEX_PATTERN_LENGTH:
                    raise PatternTooLongError(len(pattern), MAX_REGEX_PATTERN_LENGTH)
                try:
                    return Regex(pattern)
                except GrammarError as e:
                    raise InvalidConfigError(str(e)) from e
            case AnyConfig():
                return any_
            case CustomAtomConfig(typed_config=tc):
                factory = self._atom_factories.get(tc.type_url)
                if factory is None:
                    raise UnknownTypeUrlError(tc.type_url, list(self._atom_factories.keys()))
                try:
                    atom = factory(tc.config)
                except Exception as e:
                    raise InvalidConfigError(str(e)) from e
                if not isinstance(atom, Atom):
                    msg = f"factory for {tc.type_url!r} returned {type(atom).__name__}, not an atom"
                    raise InvalidConfigError(msg)
                return atom
            case _:  # pragma: no cover
                msg = f"unknown atom config type: {type(config).__name__}"
                raise InvalidConfigError(msg)


def _load_tag(tag: Any) -> Id | None:
    return None if tag is None else Id(tag)


def load_grammar(path: str | Path, registry: Registry | None = None) -> Rule:
    """Load a YAML grammar file with ``registry`` (or an empty one)."""
    return (registry or Registry()).load_file(path)
