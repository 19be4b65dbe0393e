"""Config types for data-driven grammar construction.

Rules can be described as plain dicts (JSON or YAML) and compiled into the
runtime rule objects by a Registry:
  dict → parse_rule_config() → RuleConfig → Registry.load_rule() → Rule

Relationship to runtime types:

| Config type        | Runtime type |
|--------------------|--------------|
| ChoiceConfig       | Choice       |
| BranchConfig       | Branch       |
| FallbackConfig     | Fallback     |
| CaptureConfig      | Capture      |
| IdConfig           | IdRule       |
| LiteralConfig      | Literal      |
| RegexConfig        | Regex        |
| AnyConfig          | MatchAll     |
| CustomAtomConfig   | registered   |

Shape::

    choice:
      branches:
        - condition: {literal: "abc"}
          tag: 0
        - condition: {regex: "[0-9]+"}
          body: {capture: {any: {}}}
          tag: 1
      else: {tag: other}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pegmatch._errors import GrammarError

# ═══════════════════════════════════════════════════════════════════════════════
# Config types (frozen dataclasses)
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class TypedConfig:
    """Reference to a registered atom type with its configuration.

    - type_url identifies the registered atom factory
    - config carries the type-specific configuration payload
    """

    type_url: str
    config: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class LiteralConfig:
    text: str


@dataclass(frozen=True, slots=True)
class RegexConfig:
    pattern: str


@dataclass(frozen=True, slots=True)
class AnyConfig:
    """The match-all atom. Takes no configuration."""


@dataclass(frozen=True, slots=True)
class CustomAtomConfig:
    """Custom atom resolved via the registry's atom factories."""

    typed_config: TypedConfig


type AtomConfig = LiteralConfig | RegexConfig | AnyConfig | CustomAtomConfig


@dataclass(frozen=True, slots=True)
class CaptureConfig:
    atom: AtomConfig


@dataclass(frozen=True, slots=True)
class IdConfig:
    """A body that produces a discriminant value and consumes nothing."""

    value: Any


@dataclass(frozen=True, slots=True)
class BranchConfig:
    """A guarded alternative: condition atom, optional body, optional tag."""

    condition: AtomConfig
    body: RuleConfig | None = None
    tag: Any = None


@dataclass(frozen=True, slots=True)
class FallbackConfig:
    tag: Any = None


@dataclass(frozen=True, slots=True)
class ChoiceConfig:
    """Configuration for a Choice.

    Loaded into a runtime Choice via Registry.load_rule().
    """

    branches: tuple[BranchConfig, ...]
    fallback: FallbackConfig | None = None


type RuleConfig = AtomConfig | CaptureConfig | IdConfig | ChoiceConfig


# ═══════════════════════════════════════════════════════════════════════════════
# Parsing (dict → config types)
# ═══════════════════════════════════════════════════════════════════════════════

_ATOM_KEYS = frozenset({"literal", "regex", "any", "custom"})
_RULE_KEYS = _ATOM_KEYS | {"capture", "choice", "id"}
_TAG_TYPES = (str, int, bool)


class ConfigParseError(GrammarError):
    """Error parsing a config dict into config types."""


def parse_rule_config(data: dict[str, Any]) -> RuleConfig:
    """Parse a dict into a RuleConfig.

    This is the main entry point for config loading. The dict must have
    exactly one key naming the rule kind.

    Raises:
        ConfigParseError: If the dict is malformed.
    """
    kind, value = _single_key(data, _RULE_KEYS, "rule")
    if kind == "choice":
        return _parse_choice(value)
    if kind == "capture":
        return CaptureConfig(atom=_parse_atom(value))
    if kind == "id":
        if value is None:
            msg = "id value must not be null"
            raise ConfigParseError(msg)
        return IdConfig(value=_parse_tag(value))
    return _parse_atom({kind: value})


def _single_key(data: Any, allowed: frozenset[str], what: str) -> tuple[str, Any]:
    if not isinstance(data, dict):
        msg = f"{what} must be a dict, got {type(data).__name__}"
        raise ConfigParseError(msg)
    keys = [k for k in data if k in allowed]
    if len(keys) != 1 or len(data) != 1:
        got = sorted(map(str, data))
        msg = f"{what} must contain exactly one of {sorted(allowed)}, got keys: {got}"
        raise ConfigParseError(msg)
    return keys[0], data[keys[0]]


def _parse_atom(data: Any) -> AtomConfig:
    kind, value = _single_key(data, _ATOM_KEYS, "atom")

    if kind == "literal":
        if not isinstance(value, str):
            msg = f"literal value must be a string, got {type(value).__name__}"
            raise ConfigParseError(msg)
        return LiteralConfig(text=value)

    if kind == "regex":
        if not isinstance(value, str):
            msg = f"regex value must be a string, got {type(value).__name__}"
            raise ConfigParseError(msg)
        return RegexConfig(pattern=value)

    if kind == "any":
        if value not in (None, {}):
            msg = "any takes no configuration"
            raise ConfigParseError(msg)
        return AnyConfig()

    return CustomAtomConfig(typed_config=_parse_typed_config(value))


def _parse_choice(data: Any) -> ChoiceConfig:
    if not isinstance(data, dict):
        msg = f"choice must be a dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    unknown = set(data) - {"branches", "else"}
    if unknown:
        msg = f"unknown choice fields: {sorted(map(str, unknown))}"
        raise ConfigParseError(msg)

    raw_branches = data.get("branches")
    if raw_branches is None:
        msg = "choice missing required field 'branches'"
        raise ConfigParseError(msg)
    if not isinstance(raw_branches, list):
        msg = f"'branches' must be a list, got {type(raw_branches).__name__}"
        raise ConfigParseError(msg)

    branches = tuple(_parse_branch(b) for b in raw_branches)

    fallback = None
    if "else" in data:
        fallback = _parse_fallback(data["else"])

    return ChoiceConfig(branches=branches, fallback=fallback)


def _parse_branch(data: Any) -> BranchConfig:
    if not isinstance(data, dict):
        msg = f"branch must be a dict, got {type(data).__name__}"
        raise ConfigParseError(msg)
    if "condition" not in data:
        msg = "branch missing required field 'condition'"
        raise ConfigParseError(msg)

    unknown = set(data) - {"condition", "body", "tag"}
    if unknown:
        msg = f"unknown branch fields: {sorted(map(str, unknown))}"
        raise ConfigParseError(msg)

    condition = _parse_atom(data["condition"])
    body = parse_rule_config(data["body"]) if "body" in data else None
    return BranchConfig(condition=condition, body=body, tag=_parse_tag(data.get("tag")))


def _parse_fallback(data: Any) -> FallbackConfig:
    if data is None:
        return FallbackConfig()
    if not isinstance(data, dict):
        msg = f"else must be a dict, got {type(data).__name__}"
        raise ConfigParseError(msg)
    unknown = set(data) - {"tag"}
    if unknown:
        msg = f"unknown else fields: {sorted(map(str, unknown))}"
        raise ConfigParseError(msg)
    return FallbackConfig(tag=_parse_tag(data.get("tag")))


def _parse_tag(value: Any) -> Any:
    if value is None or isinstance(value, _TAG_TYPES):
        return value
    msg = f"tag must be a string or integer, got {type(value).__name__}"
    raise ConfigParseError(msg)


def _parse_typed_config(data: Any) -> TypedConfig:
    """Parse a typed config dict."""
    if not isinstance(data, dict):
        msg = f"typed_config must be a dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    if "type_url" not in data:
        msg = "typed_config missing required field 'type_url'"
        raise ConfigParseError(msg)

    type_url = data["type_url"]
    if not isinstance(type_url, str):
        msg = f"type_url must be a string, got {type(type_url).__name__}"
        raise ConfigParseError(msg)

    config = data.get("config", {})
    if not isinstance(config, dict):
        msg = f"config must be a dict, got {type(config).__name__}"
        raise ConfigParseError(msg)

    return TypedConfig(type_url=type_url, config=config)
