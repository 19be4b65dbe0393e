"""Conformance fixture loader for pegmatch.

Loads YAML fixtures from tests/fixtures/ and converts them to pegmatch types
for parametrized testing. Each document holds a grammar (in the config
shape accepted by parse_rule_config) and cases of input plus expected
outcome.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest
import yaml

from pegmatch import Id, Registry, RegistryBuilder, Rule, parse_rule_config
from pegmatch.testing import Error, Success, register

FIXTURE_DIR = Path(__file__).resolve().parent / "fixtures"


@dataclass
class FixtureCase:
    """A single test case from a conformance fixture."""

    fixture_name: str
    case_name: str
    rule: Rule
    input: str
    expect: dict[str, Any]


def make_registry() -> Registry:
    """Build a registry with the test domain."""
    return register(RegistryBuilder()).build()


# ─── YAML → pegmatch type conversion ────────────────────────────────────────


def parse_value(raw: Any) -> Any:
    """Parse an expected captured value. ``{id: x}`` stands for ``Id(x)``."""
    if isinstance(raw, dict) and set(raw) == {"id"}:
        return Id(raw["id"])
    return raw


def matches_expectation(actual: Success | Error, expect: dict[str, Any]) -> bool:
    """Compare a recorded dispatcher call with a fixture expectation."""
    if "error" in expect:
        return (
            isinstance(actual, Error)
            and type(actual.diagnostic).__name__ == expect["error"]
            and actual.diagnostic.position == expect["position"]
        )
    if not isinstance(actual, Success):
        return False
    values: list[Any] = []
    if "tag" in expect:
        values.append(Id(expect["tag"]))
    values.extend(parse_value(v) for v in expect.get("values", []))
    return actual.position == expect["position"] and actual.values == tuple(values)


# ─── Fixture loading ────────────────────────────────────────────────────────


def load_fixtures() -> list[FixtureCase]:
    """Load all conformance fixtures."""
    registry = make_registry()
    cases: list[FixtureCase] = []
    for yaml_file in sorted(FIXTURE_DIR.glob("*.yaml")):
        cases.extend(_load_file(yaml_file, registry))
    return cases


def _load_file(path: Path, registry: Registry) -> list[FixtureCase]:
    """Load a single fixture YAML file (may contain multiple documents)."""
    cases: list[FixtureCase] = []
    with path.open() as f:
        for doc in yaml.safe_load_all(f):
            if doc is None:
                continue
            fixture_name = doc["name"]
            rule = registry.load_rule(parse_rule_config(doc["grammar"]))
            for case in doc["cases"]:
                cases.append(
                    FixtureCase(
                        fixture_name=fixture_name,
                        case_name=case["name"],
                        rule=rule,
                        input=str(case["input"]),
                        expect=case["expect"],
                    )
                )
    return cases


@pytest.fixture
def registry() -> Registry:
    return make_registry()
