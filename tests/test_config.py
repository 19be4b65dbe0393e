"""Tests for config parsing (pegmatch._config)."""

from __future__ import annotations

import pytest

from pegmatch import (
    AnyConfig,
    BranchConfig,
    CaptureConfig,
    ChoiceConfig,
    ConfigParseError,
    CustomAtomConfig,
    FallbackConfig,
    GrammarError,
    IdConfig,
    LiteralConfig,
    RegexConfig,
    TypedConfig,
    parse_rule_config,
)


class TestAtoms:
    def test_literal(self) -> None:
        assert parse_rule_config({"literal": "abc"}) == LiteralConfig("abc")

    def test_regex(self) -> None:
        assert parse_rule_config({"regex": "[a-z]+"}) == RegexConfig("[a-z]+")

    def test_any(self) -> None:
        assert parse_rule_config({"any": {}}) == AnyConfig()
        assert parse_rule_config({"any": None}) == AnyConfig()

    def test_any_rejects_config(self) -> None:
        with pytest.raises(ConfigParseError, match="no configuration"):
            parse_rule_config({"any": {"x": 1}})

    def test_custom(self) -> None:
        cfg = parse_rule_config(
            {"custom": {"type_url": "test.Digits", "config": {"chars": "01"}}}
        )
        assert cfg == CustomAtomConfig(TypedConfig("test.Digits", {"chars": "01"}))

    def test_custom_defaults_config(self) -> None:
        cfg = parse_rule_config({"custom": {"type_url": "test.Digits"}})
        assert isinstance(cfg, CustomAtomConfig)
        assert cfg.typed_config.config == {}

    def test_literal_must_be_string(self) -> None:
        with pytest.raises(ConfigParseError, match="must be a string"):
            parse_rule_config({"literal": 5})

    def test_type_url_must_be_string(self) -> None:
        with pytest.raises(ConfigParseError, match="type_url must be a string"):
            parse_rule_config({"custom": {"type_url": 1}})

    def test_missing_type_url(self) -> None:
        with pytest.raises(ConfigParseError, match="type_url"):
            parse_rule_config({"custom": {}})


class TestRules:
    def test_capture(self) -> None:
        assert parse_rule_config({"capture": {"any": {}}}) == CaptureConfig(AnyConfig())

    def test_id(self) -> None:
        assert parse_rule_config({"id": 0}) == IdConfig(0)
        assert parse_rule_config({"id": "dollar"}) == IdConfig("dollar")

    def test_id_body(self) -> None:
        cfg = parse_rule_config(
            {"choice": {"branches": [{"condition": {"literal": "$"}, "body": {"id": 1}}]}}
        )
        assert cfg == ChoiceConfig(branches=(BranchConfig(LiteralConfig("$"), body=IdConfig(1)),))

    def test_id_must_be_scalar(self) -> None:
        with pytest.raises(ConfigParseError, match="tag must be"):
            parse_rule_config({"id": [1]})
        with pytest.raises(ConfigParseError, match="must not be null"):
            parse_rule_config({"id": None})

    def test_choice(self) -> None:
        cfg = parse_rule_config(
            {
                "choice": {
                    "branches": [
                        {"condition": {"literal": "abc"}, "tag": 0},
                        {"condition": {"literal": "#"}, "body": {"capture": {"any": {}}}},
                    ],
                    "else": {"tag": "other"},
                }
            }
        )
        assert cfg == ChoiceConfig(
            branches=(
                BranchConfig(LiteralConfig("abc"), tag=0),
                BranchConfig(LiteralConfig("#"), body=CaptureConfig(AnyConfig())),
            ),
            fallback=FallbackConfig("other"),
        )

    def test_bare_else(self) -> None:
        cfg = parse_rule_config({"choice": {"branches": [], "else": None}})
        assert cfg == ChoiceConfig(branches=(), fallback=FallbackConfig())


class TestErrors:
    def test_not_a_dict(self) -> None:
        with pytest.raises(ConfigParseError, match="must be a dict"):
            parse_rule_config(["literal", "a"])  # type: ignore[arg-type]

    def test_unknown_kind(self) -> None:
        with pytest.raises(ConfigParseError, match="exactly one of"):
            parse_rule_config({"sequence": []})

    def test_two_kinds(self) -> None:
        with pytest.raises(ConfigParseError, match="exactly one of"):
            parse_rule_config({"literal": "a", "regex": "b"})

    def test_choice_missing_branches(self) -> None:
        with pytest.raises(ConfigParseError, match="'branches'"):
            parse_rule_config({"choice": {}})

    def test_branches_must_be_list(self) -> None:
        with pytest.raises(ConfigParseError, match="must be a list"):
            parse_rule_config({"choice": {"branches": {}}})

    def test_branch_missing_condition(self) -> None:
        with pytest.raises(ConfigParseError, match="'condition'"):
            parse_rule_config({"choice": {"branches": [{"tag": 0}]}})

    def test_condition_must_be_atom(self) -> None:
        with pytest.raises(ConfigParseError, match="atom must contain"):
            parse_rule_config(
                {"choice": {"branches": [{"condition": {"choice": {"branches": []}}}]}}
            )

    def test_unknown_branch_field(self) -> None:
        with pytest.raises(ConfigParseError, match="unknown branch fields"):
            parse_rule_config({"choice": {"branches": [{"condition": {"any": {}}, "x": 1}]}})

    def test_unknown_choice_field(self) -> None:
        with pytest.raises(ConfigParseError, match="unknown choice fields"):
            parse_rule_config({"choice": {"branches": [], "fallback": {}}})

    def test_tag_must_be_scalar(self) -> None:
        with pytest.raises(ConfigParseError, match="tag must be"):
            parse_rule_config({"choice": {"branches": [{"condition": {"any": {}}, "tag": [1]}]}})

    def test_is_a_grammar_error(self) -> None:
        assert issubclass(ConfigParseError, GrammarError)
