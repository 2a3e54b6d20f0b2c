"""Tests for rule schema validation and compilation."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from ruleanchor.datastructs import Assignment
from ruleanchor.exceptions import RuleCompileError, RuleSchemaError
from ruleanchor.rules import Effect, FixedParameter, SingleParameter, compile_rule, validate_rule

RuleFactory = Callable[..., dict[str, Any]]


def test_valid_minimal_rule(minimal_rule: RuleFactory) -> None:
    """Minimal valid rule passes schema validation."""
    validate_rule(minimal_rule(), "<test>")


def test_rejects_unknown_top_key(minimal_rule: RuleFactory) -> None:
    with pytest.raises(RuleSchemaError, match="unknown top-level keys"):
        validate_rule(minimal_rule(bogus="bad"), "<test>")


def test_rejects_missing_rule_id(minimal_rule: RuleFactory) -> None:
    rule = minimal_rule()
    del rule["rule_id"]
    with pytest.raises(RuleSchemaError, match="missing required key 'rule_id'"):
        validate_rule(rule, "<test>")


def test_rejects_unknown_kind(minimal_rule: RuleFactory) -> None:
    with pytest.raises(RuleSchemaError, match="kind"):
        validate_rule(minimal_rule(kind="fuzzy"), "<test>")


def test_rejects_condition_with_both_relations(minimal_rule: RuleFactory) -> None:
    rule = minimal_rule()
    rule["cases"][0]["condition"] = {"var": "a_u", "eq": "hi", "neq": "bye"}
    with pytest.raises(RuleSchemaError, match="exactly one of 'eq' or 'neq'"):
        validate_rule(rule, "<test>")


def test_rejects_effect_without_param(minimal_rule: RuleFactory) -> None:
    rule = minimal_rule()
    rule["cases"][0]["effects"] = [{"set": {"a_m": "greet"}}]
    with pytest.raises(RuleSchemaError, match="param"):
        validate_rule(rule, "<test>")


def test_rejects_boolean_param(minimal_rule: RuleFactory) -> None:
    rule = minimal_rule()
    rule["cases"][0]["effects"][0]["param"] = True
    with pytest.raises(RuleSchemaError, match="param"):
        validate_rule(rule, "<test>")


def test_compile_minimal_rule(minimal_rule: RuleFactory) -> None:
    """Compiled rule evaluates its case and carries the kind tag."""
    rule = compile_rule(minimal_rule(), "<test>")

    assert rule.rule_id == "greet"
    assert rule.kind == "prob"
    output = rule.get_output(Assignment.of(a_u="hello"))
    assert output.effects == (Effect.of(a_m="greet"),)
    assert output.parameter(Effect.of(a_m="greet")) == FixedParameter(0.9)


def test_compile_nested_conditions_and_named_parameters(minimal_rule: RuleFactory) -> None:
    rule = compile_rule(
        minimal_rule(
            kind="util",
            inputs=["a_u", "mood"],
            cases=[
                {
                    "condition": {
                        "all": [
                            {"var": "a_u", "eq": "hello"},
                            {"any": [{"var": "mood", "eq": "happy"}, {"var": "mood", "neq": "sad"}]},
                        ]
                    },
                    "effects": [{"set": {"a_m": "greet"}, "unset": {"a_x": "none"}, "param": "theta_greet"}],
                },
                {"effects": [{"set": {"a_m": "wait"}, "param": 0}]},
            ],
        ),
        "<test>",
    )

    matched = rule.get_output(Assignment.of(a_u="hello", mood="neutral"))
    fallback = rule.get_output(Assignment.of(a_u="bye"))

    assert {str(t) for t in rule.input_variables} == {"a_u", "mood"}
    assert [str(effect) for effect in matched.effects] == ["a_m=greet ^ a_x!=none"]
    assert matched.parameter(matched.effects[0]) == SingleParameter("theta_greet")
    assert fallback.effects == (Effect.of(a_m="wait"),)


def test_compile_rejects_duplicate_effects(minimal_rule: RuleFactory) -> None:
    rule = minimal_rule()
    rule["cases"][0]["effects"] = [
        {"set": {"a_m": "greet"}, "param": 0.5},
        {"set": {"a_m": "greet"}, "param": 0.4},
    ]
    with pytest.raises(RuleCompileError, match="duplicate effect"):
        compile_rule(rule, "<test>")


def test_compile_rejects_parameter_name_with_spaces(minimal_rule: RuleFactory) -> None:
    rule = minimal_rule()
    rule["cases"][0]["effects"][0]["param"] = "theta one"
    with pytest.raises(RuleCompileError, match="invalid parameter name"):
        compile_rule(rule, "<test>")
