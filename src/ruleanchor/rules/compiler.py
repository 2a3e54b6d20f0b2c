"""Compiler: transform validated YAML rule mappings into Rule objects."""

from __future__ import annotations

from typing import Any

from ruleanchor.exceptions import RuleCompileError
from ruleanchor.rules.conditions import BasicCondition, Condition, ConditionSet, VoidCondition
from ruleanchor.rules.effects import BasicEffect, Effect
from ruleanchor.rules.parameters import FixedParameter, Parameter, SingleParameter
from ruleanchor.rules.rule import Rule, RuleCase
from ruleanchor.rules.schema import validate_rule


def compile_rule(data: dict[str, Any], source_path: str) -> Rule:
    """Validate and compile a YAML rule dict into a Rule.

    Raises RuleSchemaError on schema violations, RuleCompileError on
    compilation failures.
    """
    validate_rule(data, source_path)

    cases: list[RuleCase] = []
    for index, raw_case in enumerate(data["cases"]):
        where = f"{source_path}: cases[{index}]"
        condition = _compile_condition(raw_case.get("condition"))
        effects = tuple(_compile_effect(raw_effect, where) for raw_effect in raw_case["effects"])
        seen = [effect for effect, _ in effects]
        if len(set(seen)) != len(seen):
            raise RuleCompileError(f"{where}: duplicate effect in case")
        cases.append(RuleCase(condition=condition, effects=effects))

    return Rule(
        rule_id=data["rule_id"],
        kind=data["kind"],
        cases=cases,
        input_variables=data.get("inputs"),
    )


def _compile_condition(raw: dict[str, Any] | None) -> Condition:
    if not raw:
        return VoidCondition()
    if "all" in raw:
        return ConditionSet(tuple(_compile_condition(member) for member in raw["all"]), "and")
    if "any" in raw:
        return ConditionSet(tuple(_compile_condition(member) for member in raw["any"]), "or")
    if "eq" in raw:
        return BasicCondition(raw["var"], raw["eq"], "=")
    return BasicCondition(raw["var"], raw["neq"], "!=")


def _compile_effect(raw: dict[str, Any], where: str) -> tuple[Effect, Parameter]:
    basics = [BasicEffect(variable, value) for variable, value in (raw.get("set") or {}).items()]
    basics.extend(BasicEffect(variable, value, negated=True) for variable, value in (raw.get("unset") or {}).items())
    return Effect(basics), _compile_parameter(raw["param"], where)


def _compile_parameter(raw: int | float | str, where: str) -> Parameter:
    if isinstance(raw, str):
        name = raw.strip()
        if not name or any(char.isspace() for char in name):
            raise RuleCompileError(f"{where}: invalid parameter name {raw!r}")
        return SingleParameter(name)
    return FixedParameter(float(raw))
