"""Strict schema validation for YAML rule files.

Validates parsed YAML dicts at load time. Raises RuleSchemaError on the
first violation.
"""

from __future__ import annotations

from typing import Any

from ruleanchor.constants.rules_schema import (
    ALLOWED_BASIC_CONDITION_KEYS,
    ALLOWED_CASE_KEYS,
    ALLOWED_EFFECT_KEYS,
    ALLOWED_TOP_KEYS,
    CONDITION_SET_KEYS,
    REQUIRED_TOP_KEYS,
    VALID_RULE_KINDS,
)
from ruleanchor.exceptions import RuleSchemaError


def validate_rule(data: dict[str, Any], source_path: str) -> None:
    """Validate a YAML rule dict. Raises RuleSchemaError on any violation."""
    if not isinstance(data, dict):
        raise RuleSchemaError(f"{source_path}: rule must be a mapping, got {type(data).__name__}")

    unknown_top = set(data.keys()) - ALLOWED_TOP_KEYS
    if unknown_top:
        raise RuleSchemaError(f"{source_path}: unknown top-level keys: {sorted(unknown_top)}")

    for key in sorted(REQUIRED_TOP_KEYS):
        if key not in data:
            raise RuleSchemaError(f"{source_path}: missing required key '{key}'")

    rule_id = data["rule_id"]
    if not isinstance(rule_id, str) or not rule_id.strip():
        raise RuleSchemaError(f"{source_path}: 'rule_id' must be a non-empty string")

    if data["kind"] not in VALID_RULE_KINDS:
        raise RuleSchemaError(
            f"{source_path}: kind must be one of {sorted(VALID_RULE_KINDS)}, got {data['kind']!r}"
        )

    if "inputs" in data:
        inputs = data["inputs"]
        if not isinstance(inputs, list) or not all(isinstance(item, str) and item.strip() for item in inputs):
            raise RuleSchemaError(f"{source_path}: 'inputs' must be a list of non-empty strings")

    if "description" in data and not isinstance(data["description"], str):
        raise RuleSchemaError(f"{source_path}: 'description' must be a string")

    cases = data["cases"]
    if not isinstance(cases, list):
        raise RuleSchemaError(f"{source_path}: 'cases' must be a list")
    for index, case in enumerate(cases):
        _validate_case(case, f"{source_path}: cases[{index}]")


def _validate_case(case: Any, where: str) -> None:
    if not isinstance(case, dict):
        raise RuleSchemaError(f"{where} must be a mapping")

    unknown = set(case.keys()) - ALLOWED_CASE_KEYS
    if unknown:
        raise RuleSchemaError(f"{where}: unknown keys: {sorted(unknown)}")

    if "condition" in case and case["condition"] is not None:
        _validate_condition(case["condition"], f"{where}.condition")

    effects = case.get("effects")
    if not isinstance(effects, list):
        raise RuleSchemaError(f"{where}: 'effects' must be a list")
    for index, effect in enumerate(effects):
        _validate_effect(effect, f"{where}.effects[{index}]")


def _validate_condition(condition: Any, where: str) -> None:
    if not isinstance(condition, dict):
        raise RuleSchemaError(f"{where} must be a mapping")

    set_keys = set(condition.keys()) & CONDITION_SET_KEYS
    if set_keys:
        if len(condition) != 1:
            raise RuleSchemaError(f"{where}: 'all'/'any' must be the only key of a condition")
        key = next(iter(set_keys))
        members = condition[key]
        if not isinstance(members, list) or not members:
            raise RuleSchemaError(f"{where}.{key} must be a non-empty list")
        for index, member in enumerate(members):
            _validate_condition(member, f"{where}.{key}[{index}]")
        return

    unknown = set(condition.keys()) - ALLOWED_BASIC_CONDITION_KEYS
    if unknown:
        raise RuleSchemaError(f"{where}: unknown keys: {sorted(unknown)}")

    variable = condition.get("var")
    if not isinstance(variable, str) or not variable.strip():
        raise RuleSchemaError(f"{where}: 'var' must be a non-empty string")

    relations = [key for key in ("eq", "neq") if key in condition]
    if len(relations) != 1:
        raise RuleSchemaError(f"{where}: exactly one of 'eq' or 'neq' is required")
    _validate_scalar(condition[relations[0]], f"{where}.{relations[0]}")


def _validate_effect(effect: Any, where: str) -> None:
    if not isinstance(effect, dict):
        raise RuleSchemaError(f"{where} must be a mapping")

    unknown = set(effect.keys()) - ALLOWED_EFFECT_KEYS
    if unknown:
        raise RuleSchemaError(f"{where}: unknown keys: {sorted(unknown)}")

    if "param" not in effect:
        raise RuleSchemaError(f"{where}: missing required key 'param'")

    for key in ("set", "unset"):
        if key not in effect or effect[key] is None:
            continue
        pairs = effect[key]
        if not isinstance(pairs, dict):
            raise RuleSchemaError(f"{where}.{key} must be a mapping of variable to value")
        for variable, value in pairs.items():
            if not isinstance(variable, str) or not variable.strip():
                raise RuleSchemaError(f"{where}.{key}: variable names must be non-empty strings")
            _validate_scalar(value, f"{where}.{key}.{variable}")

    param = effect["param"]
    if isinstance(param, bool) or not isinstance(param, (int, float, str)):
        raise RuleSchemaError(f"{where}.param must be a number or a parameter name, got {param!r}")


def _validate_scalar(value: Any, where: str) -> None:
    if isinstance(value, (list, dict)):
        raise RuleSchemaError(f"{where} must be a scalar value")
