"""Rule language: conditions, effects, parameters and rule files."""

from .compiler import compile_rule
from .conditions import BasicCondition, Condition, ConditionSet, VoidCondition
from .effects import BasicEffect, Effect
from .loader import load_rules
from .output import RuleOutput
from .parameters import FixedParameter, Parameter, SingleParameter, SumParameter
from .rule import Rule, RuleCase
from .schema import validate_rule

__all__ = [
    "BasicCondition",
    "BasicEffect",
    "Condition",
    "ConditionSet",
    "Effect",
    "FixedParameter",
    "Parameter",
    "Rule",
    "RuleCase",
    "RuleOutput",
    "SingleParameter",
    "SumParameter",
    "VoidCondition",
    "compile_rule",
    "load_rules",
    "validate_rule",
]
