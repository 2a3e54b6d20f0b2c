"""Shared type aliases for Ruleanchor."""

from .common import Relation, RuleKind, SetOperator, Value

__all__ = ["Relation", "RuleKind", "SetOperator", "Value"]
