"""Shared exception hierarchy for Ruleanchor."""

from __future__ import annotations

from .base import RuleAnchorError
from .config import ConfigError
from .rules import ParameterError, RuleCompileError, RuleError, RuleSchemaError

__all__ = [
    "ConfigError",
    "ParameterError",
    "RuleAnchorError",
    "RuleCompileError",
    "RuleError",
    "RuleSchemaError",
]
