"""Rule language exceptions."""

from __future__ import annotations

from ruleanchor.exceptions.base import RuleAnchorError


class RuleError(RuleAnchorError):
    """Base class for rule definition errors."""


class RuleSchemaError(RuleError, ValueError):
    """Raised when a rule mapping violates the rule file schema."""


class RuleCompileError(RuleError):
    """Raised when a schema-valid rule cannot be compiled."""


class ParameterError(RuleAnchorError, LookupError):
    """Raised when a parameter is evaluated on an assignment missing its variable."""
