"""Root exception for Ruleanchor."""

from __future__ import annotations


class RuleAnchorError(Exception):
    """Base class for all errors raised by Ruleanchor."""
