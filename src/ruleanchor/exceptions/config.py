"""Configuration-related exceptions."""

from __future__ import annotations

from ruleanchor.exceptions.base import RuleAnchorError


class ConfigError(RuleAnchorError, ValueError):
    """Raised when configuration, rule sources or state files are invalid."""
