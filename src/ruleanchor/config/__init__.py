"""Configuration loading for anchoring."""

from __future__ import annotations

from ruleanchor.config.loader import load_config
from ruleanchor.config.model import AnchorConfig

__all__ = ["AnchorConfig", "load_config"]
