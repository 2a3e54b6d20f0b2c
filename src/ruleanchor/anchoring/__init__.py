"""Anchoring of rules in dialogue states."""

from .anchored_rule import AnchoredRule
from .cache import OutputCache
from .engine import anchor_rules

__all__ = ["AnchoredRule", "OutputCache", "anchor_rules"]
