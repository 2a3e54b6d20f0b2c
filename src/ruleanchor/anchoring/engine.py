"""Anchoring of rule sets against a dialogue state."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from ruleanchor.anchoring.anchored_rule import AnchoredRule
from ruleanchor.config import AnchorConfig
from ruleanchor.rules import Rule
from ruleanchor.state import DialogueState
from ruleanchor.types import Value

logger = logging.getLogger(__name__)


def anchor_rules(
    rules: Iterable[Rule],
    state: DialogueState,
    filled_slots: Mapping[str, Value] | None = None,
    *,
    config: AnchorConfig | None = None,
) -> list[AnchoredRule]:
    """Anchor each rule in *state* and keep the relevant ones, in input order."""
    config = config or AnchorConfig()
    anchored: list[AnchoredRule] = []
    for rule in rules:
        candidate = AnchoredRule(rule, state, filled_slots, config=config)
        if candidate.relevant:
            anchored.append(candidate)
        else:
            logger.debug("Rule %s is not relevant in current state", candidate.variable)
    return anchored
