"""Tests for anchoring rule sets."""

from __future__ import annotations

from pathlib import Path

from ruleanchor.anchoring import anchor_rules
from ruleanchor.config import AnchorConfig
from ruleanchor.rules import BasicCondition, Effect, FixedParameter, Rule, RuleCase, load_rules
from ruleanchor.state import DialogueState, load_state


def test_keeps_only_relevant_rules_in_order(scenario_rule: Rule, scenario_state: DialogueState) -> None:
    never = Rule("never", "prob", [RuleCase(BasicCondition("X", "z"), ((Effect.of(Y=1), FixedParameter(1.0)),))])
    again = Rule("again", "prob", scenario_rule.cases)

    anchored = anchor_rules([scenario_rule, never, again], scenario_state, config=AnchorConfig(cache_stripes=2))

    assert [rule.variable for rule in anchored] == ["R", "again"]


def test_end_to_end_from_yaml(tmp_path: Path) -> None:
    """Rules and state loaded from YAML anchor and answer queries."""
    rules_dir = tmp_path / "rules"
    rules_dir.mkdir()
    (rules_dir / "greet.yaml").write_text(
        """
rule_id: greet
kind: prob
cases:
  - condition: {var: a_u, eq: hello}
    effects:
      - set: {a_m: "hi {name}"}
        param: theta_greet
      - set: {a_m: silence}
        param: 0
""",
        encoding="utf-8",
    )
    state_path = tmp_path / "state.yaml"
    state_path.write_text("a_u: [hello, bye]\ntheta_greet: [0.6]\n", encoding="utf-8")

    rules = load_rules(rules_dir=rules_dir)
    anchored = anchor_rules(rules, load_state(state_path), {"name": "Ada"})

    assert len(anchored) == 1
    greet = anchored[0]
    assert greet.variable == "greet(name=Ada)"
    assert greet.parameters == frozenset({"theta_greet"})
    assert greet.effects == frozenset({Effect.of(a_m="hi Ada"), Effect.of(a_m="silence")})
    assert dict(greet.distribution({"a_u": "hello", "theta_greet": 0.6}).table) == {Effect.of(a_m="hi Ada"): 0.6}
