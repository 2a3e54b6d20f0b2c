"""Shared pytest fixtures for rule, state and anchoring tests."""

from __future__ import annotations

import threading
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import pytest
import yaml

from ruleanchor.datastructs import Assignment
from ruleanchor.rules import BasicCondition, Effect, FixedParameter, Rule, RuleCase, RuleOutput
from ruleanchor.state import DialogueState
from ruleanchor.types import Value


class CountingRule(Rule):
    """Rule that records every assignment it is evaluated on."""

    def __init__(self, rule: Rule) -> None:
        super().__init__(rule.rule_id, rule.kind, rule.cases, [str(t) for t in rule.input_variables])
        self.calls: list[Assignment] = []
        self._lock = threading.Lock()

    def get_output(self, assignment: Mapping[str, Value]) -> RuleOutput:
        with self._lock:
            self.calls.append(Assignment(assignment))
        return super().get_output(assignment)


@pytest.fixture()
def counting() -> Callable[[Rule], CountingRule]:
    """Return a factory wrapping a rule so its evaluations are recorded."""
    return CountingRule


@pytest.fixture()
def scenario_rule() -> Rule:
    """Probabilistic rule over X: X=a -> Y=1 (0.7); X=b -> Y=1 (0.2), Y=2 (0.8)."""
    return Rule(
        "R",
        "prob",
        [
            RuleCase(BasicCondition("X", "a"), ((Effect.of(Y=1), FixedParameter(0.7)),)),
            RuleCase(
                BasicCondition("X", "b"),
                ((Effect.of(Y=1), FixedParameter(0.2)), (Effect.of(Y=2), FixedParameter(0.8))),
            ),
        ],
    )


@pytest.fixture()
def scenario_state() -> DialogueState:
    return DialogueState({"X": ["a", "b"]})


def _minimal_rule(**overrides: Any) -> dict[str, Any]:
    """Return a minimal valid rule mapping, merged with *overrides*."""
    base: dict[str, Any] = {
        "rule_id": "greet",
        "kind": "prob",
        "cases": [
            {
                "condition": {"var": "a_u", "eq": "hello"},
                "effects": [{"set": {"a_m": "greet"}, "param": 0.9}],
            }
        ],
    }
    base.update(overrides)
    return base


@pytest.fixture()
def minimal_rule() -> Callable[..., dict[str, Any]]:
    return _minimal_rule


@pytest.fixture()
def write_rule_file() -> Callable[..., Path]:
    """Return a helper writing a minimal rule YAML file to a path."""

    def _write(path: Path, **overrides: Any) -> Path:
        payload = _minimal_rule(**overrides)
        path.write_text(yaml.safe_dump(payload, sort_keys=False), encoding="utf-8")
        return path

    return _write
