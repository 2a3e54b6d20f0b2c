"""Tests for the concurrent output cache and memoised anchored queries."""

from __future__ import annotations

import threading
import time
from collections import Counter
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from typing import Any

import pytest

from ruleanchor.anchoring import AnchoredRule, OutputCache
from ruleanchor.datastructs import Assignment
from ruleanchor.rules import Effect, FixedParameter, Rule, RuleOutput
from ruleanchor.state import DialogueState

Counting = Callable[[Rule], Any]


def test_get_or_compute_stores_first_result() -> None:
    cache = OutputCache(stripes=4)
    calls: list[Assignment] = []

    def compute(key: Assignment) -> RuleOutput:
        calls.append(key)
        return RuleOutput([(Effect.of(Y=1), FixedParameter(1.0))])

    first = cache.get_or_compute(Assignment.of(X="a"), compute)
    second = cache.get_or_compute(Assignment({"X": "a"}), compute)

    assert second is first
    assert calls == [Assignment.of(X="a")]
    assert Assignment.of(X="a") in cache
    assert len(cache) == 1


def test_rejects_non_positive_stripes() -> None:
    with pytest.raises(ValueError, match="stripes"):
        OutputCache(stripes=0)


def test_concurrent_callers_agree_on_one_value_per_key() -> None:
    """Concurrent misses on the same key compute once and share the result."""
    cache = OutputCache(stripes=8)
    computed: Counter[Assignment] = Counter()
    lock = threading.Lock()

    def compute(key: Assignment) -> RuleOutput:
        with lock:
            computed[key] += 1
        time.sleep(0.001)
        return RuleOutput([(Effect.of(Y=key["X"]), FixedParameter(1.0))])

    keys = [Assignment.of(X=index % 10) for index in range(400)]
    with ThreadPoolExecutor(max_workers=16) as pool:
        results = list(pool.map(lambda key: (key, cache.get_or_compute(key, compute)), keys))

    by_key: dict[Assignment, set[int]] = {}
    for key, output in results:
        by_key.setdefault(key, set()).add(id(output))

    assert all(len(ids) == 1 for ids in by_key.values())
    assert set(computed.values()) == {1}
    assert len(cache) == 10


def test_probabilistic_queries_reuse_anchoring_results(
    scenario_rule: Rule,
    scenario_state: DialogueState,
    counting: Counting,
) -> None:
    """Queries trimmed to an already anchored key do not re-evaluate the rule."""
    rule = counting(scenario_rule)
    anchored = AnchoredRule(rule, scenario_state)
    assert anchored.cached
    assert len(rule.calls) == 2

    anchored.distribution({"X": "a", "unrelated": 9})
    anchored.probability({"X": "b"}, Effect.of(Y=2))
    assert len(rule.calls) == 2

    anchored.distribution({"X": "c"})
    anchored.distribution({"X": "c"})
    assert len(rule.calls) == 3


def test_concurrent_queries_on_anchored_rule(scenario_rule: Rule, scenario_state: DialogueState) -> None:
    anchored = AnchoredRule(scenario_rule, scenario_state)
    conditions = [{"X": "a"}, {"X": "b"}] * 200

    with ThreadPoolExecutor(max_workers=8) as pool:
        probabilities = list(pool.map(lambda condition: anchored.probability(condition, Effect.of(Y=1)), conditions))

    assert probabilities == [0.7, 0.2] * 200
