"""Distributions with part of their conditioning assignment fixed."""

from __future__ import annotations

import random
from collections.abc import Mapping

from ruleanchor.datastructs import Assignment
from ruleanchor.distribs.base import ProbDistribution
from ruleanchor.distribs.categorical import CategoricalTable
from ruleanchor.types import Value


class MarginalDistribution(ProbDistribution):
    """View of *base* conditioned on a fixed assignment.

    Query conditions are merged over the fixed one, so values given at
    query time win on conflict.
    """

    def __init__(self, base: ProbDistribution, condition: Mapping[str, Value]) -> None:
        self._base = base
        self._condition = Assignment(condition)

    @property
    def variable(self) -> str:
        return self._base.variable

    @property
    def input_variables(self) -> frozenset[str]:
        return self._base.input_variables - self._condition.variables

    @property
    def values(self) -> frozenset[Value]:
        return self._base.values

    def probability(self, condition: Mapping[str, Value], head: Value) -> float:
        return self._base.probability(self._condition.merge(condition), head)

    def distribution(self, condition: Mapping[str, Value]) -> CategoricalTable:
        return self._base.distribution(self._condition.merge(condition))

    def posterior(self, condition: Mapping[str, Value]) -> ProbDistribution:
        return MarginalDistribution(self._base, self._condition.merge(condition))

    def sample(self, condition: Mapping[str, Value], rng: random.Random | None = None) -> Value | None:
        return self._base.sample(self._condition.merge(condition), rng)

    def modify_variable_id(self, old_id: str, new_id: str) -> None:
        self._base.modify_variable_id(old_id, new_id)

    def prune_values(self, threshold: float) -> bool:
        return self._base.prune_values(threshold)

    def copy(self) -> MarginalDistribution:
        return MarginalDistribution(self._base.copy(), self._condition)

    def __str__(self) -> str:
        return f"{self._base} | {self._condition}"
