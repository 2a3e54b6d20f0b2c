"""Rules anchored in a dialogue state.

Anchoring binds an abstract rule to a state snapshot and a set of filled
template slots. Construction enumerates every input assignment the state
allows, which determines the rule's relevance, its input and output value
ranges, its effects and the parameter variables it depends on. Queries
(probability, distribution, utility, sampling) then go through a
memoised lookup of rule outputs.

Construction is single-threaded; once built, an anchored rule may be
queried from any number of threads.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Mapping
from typing import Any

from ruleanchor.anchoring.cache import OutputCache
from ruleanchor.config import AnchorConfig
from ruleanchor.datastructs import Assignment, ValueRange
from ruleanchor.distribs import CategoricalTable, MarginalDistribution, ProbDistribution, UtilityFunction
from ruleanchor.rules import Effect, Rule, RuleOutput
from ruleanchor.state import DialogueState
from ruleanchor.types import Value

logger = logging.getLogger(__name__)


def _as_assignment(values: Mapping[str, Value]) -> Assignment:
    return values if isinstance(values, Assignment) else Assignment(values)


class AnchoredRule(ProbDistribution, UtilityFunction):
    """Probabilistic or utility rule anchored in a dialogue state."""

    def __init__(
        self,
        rule: Rule,
        state: DialogueState,
        filled_slots: Mapping[str, Value] | None = None,
        *,
        config: AnchorConfig | None = None,
    ) -> None:
        config = config or AnchorConfig()
        self._rule = rule
        self._filled_slots = _as_assignment(filled_slots or {})
        self._id = rule.rule_id
        if not self._filled_slots.is_empty():
            self._id += f"({self._filled_slots})"
        self._rng = config.make_rng()
        self._relevant = False
        self._inputs = ValueRange()
        self._outputs = ValueRange()
        self._cache: OutputCache | None = None

        for template in rule.input_variables:
            if template.is_filled_by(self._filled_slots):
                variable = template.fill(self._filled_slots)
                if state.has_variable(variable):
                    self._inputs.add_values(variable, state.get_values(variable))
        self._inputs.freeze()
        conditions = self._inputs.linearise()

        if rule.kind == "prob":
            self._cache = OutputCache(config.cache_stripes)
        self._variables: frozenset[str] = self._inputs.variables

        effects: set[Effect] = set()
        parameters: set[str] = set()
        for condition in conditions:
            output = self._cached_output(condition.merge(self._filled_slots))
            self._relevant = self._relevant or not output.is_void()
            for effect, parameter in output.pairs:
                effects.add(effect)
                self._outputs.add_assign(effect.assignment)
                parameters.update(variable for variable in parameter.variables if state.has_variable(variable))

        # utility queries key on action values as well as state values
        if self._relevant and rule.kind == "util":
            self._variables = self._variables | self._outputs.variables
            self._cache = OutputCache(config.cache_stripes)

        self._outputs.freeze()
        self._effects = frozenset(effects)
        self._parameters = frozenset(parameters)
        logger.debug(
            "Anchored %s: relevant=%s, %d input assignments, %d effects",
            self._id,
            self._relevant,
            len(conditions),
            len(self._effects),
        )

    @property
    def variable(self) -> str:
        """Label of the anchored rule (rule id plus filled slots)."""
        return self._id

    @property
    def rule(self) -> Rule:
        return self._rule

    @property
    def filled_slots(self) -> Assignment:
        return self._filled_slots

    @property
    def relevant(self) -> bool:
        """True when at least one input assignment produced a non-void output."""
        return self._relevant

    @property
    def input_range(self) -> ValueRange:
        return self._inputs

    @property
    def input_variables(self) -> frozenset[str]:
        return self._inputs.variables

    @property
    def output_range(self) -> ValueRange:
        return self._outputs

    @property
    def output_variables(self) -> frozenset[str]:
        return self._outputs.variables

    @property
    def effects(self) -> frozenset[Effect]:
        return self._effects

    @property
    def parameters(self) -> frozenset[str]:
        """Parameter variables known to the state that the rule's weights read."""
        return self._parameters

    @property
    def values(self) -> frozenset[Value]:
        return frozenset(self._effects)

    @property
    def cache_variables(self) -> frozenset[str]:
        """Variables kept when trimming a query into a cache key."""
        return self._variables

    @property
    def cached(self) -> bool:
        return self._cache is not None

    def probability(self, condition: Mapping[str, Value], head: Value) -> float:
        return self.distribution(condition).probability(head)

    def distribution(self, condition: Mapping[str, Value]) -> CategoricalTable:
        """Return the table of effects with strictly positive weight for *condition*.

        Effects whose parameter is zero or negative are left out. An empty
        table is logged and returned as is.
        """
        output = self._cached_output(condition)
        builder = CategoricalTable.Builder(self._id)
        for effect, parameter in output.pairs:
            weight = parameter.value(condition)
            if weight > 0:
                builder.add_row(effect, weight)

        if builder.is_empty():
            logger.warning(
                "probability table is empty (no effects) for input %s and rule %s",
                _as_assignment(condition),
                self,
            )
        return builder.build()

    def utility(self, full_input: Mapping[str, Value]) -> float:
        """Return the summed weight of every effect realised by *full_input*."""
        total = 0.0
        output = self._cached_output(full_input)
        for effect, parameter in output.pairs:
            if effect.convert_to_condition().is_satisfied_by(full_input):
                total += parameter.value(full_input)
        return total

    def posterior(self, condition: Mapping[str, Value]) -> MarginalDistribution:
        return MarginalDistribution(self, condition)

    def sample(self, condition: Mapping[str, Value], rng: random.Random | None = None) -> Value | None:
        return self.distribution(condition).sample(rng or self._rng)

    def modify_variable_id(self, old_id: str, new_id: str) -> None:
        if self._id == old_id:
            self._id = new_id

    def prune_values(self, threshold: float) -> bool:
        """Values are derived from the rule; nothing is ever pruned."""
        return False

    def copy(self) -> AnchoredRule:
        """Anchored rules are shared, not duplicated."""
        return self

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serialisable summary of the anchoring."""
        return {
            "id": self._id,
            "rule_id": self._rule.rule_id,
            "kind": self._rule.kind,
            "relevant": self._relevant,
            "filled_slots": {var: self._filled_slots[var] for var in sorted(self._filled_slots)},
            "inputs": self._inputs.to_dict(),
            "outputs": self._outputs.to_dict(),
            "effects": sorted(effect.literal() for effect in self._effects),
            "parameters": sorted(self._parameters),
        }

    def _cached_output(self, values: Mapping[str, Value]) -> RuleOutput:
        """Return the rule output for *values* merged with the filled slots.

        Without a cache the rule is evaluated on every call.
        """
        assignment = _as_assignment(values)
        if self._cache is None:
            return self._rule.get_output(assignment.merge(self._filled_slots))
        key = assignment.trim(self._variables).merge(self._filled_slots)
        return self._cache.get_or_compute(key, self._rule.get_output)

    def __str__(self) -> str:
        return str(self._rule)

    def __repr__(self) -> str:
        return f"AnchoredRule({self._id!r})"
