"""Conditions evaluated against full assignments."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TypeAlias

from ruleanchor.templates import Template, fill_value
from ruleanchor.types import Relation, SetOperator, Value


@dataclass(frozen=True)
class BasicCondition:
    """Equality or inequality test on a single (possibly templated) variable.

    A variable missing from the assignment reads as ``None``.
    """

    variable: str
    value: Value
    relation: Relation = "="

    @property
    def input_variables(self) -> frozenset[Template]:
        return frozenset({Template(self.variable)})

    def is_satisfied_by(self, assignment: Mapping[str, Value]) -> bool:
        variable = Template(self.variable).fill(assignment)
        expected = fill_value(self.value, assignment)
        actual = assignment.get(variable)
        if self.relation == "=":
            return actual == expected
        return actual != expected

    def __str__(self) -> str:
        return f"{self.variable}{self.relation}{self.value}"


@dataclass(frozen=True)
class ConditionSet:
    """Conjunction or disjunction of sub-conditions."""

    conditions: tuple[Condition, ...]
    operator: SetOperator = "and"

    @property
    def input_variables(self) -> frozenset[Template]:
        variables: set[Template] = set()
        for condition in self.conditions:
            variables.update(condition.input_variables)
        return frozenset(variables)

    def is_satisfied_by(self, assignment: Mapping[str, Value]) -> bool:
        if self.operator == "and":
            return all(condition.is_satisfied_by(assignment) for condition in self.conditions)
        return any(condition.is_satisfied_by(assignment) for condition in self.conditions)

    def __str__(self) -> str:
        joiner = " ^ " if self.operator == "and" else " v "
        return "(" + joiner.join(str(condition) for condition in self.conditions) + ")"


@dataclass(frozen=True)
class VoidCondition:
    """Condition that always holds."""

    @property
    def input_variables(self) -> frozenset[Template]:
        return frozenset()

    def is_satisfied_by(self, assignment: Mapping[str, Value]) -> bool:
        return True

    def __str__(self) -> str:
        return "true"


Condition: TypeAlias = BasicCondition | ConditionSet | VoidCondition
