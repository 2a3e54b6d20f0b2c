"""Parameters: weights attached to rule effects."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TypeAlias

from ruleanchor.exceptions import ParameterError
from ruleanchor.types import Value


@dataclass(frozen=True)
class FixedParameter:
    """Constant weight."""

    weight: float

    @property
    def variables(self) -> frozenset[str]:
        return frozenset()

    def value(self, assignment: Mapping[str, Value]) -> float:
        return self.weight

    def __str__(self) -> str:
        return str(self.weight)


@dataclass(frozen=True)
class SingleParameter:
    """Weight read from a parameter variable of the assignment."""

    name: str

    @property
    def variables(self) -> frozenset[str]:
        return frozenset({self.name})

    def value(self, assignment: Mapping[str, Value]) -> float:
        if self.name not in assignment:
            raise ParameterError(f"parameter '{self.name}' is not assigned in {assignment}")
        raw = assignment[self.name]
        if isinstance(raw, bool) or not isinstance(raw, (int, float)):
            raise ParameterError(f"parameter '{self.name}' has non-numeric value {raw!r}")
        return float(raw)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class SumParameter:
    """Sum of the weights of effects that coincide once filled."""

    terms: tuple[FixedParameter | SingleParameter, ...]

    @classmethod
    def of(cls, *parameters: Parameter) -> SumParameter:
        terms: list[FixedParameter | SingleParameter] = []
        for parameter in parameters:
            terms.extend(parameter.terms if isinstance(parameter, SumParameter) else (parameter,))
        return cls(tuple(terms))

    @property
    def variables(self) -> frozenset[str]:
        return frozenset().union(*(term.variables for term in self.terms))

    def value(self, assignment: Mapping[str, Value]) -> float:
        return sum(term.value(assignment) for term in self.terms)

    def __str__(self) -> str:
        return " + ".join(str(term) for term in self.terms)


Parameter: TypeAlias = FixedParameter | SingleParameter | SumParameter
