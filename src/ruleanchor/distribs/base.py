"""Distribution and utility contracts shared by network nodes."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import TYPE_CHECKING, Self

from ruleanchor.types import Value

if TYPE_CHECKING:
    from ruleanchor.distribs.categorical import CategoricalTable


class ProbDistribution(ABC):
    """Conditional distribution P(variable | inputs)."""

    @property
    @abstractmethod
    def variable(self) -> str:
        """Identifier of the variable the distribution is defined on."""

    @property
    @abstractmethod
    def input_variables(self) -> frozenset[str]:
        """Conditioning variables."""

    @property
    @abstractmethod
    def values(self) -> frozenset[Value]:
        """Values the variable may take."""

    @abstractmethod
    def probability(self, condition: Mapping[str, Value], head: Value) -> float:
        """Return P(variable=head | condition)."""

    @abstractmethod
    def distribution(self, condition: Mapping[str, Value]) -> CategoricalTable:
        """Return the table P(variable | condition)."""

    @abstractmethod
    def posterior(self, condition: Mapping[str, Value]) -> ProbDistribution:
        """Return the distribution with *condition* fixed."""

    @abstractmethod
    def sample(self, condition: Mapping[str, Value], rng: random.Random | None = None) -> Value | None:
        """Draw one value of the variable given *condition*."""

    @abstractmethod
    def modify_variable_id(self, old_id: str, new_id: str) -> None:
        """Rename the variable when it is currently *old_id*."""

    @abstractmethod
    def prune_values(self, threshold: float) -> bool:
        """Drop values below *threshold*; return True when anything changed."""

    @abstractmethod
    def copy(self) -> Self:
        """Return a copy usable independently of the original."""


class UtilityFunction(ABC):
    """Utility U(inputs) over assignments of state and action variables."""

    @abstractmethod
    def utility(self, full_input: Mapping[str, Value]) -> float:
        """Return the utility of *full_input*."""

    @abstractmethod
    def modify_variable_id(self, old_id: str, new_id: str) -> None:
        """Rename the variable when it is currently *old_id*."""

    @abstractmethod
    def copy(self) -> Self:
        """Return a copy usable independently of the original."""
