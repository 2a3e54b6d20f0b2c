"""Categorical tables over a finite set of values."""

from __future__ import annotations

import logging
import random
from collections.abc import Mapping
from types import MappingProxyType

from ruleanchor.types import Value

logger = logging.getLogger(__name__)


class CategoricalTable:
    """Table of value -> weight for one variable.

    Weights are stored as given; tables built by anchored rules are not
    normalised.
    """

    __slots__ = ("_variable", "_table")

    def __init__(self, variable: str, table: Mapping[Value, float] | None = None) -> None:
        self._variable = variable
        self._table: dict[Value, float] = dict(table or {})

    class Builder:
        """Incremental construction of a CategoricalTable."""

        def __init__(self, variable: str) -> None:
            self._variable = variable
            self._rows: dict[Value, float] = {}

        def add_row(self, value: Value, probability: float) -> None:
            self._rows[value] = self._rows.get(value, 0.0) + probability

        def is_empty(self) -> bool:
            return not self._rows

        def build(self) -> CategoricalTable:
            return CategoricalTable(self._variable, self._rows)

    @property
    def variable(self) -> str:
        return self._variable

    @property
    def table(self) -> Mapping[Value, float]:
        return MappingProxyType(self._table)

    @property
    def values(self) -> frozenset[Value]:
        return frozenset(self._table)

    def probability(self, value: Value) -> float:
        return self._table.get(value, 0.0)

    def is_empty(self) -> bool:
        return not self._table

    def sample(self, rng: random.Random | None = None) -> Value | None:
        """Draw one value with probability proportional to its weight.

        Sampling from an empty table logs a warning and returns None.
        """
        if not self._table:
            logger.warning("cannot sample from empty table for %s", self._variable)
            return None

        total = sum(self._table.values())
        threshold = (rng or random).random() * total
        cumulative = 0.0
        last: Value | None = None
        for value, weight in self._table.items():
            cumulative += weight
            last = value
            if threshold < cumulative:
                return value
        return last

    def __len__(self) -> int:
        return len(self._table)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CategoricalTable):
            return NotImplemented
        return self._variable == other._variable and self._table == other._table

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        rows = ", ".join(f"P({self._variable}={value})={weight:g}" for value, weight in self._table.items())
        return rows or f"P({self._variable})=empty"

    def __repr__(self) -> str:
        return f"CategoricalTable({self._variable!r}, {self._table!r})"
