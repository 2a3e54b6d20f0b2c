"""Value ranges: per-variable value sets and their Cartesian enumeration."""

from __future__ import annotations

import itertools
from collections.abc import Iterable, Mapping

from ruleanchor.datastructs.assignment import Assignment
from ruleanchor.types import Value


class ValueRange:
    """Mapping from variable name to the set of values it may take.

    A range grows while it is being built and is frozen once complete;
    any mutation after ``freeze()`` raises ``TypeError``.
    """

    def __init__(self, values: Mapping[str, Iterable[Value]] | None = None) -> None:
        self._range: dict[str, set[Value]] = {}
        self._frozen = False
        if values is not None:
            for variable, domain in values.items():
                self.add_values(variable, domain)

    def add_values(self, variable: str, values: Iterable[Value]) -> None:
        """Add *values* to the domain of *variable*."""
        self._check_mutable()
        self._range.setdefault(variable, set()).update(values)

    def add_value(self, variable: str, value: Value) -> None:
        self._check_mutable()
        self._range.setdefault(variable, set()).add(value)

    def add_assign(self, assignment: Mapping[str, Value]) -> None:
        """Add every pair of *assignment* to the range."""
        for variable, value in assignment.items():
            self.add_value(variable, value)

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def variables(self) -> frozenset[str]:
        return frozenset(self._range)

    def values(self, variable: str) -> frozenset[Value]:
        """Return the domain of *variable* (empty when unknown)."""
        return frozenset(self._range.get(variable, ()))

    def is_empty(self) -> bool:
        return not self._range

    def linearise(self) -> set[Assignment]:
        """Return every full assignment of the Cartesian product of the range.

        An empty range yields exactly one empty assignment.
        """
        variables = sorted(self._range)
        domains = [self._range[var] for var in variables]
        return {Assignment(zip(variables, combination, strict=True)) for combination in itertools.product(*domains)}

    def to_dict(self) -> dict[str, list[Value]]:
        """Return a plain mapping with deterministically ordered value lists."""
        return {var: sorted(self._range[var], key=str) for var in sorted(self._range)}

    def _check_mutable(self) -> None:
        if self._frozen:
            raise TypeError("value range is frozen")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValueRange):
            return NotImplemented
        return self._range == other._range

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return str({var: sorted(self._range[var], key=str) for var in sorted(self._range)})

    def __repr__(self) -> str:
        return f"ValueRange({self._range!r})"
