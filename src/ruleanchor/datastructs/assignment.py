"""Immutable variable assignments."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from ruleanchor.constants.rendering import ASSIGNMENT_SEPARATOR, EMPTY_ASSIGNMENT
from ruleanchor.types import Value


class Assignment(Mapping[str, Value]):
    """Immutable, hashable mapping from variable name to value.

    Assignments are used as cache keys, so equality and hashing are
    structural: two assignments with the same pairs are interchangeable.
    """

    __slots__ = ("_pairs", "_hash")

    def __init__(self, pairs: Mapping[str, Value] | Iterable[tuple[str, Value]] | None = None) -> None:
        self._pairs: dict[str, Value] = dict(pairs) if pairs is not None else {}
        self._hash: int | None = None

    @classmethod
    def of(cls, **pairs: Value) -> Assignment:
        """Build an assignment from keyword arguments."""
        return cls(pairs)

    def __getitem__(self, variable: str) -> Value:
        return self._pairs[variable]

    def __iter__(self) -> Iterator[str]:
        return iter(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Assignment):
            return self._pairs == other._pairs
        if isinstance(other, Mapping):
            return self._pairs == dict(other)
        return NotImplemented

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash(frozenset(self._pairs.items()))
        return self._hash

    @property
    def variables(self) -> frozenset[str]:
        """Variables covered by the assignment."""
        return frozenset(self._pairs)

    def is_empty(self) -> bool:
        return not self._pairs

    def merge(self, other: Mapping[str, Value]) -> Assignment:
        """Return the union of both assignments; values of *other* win."""
        if not other:
            return self
        merged = dict(self._pairs)
        merged.update(other)
        return Assignment(merged)

    def trim(self, variables: Iterable[str]) -> Assignment:
        """Return the assignment restricted to *variables*."""
        keep = variables if isinstance(variables, (set, frozenset)) else frozenset(variables)
        return Assignment((var, value) for var, value in self._pairs.items() if var in keep)

    def contains_vars(self, variables: Iterable[str]) -> bool:
        """Return True when every variable in *variables* is assigned."""
        return all(var in self._pairs for var in variables)

    def __str__(self) -> str:
        if not self._pairs:
            return EMPTY_ASSIGNMENT
        return ASSIGNMENT_SEPARATOR.join(f"{var}={self._pairs[var]}" for var in sorted(self._pairs))

    def __repr__(self) -> str:
        return f"Assignment({self._pairs!r})"
