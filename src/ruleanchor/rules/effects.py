"""Rule effects: assignments of output values produced when a rule fires."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from ruleanchor.constants.rendering import ASSIGNMENT_SEPARATOR, VOID_EFFECT
from ruleanchor.datastructs import Assignment
from ruleanchor.rules.conditions import BasicCondition, ConditionSet
from ruleanchor.templates import Template, fill_value
from ruleanchor.types import Value


@dataclass(frozen=True)
class BasicEffect:
    """Single output assignment ``variable=value`` (or its negation)."""

    variable: str
    value: Value
    negated: bool = False

    def fill(self, assignment: Mapping[str, Value]) -> BasicEffect:
        return BasicEffect(
            variable=Template(self.variable).fill(assignment),
            value=fill_value(self.value, assignment),
            negated=self.negated,
        )

    def to_condition(self) -> BasicCondition:
        return BasicCondition(self.variable, self.value, "!=" if self.negated else "=")

    def __str__(self) -> str:
        return f"{self.variable}{'!=' if self.negated else '='}{self.value}"


class Effect:
    """Immutable set of basic effects; used directly as a distribution value."""

    __slots__ = ("_effects", "_hash")

    def __init__(self, effects: Iterable[BasicEffect] = ()) -> None:
        self._effects: frozenset[BasicEffect] = frozenset(effects)
        self._hash = hash(self._effects)

    @classmethod
    def of(cls, **pairs: Value) -> Effect:
        """Build an effect setting each keyword variable to its value."""
        return cls(BasicEffect(variable, value) for variable, value in pairs.items())

    @property
    def assignment(self) -> Assignment:
        """Output assignment of the non-negated basic effects."""
        return Assignment((effect.variable, effect.value) for effect in self._effects if not effect.negated)

    @property
    def output_variables(self) -> frozenset[str]:
        return frozenset(effect.variable for effect in self._effects)

    def fill(self, assignment: Mapping[str, Value]) -> Effect:
        return Effect(effect.fill(assignment) for effect in self._effects)

    def convert_to_condition(self) -> ConditionSet:
        """Return the condition satisfied exactly by assignments realising the effect."""
        return ConditionSet(tuple(effect.to_condition() for effect in self._sorted()), "and")

    def literal(self) -> str:
        """Return the string form with values rendered as JSON literals.

        Unlike ``str``, distinct effects such as ``Y=1`` and ``Y="1"`` never
        render alike.
        """
        if not self._effects:
            return VOID_EFFECT
        return ASSIGNMENT_SEPARATOR.join(
            f"{effect.variable}{'!=' if effect.negated else '='}{json.dumps(effect.value, default=str)}"
            for effect in self._sorted()
        )

    def _sorted(self) -> list[BasicEffect]:
        return sorted(self._effects, key=lambda effect: (effect.variable, str(effect.value), effect.negated))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Effect):
            return NotImplemented
        return self._effects == other._effects

    def __hash__(self) -> int:
        return self._hash

    def __str__(self) -> str:
        if not self._effects:
            return VOID_EFFECT
        return ASSIGNMENT_SEPARATOR.join(str(effect) for effect in self._sorted())

    def __repr__(self) -> str:
        return f"Effect({str(self)!r})"
