"""Output of a rule evaluated on one full assignment."""

from __future__ import annotations

from collections.abc import Iterable

from ruleanchor.rules.effects import Effect
from ruleanchor.rules.parameters import Parameter, SumParameter


class RuleOutput:
    """Ordered effect/parameter pairs; void when no pair was produced.

    Pairs whose effects coincide keep one effect with the summed weight.

    Instances are shared between threads through the anchoring cache and
    are never mutated after construction.
    """

    __slots__ = ("_pairs",)

    def __init__(self, pairs: Iterable[tuple[Effect, Parameter]] = ()) -> None:
        merged: dict[Effect, Parameter] = {}
        for effect, parameter in pairs:
            previous = merged.get(effect)
            merged[effect] = parameter if previous is None else SumParameter.of(previous, parameter)
        self._pairs = merged

    @property
    def pairs(self) -> tuple[tuple[Effect, Parameter], ...]:
        return tuple(self._pairs.items())

    @property
    def effects(self) -> tuple[Effect, ...]:
        return tuple(self._pairs)

    def parameter(self, effect: Effect) -> Parameter:
        return self._pairs[effect]

    def is_void(self) -> bool:
        return not self._pairs

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RuleOutput):
            return NotImplemented
        return self._pairs == other._pairs

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        inner = ", ".join(f"{effect}: {parameter}" for effect, parameter in self._pairs.items())
        return f"RuleOutput({{{inner}}})"
