"""String templates with ``{slot}`` placeholders.

Templates appear in rule input variables, condition variables and effect
values. A template is *filled by* an assignment when every slot it
mentions is assigned; filling substitutes the assigned values.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from ruleanchor.constants.templates import SLOT_PATTERN
from ruleanchor.types import Value


@dataclass(frozen=True)
class Template:
    """Immutable string template."""

    raw: str
    slots: frozenset[str] = field(init=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "slots", frozenset(SLOT_PATTERN.findall(self.raw)))

    def is_filled_by(self, assignment: Mapping[str, Value]) -> bool:
        return all(slot in assignment for slot in self.slots)

    def fill(self, assignment: Mapping[str, Value]) -> str:
        """Return the template with assigned slots substituted.

        Slots missing from *assignment* are left verbatim.
        """
        if not self.slots:
            return self.raw
        return SLOT_PATTERN.sub(
            lambda match: str(assignment[match.group(1)]) if match.group(1) in assignment else match.group(0),
            self.raw,
        )

    def __str__(self) -> str:
        return self.raw


def fill_value(value: Value, assignment: Mapping[str, Value]) -> Value:
    """Fill *value* when it is a templated string, else return it unchanged.

    A value made of a single assigned slot takes the assigned value as is,
    so ``{X}`` with ``X=1`` fills to ``1`` rather than ``"1"``.
    """
    if not isinstance(value, str):
        return value
    whole = SLOT_PATTERN.fullmatch(value)
    if whole is not None and whole.group(1) in assignment:
        return assignment[whole.group(1)]
    if SLOT_PATTERN.search(value):
        return Template(value).fill(assignment)
    return value
