"""Rules: ordered condition/effect cases tagged as probabilistic or utility."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from ruleanchor.rules.conditions import Condition
from ruleanchor.rules.effects import Effect
from ruleanchor.rules.output import RuleOutput
from ruleanchor.rules.parameters import Parameter
from ruleanchor.templates import Template
from ruleanchor.types import RuleKind, Value


@dataclass(frozen=True)
class RuleCase:
    """One ``if condition then effects`` branch of a rule."""

    condition: Condition
    effects: tuple[tuple[Effect, Parameter], ...]

    def __str__(self) -> str:
        rendered = ", ".join(f"{effect} [{parameter}]" for effect, parameter in self.effects)
        return f"if {self.condition} then {{{rendered}}}"


class Rule:
    """Rule evaluated case by case against full assignments.

    The first case whose condition holds produces the output; effect
    templates are filled from the evaluated assignment. When no case
    matches the output is void. Evaluation is pure.
    """

    def __init__(
        self,
        rule_id: str,
        kind: RuleKind,
        cases: Iterable[RuleCase],
        input_variables: Iterable[str] | None = None,
    ) -> None:
        self.rule_id = rule_id
        self.kind: RuleKind = kind
        self.cases: tuple[RuleCase, ...] = tuple(cases)
        if input_variables is None:
            templates: set[Template] = set()
            for case in self.cases:
                templates.update(case.condition.input_variables)
            self.input_variables: frozenset[Template] = frozenset(templates)
        else:
            self.input_variables = frozenset(Template(variable) for variable in input_variables)

    def get_output(self, assignment: Mapping[str, Value]) -> RuleOutput:
        for case in self.cases:
            if case.condition.is_satisfied_by(assignment):
                return RuleOutput((effect.fill(assignment), parameter) for effect, parameter in case.effects)
        return RuleOutput()

    def __str__(self) -> str:
        body = "\n".join(f"  {case}" for case in self.cases)
        return f"{self.rule_id} ({self.kind}):\n{body}" if body else f"{self.rule_id} ({self.kind})"

    def __repr__(self) -> str:
        return f"Rule({self.rule_id!r}, {self.kind!r})"
