"""Cross-module type aliases."""

from __future__ import annotations

from collections.abc import Hashable
from typing import Literal, TypeAlias

RuleKind: TypeAlias = Literal["prob", "util"]
Relation: TypeAlias = Literal["=", "!="]
SetOperator: TypeAlias = Literal["and", "or"]

Value: TypeAlias = Hashable
