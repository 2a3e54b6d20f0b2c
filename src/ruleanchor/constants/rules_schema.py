"""Schema constants for YAML rule files."""

from __future__ import annotations

VALID_RULE_KINDS: frozenset[str] = frozenset({"prob", "util"})

REQUIRED_TOP_KEYS: frozenset[str] = frozenset({"rule_id", "kind", "cases"})
ALLOWED_TOP_KEYS: frozenset[str] = REQUIRED_TOP_KEYS | {"inputs", "description"}

ALLOWED_CASE_KEYS: frozenset[str] = frozenset({"condition", "effects"})
ALLOWED_EFFECT_KEYS: frozenset[str] = frozenset({"set", "unset", "param"})
ALLOWED_BASIC_CONDITION_KEYS: frozenset[str] = frozenset({"var", "eq", "neq"})
CONDITION_SET_KEYS: frozenset[str] = frozenset({"all", "any"})

RULE_FILE_SUFFIX: str = ".yaml"
