"""Dialogue state snapshot used as the anchoring context."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path

import yaml

from ruleanchor.exceptions import ConfigError
from ruleanchor.types import Value


class DialogueState:
    """Immutable snapshot of the variables known in a dialogue state.

    Each known variable carries its value domain. Rules are anchored
    against one snapshot; a changed state means a new snapshot.
    """

    def __init__(self, domains: Mapping[str, Iterable[Value]] | None = None) -> None:
        self._domains: dict[str, frozenset[Value]] = {
            variable: frozenset(values) for variable, values in (domains or {}).items()
        }

    def has_variable(self, variable: str) -> bool:
        return variable in self._domains

    def get_values(self, variable: str) -> frozenset[Value]:
        """Return the value domain of *variable*; raises KeyError when unknown."""
        return self._domains[variable]

    @property
    def variables(self) -> frozenset[str]:
        return frozenset(self._domains)

    def __contains__(self, variable: object) -> bool:
        return variable in self._domains

    def __repr__(self) -> str:
        return f"DialogueState({sorted(self._domains)!r})"


def load_state(path: Path) -> DialogueState:
    """Load a state snapshot from a YAML mapping of variable -> list of values."""
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Failed to read state file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"State file {path} must contain a mapping")

    domains: dict[str, list[Value]] = {}
    for variable, values in raw.items():
        if not isinstance(variable, str):
            raise ConfigError(f"{path}: variable names must be strings, got {variable!r}")
        if not isinstance(values, list):
            raise ConfigError(f"{path}: values of '{variable}' must be a list")
        if any(isinstance(value, (list, dict)) for value in values):
            raise ConfigError(f"{path}: values of '{variable}' must be scalars")
        domains[variable] = values
    return DialogueState(domains)
