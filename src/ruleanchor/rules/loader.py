"""Loading of YAML rule files into compiled rules."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from ruleanchor.constants.rules_schema import RULE_FILE_SUFFIX
from ruleanchor.exceptions import ConfigError, RuleError
from ruleanchor.rules.compiler import compile_rule
from ruleanchor.rules.rule import Rule

logger = logging.getLogger(__name__)


def load_rules(
    rules_dir: Path | None = None,
    rule_files: tuple[Path, ...] | None = None,
    rule_ids: frozenset[str] | None = None,
) -> list[Rule]:
    """Load and compile rules from a directory or an explicit file list.

    Rules are returned sorted by rule id. Duplicate ids across files,
    unreadable files and invalid rule content raise ConfigError.
    """
    loaded_sources: dict[str, Path] = {}
    rules: list[Rule] = []

    for path in _rule_paths(rules_dir, rule_files):
        raw = _read_rule_mapping(path)
        if rule_ids is not None and raw.get("rule_id") not in rule_ids:
            continue

        try:
            rule = compile_rule(raw, str(path))
        except RuleError as exc:
            raise ConfigError(str(exc)) from exc

        previous_source = loaded_sources.get(rule.rule_id)
        if previous_source is not None:
            raise ConfigError(f"Duplicate rule_id '{rule.rule_id}' loaded from {previous_source} and {path}")
        loaded_sources[rule.rule_id] = path
        rules.append(rule)
        logger.debug("Loaded rule: %s (%s) from %s", rule.rule_id, rule.kind, path)

    rules.sort(key=lambda r: r.rule_id)
    return rules


def _rule_paths(rules_dir: Path | None, rule_files: tuple[Path, ...] | None) -> list[Path]:
    """Resolve the rule files to load, in sorted order.

    A directory contributes every ``*.yaml`` file it holds; an explicit
    list must name distinct, existing ``.yaml`` files.
    """
    if (rules_dir is None) == (rule_files is None):
        raise ConfigError("Give exactly one rules source: either rules_dir or rule_files.")

    if rules_dir is not None:
        directory = rules_dir.resolve()
        if not directory.is_dir():
            reason = "is not a directory" if directory.exists() else "does not exist"
            raise ConfigError(f"Rules directory {reason}: {directory}")
        return sorted(directory.glob(f"*{RULE_FILE_SUFFIX}"))

    paths = sorted({path.resolve() for path in rule_files or ()})
    if not paths:
        raise ConfigError("rule_files must name at least one rule file.")
    if len(paths) != len(rule_files or ()):
        raise ConfigError("rule_files names the same rule file more than once.")
    for path in paths:
        if not path.is_file():
            raise ConfigError(f"Rule file does not exist or is not a file: {path}")
        if path.suffix.lower() != RULE_FILE_SUFFIX:
            raise ConfigError(f"Rule file {path} must use the {RULE_FILE_SUFFIX} extension")
    return paths


def _read_rule_mapping(path: Path) -> dict[str, Any]:
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Failed to read rule file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigError(f"Rule file {path} must contain a mapping")
    return raw
