"""Config loading and normalization for anchoring."""

from __future__ import annotations

import difflib
from pathlib import Path

import yaml

from ruleanchor.config.model import AnchorConfig
from ruleanchor.constants.config import ALLOWED_CONFIG_KEYS, CONFIG_FILENAME, DEFAULT_CACHE_STRIPES
from ruleanchor.exceptions import ConfigError


def load_config(root: Path, config_path: Path | None = None) -> AnchorConfig:
    """Load and validate config from ``ruleanchor.yaml`` or an explicit path."""
    root = root.resolve()
    path = config_path.resolve() if config_path else (root / CONFIG_FILENAME)
    if not path.exists():
        if config_path is not None:
            raise ConfigError(f"Config file not found: {path}")
        return AnchorConfig()

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML config file at {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file at {path} must be a YAML mapping")

    for key in sorted(raw, key=str):
        if key not in ALLOWED_CONFIG_KEYS:
            hint = _suggest_key(str(key), ALLOWED_CONFIG_KEYS)
            raise ConfigError(f"Unknown config key {key!r} in {path}" + (f" ({hint})" if hint else ""))

    cache_stripes = raw.get("cache_stripes", DEFAULT_CACHE_STRIPES)
    if isinstance(cache_stripes, bool) or not isinstance(cache_stripes, int) or cache_stripes <= 0:
        raise ConfigError("cache_stripes must be a positive integer")

    sample_seed = raw.get("sample_seed")
    if sample_seed is not None and (isinstance(sample_seed, bool) or not isinstance(sample_seed, int)):
        raise ConfigError("sample_seed must be an integer or null")

    return AnchorConfig(cache_stripes=cache_stripes, sample_seed=sample_seed)


def _suggest_key(key: str, allowed: frozenset[str]) -> str:
    """Return a 'did you mean' hint for a misspelled key, or an empty string."""
    matches = difflib.get_close_matches(key, sorted(allowed), n=1, cutoff=0.6)
    if matches:
        return f"did you mean '{matches[0]}'?"
    return ""
