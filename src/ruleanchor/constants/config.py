"""Configuration defaults and filenames."""

from __future__ import annotations

CONFIG_FILENAME: str = "ruleanchor.yaml"

DEFAULT_CACHE_STRIPES: int = 64

ALLOWED_CONFIG_KEYS: frozenset[str] = frozenset({"cache_stripes", "sample_seed"})
