"""Config data model for anchoring."""

from __future__ import annotations

import random
from dataclasses import dataclass

from ruleanchor.constants.config import DEFAULT_CACHE_STRIPES


@dataclass(frozen=True)
class AnchorConfig:
    """Resolved anchoring config."""

    cache_stripes: int = DEFAULT_CACHE_STRIPES
    sample_seed: int | None = None

    def make_rng(self) -> random.Random:
        """Return a fresh generator seeded with ``sample_seed``."""
        return random.Random(self.sample_seed)
