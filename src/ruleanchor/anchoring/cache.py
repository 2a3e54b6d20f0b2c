"""Concurrent lazy cache of rule outputs keyed by assignment."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from ruleanchor.constants.config import DEFAULT_CACHE_STRIPES
from ruleanchor.datastructs import Assignment
from ruleanchor.rules import RuleOutput

logger = logging.getLogger(__name__)


class OutputCache:
    """Fetch-or-compute map from assignments to rule outputs.

    Present keys are read without locking. A miss locks only the stripe
    the key hashes to, re-checks, then computes and stores, so each key is
    computed once and every caller observes the stored output. Computations
    must be pure.
    """

    __slots__ = ("_entries", "_locks")

    def __init__(self, stripes: int = DEFAULT_CACHE_STRIPES) -> None:
        if stripes <= 0:
            raise ValueError(f"stripes must be positive, got {stripes}")
        self._entries: dict[Assignment, RuleOutput] = {}
        self._locks: tuple[threading.Lock, ...] = tuple(threading.Lock() for _ in range(stripes))

    def get_or_compute(self, key: Assignment, compute: Callable[[Assignment], RuleOutput]) -> RuleOutput:
        output = self._entries.get(key)
        if output is not None:
            return output

        with self._locks[hash(key) % len(self._locks)]:
            output = self._entries.get(key)
            if output is None:
                output = compute(key)
                self._entries[key] = output
                logger.debug("cache miss for %s", key)
        return output

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
