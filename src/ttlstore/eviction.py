"""Capacity policy: evict the entry closest to expiry.

Design:
- Consulted before a new key is inserted
- Sweeps expired entries first, then evicts one entry if still at capacity
- Victim is the entry with the earliest expire_at (first found on ties)
- No read recency is tracked, so this is not an LRU policy
"""

import logging
from typing import Callable, Mapping, Optional

from .models import Entry

logger = logging.getLogger(__name__)


class EarliestExpiryEvictor:
    """Keeps a store at or below ``max_items`` entries."""

    def __init__(self, max_items: Optional[int]):
        self.max_items = max_items

    def is_full(self, size: int) -> bool:
        return self.max_items is not None and size >= self.max_items

    @staticmethod
    def select_victim(entries: Mapping[str, Entry]) -> Optional[str]:
        """Return the key whose entry expires soonest, or None if empty."""
        if not entries:
            return None
        # min() keeps the first of equal candidates, i.e. insertion order
        return min(entries, key=lambda k: entries[k].expire_at)

    def make_room(self, entries: dict, sweep: Callable[[], int]) -> Optional[str]:
        """Free one slot in *entries* if the store is full.

        Args:
            entries: The live entry map (mutated in place)
            sweep: Callback removing expired entries, returns count removed

        Returns:
            The evicted key, or None if nothing had to be evicted
        """
        if not self.is_full(len(entries)):
            return None

        sweep()
        if not self.is_full(len(entries)):
            return None

        victim = self.select_victim(entries)
        if victim is not None:
            entries.pop(victim, None)
            logger.debug(f"Evicted {victim!r} to stay within max_items={self.max_items}")
        return victim
