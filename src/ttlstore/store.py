"""In-process key-value store with expiration, capacity and key generation.

Design:
- Dict-based entry map guarded by a single re-entrant lock
- Every write stamps expire_at = now + expire_ms and update_at = now
- New keys go through EarliestExpiryEvictor when max_items is set
- A background ExpirationSweeper removes entries with expire_at <= now
- Expected failures (duplicate add, missing update) return a failed
  StorageResult; a non-string key raises InvalidKeyTypeError
"""

import logging
import threading
from datetime import datetime, timezone
from typing import Dict, Generic, Optional, TypeVar

from .config import DAY_MS, RECOMMENDED_KEY_LENGTH, StoreConfig
from .errors import InvalidKeyTypeError
from .eviction import EarliestExpiryEvictor
from .keys import KeyGenerator
from .models import Entry, StorageResult
from .sweeper import ExpirationSweeper

logger = logging.getLogger(__name__)

V = TypeVar("V")


class StorageManager(Generic[V]):
    """TTL-aware in-memory store.

    Starts its expiration sweeper on construction. Call ``stop_cleanup()``
    (or use the store as a context manager) when done with it.
    """

    def __init__(
        self,
        *,
        max_items: Optional[int] = None,
        expire_ms: int = DAY_MS,
        key_length: int = 8,
        cleanup_interval_ms: int = DAY_MS,
    ):
        config = StoreConfig(
            max_items=max_items,
            expire_ms=expire_ms,
            key_length=key_length,
            cleanup_interval_ms=cleanup_interval_ms,
        )
        if not config.key_length_recommended:
            low, high = RECOMMENDED_KEY_LENGTH
            logger.warning(
                f"Key length {config.key_length} is outside the recommended "
                f"range {low}-{high}"
            )

        self.config = config
        self._store: Dict[str, Entry[V]] = {}
        self._lock = threading.RLock()
        self._evictor = EarliestExpiryEvictor(config.max_items)
        self._keys = KeyGenerator(config.key_length)
        self._sweeper = ExpirationSweeper(self._cleanup, config.cleanup_interval_ms)
        self._sweeper.start()

    @classmethod
    def from_config(cls, config: StoreConfig) -> "StorageManager[V]":
        """Create a store from an already validated config."""
        return cls(**config.model_dump())

    # --- configuration echo ---

    @property
    def max_items(self) -> Optional[int]:
        """Capacity bound, or None when unbounded."""
        return self.config.max_items

    @property
    def expire_ms(self) -> int:
        return self.config.expire_ms

    @property
    def size(self) -> int:
        with self._lock:
            return len(self._store)

    def __len__(self) -> int:
        return self.size

    # --- internals ---

    def _now(self) -> datetime:
        return datetime.now(timezone.utc)

    @staticmethod
    def _validate_key(key: object) -> None:
        if not isinstance(key, str):
            raise InvalidKeyTypeError(
                f"Key {key!r} is not a string. Please provide a valid string"
            )

    def _cleanup(self) -> int:
        """Remove expired entries. Returns the number removed."""
        with self._lock:
            now = self._now()
            expired = [k for k, entry in self._store.items() if entry.is_expired(now)]
            for key in expired:
                del self._store[key]
        if expired:
            logger.debug(f"Swept {len(expired)} expired entries")
        return len(expired)

    def _write(self, key: str, value: V) -> StorageResult[V]:
        entry = Entry.build(value, now=self._now(), expire_ms=self.config.expire_ms)
        self._store[key] = entry
        return StorageResult.ok(key, entry)

    # --- public API ---

    def add(self, key: str, value: V) -> StorageResult[V]:
        """Insert *key* only if it is not present."""
        self._validate_key(key)
        with self._lock:
            if key in self._store:
                return StorageResult.failed()
            self._evictor.make_room(self._store, self._cleanup)
            return self._write(key, value)

    def update(self, key: str, value: V) -> StorageResult[V]:
        """Overwrite *key* only if it is present."""
        self._validate_key(key)
        with self._lock:
            if key not in self._store:
                return StorageResult.failed()
            # Capacity is checked here too, even though the key exists
            self._evictor.make_room(self._store, self._cleanup)
            return self._write(key, value)

    def upsert(self, key: str, value: V) -> StorageResult[V]:
        """Insert or overwrite *key*."""
        self._validate_key(key)
        with self._lock:
            if key not in self._store:
                self._evictor.make_room(self._store, self._cleanup)
            return self._write(key, value)

    def get(self, key: str) -> Optional[Entry[V]]:
        """Return the stored entry for *key*, or None.

        The entry itself is frozen, but ``value`` is the caller's object, not
        a copy: mutating a dict or list value changes what the store holds.
        """
        self._validate_key(key)
        with self._lock:
            return self._store.get(key)

    def delete(self, key: str) -> bool:
        """Remove *key*. Returns True if it was present."""
        self._validate_key(key)
        with self._lock:
            return self._store.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def stop_cleanup(self) -> None:
        """Stop the background sweeper. Idempotent."""
        self._sweeper.stop()

    def get_unique_key(self) -> str:
        """Return a random hex key that is not currently in the store.

        Raises:
            KeyGenerationError: If every attempt collided.
        """
        with self._lock:
            return self._keys.unique(self._store.__contains__)

    def __enter__(self) -> "StorageManager[V]":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop_cleanup()
