"""
Data models for stored entries and write results.

Entries use one uniform wrapper for every value type; ``Entry.as_record``
produces the flattened shape (timestamps merged into mapping values) for
consumers that expect it.
"""

from collections.abc import Mapping
from dataclasses import dataclass, fields, is_dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, Generic, Optional, TypeVar

V = TypeVar("V")


@dataclass(frozen=True)
class Entry(Generic[V]):
    """A stored value plus its expiration and last-update timestamps."""

    value: V
    expire_at: datetime
    update_at: datetime

    @classmethod
    def build(cls, value: V, *, now: datetime, expire_ms: int) -> "Entry[V]":
        """Stamp *value* with ``now + expire_ms`` and ``now``."""
        return cls(
            value=value,
            expire_at=now + timedelta(milliseconds=expire_ms),
            update_at=now,
        )

    def is_expired(self, now: datetime) -> bool:
        return self.expire_at <= now

    def as_record(self) -> Dict[str, Any]:
        """Return the entry as a flat dict.

        Record-shaped values (mappings and dataclass instances) get
        ``expire_at``/``update_at`` merged in as sibling keys, shallowly.
        Scalars, sequences and other objects are wrapped under ``value``.
        """
        if isinstance(self.value, Mapping):
            record = dict(self.value)
        elif is_dataclass(self.value) and not isinstance(self.value, type):
            record = {f.name: getattr(self.value, f.name) for f in fields(self.value)}
        else:
            record = {"value": self.value}
        record["expire_at"] = self.expire_at
        record["update_at"] = self.update_at
        return record


@dataclass(frozen=True)
class StorageResult(Generic[V]):
    """Outcome of ``add``/``update``/``upsert``.

    Truthy exactly when the write happened.
    """

    success: bool
    key: Optional[str] = None
    entry: Optional[Entry[V]] = None

    @classmethod
    def ok(cls, key: str, entry: Entry[V]) -> "StorageResult[V]":
        return cls(success=True, key=key, entry=entry)

    @classmethod
    def failed(cls) -> "StorageResult[V]":
        return cls(success=False)

    def __bool__(self) -> bool:
        return self.success

    @property
    def value(self) -> Optional[V]:
        return self.entry.value if self.entry else None

    @property
    def expire_at(self) -> Optional[datetime]:
        return self.entry.expire_at if self.entry else None

    @property
    def update_at(self) -> Optional[datetime]:
        return self.entry.update_at if self.entry else None
