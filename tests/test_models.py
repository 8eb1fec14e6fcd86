"""Tests for Entry and StorageResult."""

from dataclasses import FrozenInstanceError, dataclass
from datetime import timedelta

import pytest

from ttlstore.models import Entry, StorageResult


@dataclass
class Point:
    x: int
    y: int


class TestEntry:
    """Test Entry helpers."""

    def test_build(self, t0):
        """Test build() stamps both timestamps."""
        entry = Entry.build("v", now=t0, expire_ms=2000)
        assert entry.value == "v"
        assert entry.update_at == t0
        assert entry.expire_at == t0 + timedelta(seconds=2)

    def test_is_expired_boundary(self, t0):
        """Test an entry is expired at exactly expire_at."""
        entry = Entry.build(1, now=t0, expire_ms=1000)
        assert entry.is_expired(t0 + timedelta(milliseconds=999)) is False
        assert entry.is_expired(t0 + timedelta(milliseconds=1000)) is True

    def test_frozen(self, t0):
        """Test entries cannot be mutated."""
        entry = Entry.build(1, now=t0, expire_ms=1000)
        with pytest.raises(FrozenInstanceError):
            entry.value = 2

    def test_as_record_merges_mapping(self, t0):
        """Test mapping values get timestamps as sibling keys."""
        entry = Entry.build({"name": "x", "n": 1}, now=t0, expire_ms=0)
        record = entry.as_record()
        assert record == {"name": "x", "n": 1, "expire_at": t0, "update_at": t0}
        assert "expire_at" not in entry.value

    def test_as_record_merges_dataclass(self, t0):
        """Test dataclass values are flattened like mappings."""
        record = Entry.build(Point(1, 2), now=t0, expire_ms=0).as_record()
        assert record == {"x": 1, "y": 2, "expire_at": t0, "update_at": t0}

    def test_as_record_wraps_dataclass_type(self, t0):
        """Test a dataclass class object is wrapped, not flattened."""
        record = Entry.build(Point, now=t0, expire_ms=0).as_record()
        assert record["value"] is Point

    @pytest.mark.parametrize("value", [1, "s", [1, 2], (3,), None])
    def test_as_record_wraps_other_values(self, t0, value):
        """Test scalars and sequences are wrapped under 'value'."""
        record = Entry.build(value, now=t0, expire_ms=0).as_record()
        assert record == {"value": value, "expire_at": t0, "update_at": t0}


class TestStorageResult:
    """Test StorageResult helpers."""

    def test_failed(self):
        """Test failed results carry nothing and are falsy."""
        result = StorageResult.failed()
        assert result.success is False
        assert bool(result) is False
        assert result.key is None
        assert result.value is None
        assert result.expire_at is None
        assert result.update_at is None

    def test_ok_reads_through(self, t0):
        """Test ok results expose entry fields."""
        entry = Entry.build(5, now=t0, expire_ms=10)
        result = StorageResult.ok("k", entry)
        assert result
        assert result.key == "k"
        assert result.entry is entry
        assert result.value == 5
        assert result.expire_at == entry.expire_at
        assert result.update_at == t0
