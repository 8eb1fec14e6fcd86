"""Shared fixtures for ttlstore tests."""

from datetime import datetime, timedelta, timezone

import pytest

from ttlstore.store import StorageManager

T0 = datetime(2026, 1, 1, tzinfo=timezone.utc)


class FakeClock:
    """Manually advanced UTC clock."""

    def __init__(self, start: datetime = T0):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += timedelta(milliseconds=ms)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def t0():
    return T0


@pytest.fixture
def make_store(clock):
    """Build stores on the fake clock and always stop their sweepers."""
    stores = []

    def _make(**kwargs) -> StorageManager:
        store = StorageManager(**kwargs)
        store._now = clock
        stores.append(store)
        return store

    yield _make

    for store in stores:
        store.stop_cleanup()


@pytest.fixture
def store(make_store):
    return make_store()
