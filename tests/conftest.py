"""Shared fixtures for portal core tests."""

import pytest


class FakeClock:
    """Manually advanced millisecond clock."""
    
    def __init__(self, start: int = 1_700_000_000_000):
        self.now = start
    
    def __call__(self) -> int:
        return self.now
    
    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    from portal_core.cipher import EntryCipher
    from portal_core.entry_store import EntryStore
    
    store = EntryStore(EntryCipher(), ttl_ms=600_000, clock=clock)
    yield store
    store.stop_sweep()
