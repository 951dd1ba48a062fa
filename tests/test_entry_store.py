"""
Unit Tests for the Entry Store
==============================
Single-use retrieval, TTL expiry, sweep and concurrency behaviour.
"""

import asyncio
import dataclasses
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from portal_core.cipher import EntryCipher
from portal_core.entry_store import EntryStore, AllocationExhausted
from portal_core.exceptions import ExhaustionError

TTL_MS = 600_000


class TestCreateAndTake:
    """Tests for create / take_once."""
    
    def test_round_trip(self, store):
        """Should return the exact plaintext once."""
        created = store.create(b"hello")
        
        assert store.take_once(created.code) == b"hello"
    
    def test_second_take_not_found(self, store):
        """Second take of the same code should be not-found."""
        created = store.create(b"hello")
        
        store.take_once(created.code)
        
        assert store.take_once(created.code) is None
        assert store.count() == 0
    
    def test_unknown_code_not_found(self, store):
        assert store.take_once("000000") is None
    
    def test_binary_and_unicode_payloads(self, store):
        """Arbitrary bytes should survive unchanged."""
        payloads = [b"", bytes(range(256)), "héllo ✓ 你好".encode("utf-8")]
        codes = [store.create(p).code for p in payloads]
        
        assert [store.take_once(c) for c in codes] == payloads
    
    def test_expiry_is_created_plus_ttl(self, store, clock):
        created = store.create(b"hello")
        
        assert created.expires_at == clock.now + TTL_MS
        assert created.expires_in(clock.now) == TTL_MS // 1000
    
    def test_codes_unique_among_live_entries(self, store):
        codes = {store.create(b"x").code for _ in range(500)}
        
        assert len(codes) == 500
        assert store.count() == 500
    
    def test_clear(self, store):
        code = store.create(b"hello").code

        store.clear()

        assert store.count() == 0
        assert store.take_once(code) is None

    def test_concrete_scenario(self, store, clock, monkeypatch):
        """create -> take -> take again -> never-created code."""
        from portal_core.codes import generator
        
        monkeypatch.setattr(generator, "generate_code", lambda: "042817")
        
        created = store.create(b"hello")
        assert created.code == "042817"
        assert created.expires_at == clock.now + 600_000
        
        assert store.take_once("042817") == b"hello"
        
        second = store.take_once("042817")
        never = store.take_once("000000")
        assert second is None
        assert never is None
        assert second == never


class TestAllocation:
    """Tests for allocation exhaustion."""
    
    def test_allocation_exhausted(self, store, monkeypatch):
        """Should raise AllocationExhausted when every draw collides."""
        from portal_core.codes import generator
        
        monkeypatch.setattr(generator, "generate_code", lambda: "123456")
        store.create(b"first")
        
        with pytest.raises(AllocationExhausted) as exc_info:
            store.create(b"second")
        
        assert isinstance(exc_info.value, ExhaustionError)
        assert isinstance(exc_info.value.__cause__, ExhaustionError)
        assert store.count() == 1
        # The failed create must not disturb the existing entry
        assert store.take_once("123456") == b"first"


class TestExpiry:
    """Tests for TTL boundaries."""
    
    def test_retrievable_just_before_ttl(self, store, clock):
        created = store.create(b"hello")
        
        clock.advance(TTL_MS - 1)
        
        assert store.take_once(created.code) == b"hello"
    
    def test_retrievable_at_exact_expiry(self, store, clock):
        """now == expires_at is still live."""
        created = store.create(b"hello")
        
        clock.advance(TTL_MS)
        
        assert store.take_once(created.code) == b"hello"
    
    def test_not_retrievable_after_ttl(self, store, clock):
        created = store.create(b"hello")
        
        clock.advance(TTL_MS + 1)
        
        assert store.take_once(created.code) is None
        assert store.count() == 0
    
    def test_has_valid_entry_does_not_consume(self, store, clock):
        created = store.create(b"hello")
        
        assert store.has_valid_entry(created.code) is True
        assert store.has_valid_entry(created.code) is True
        assert store.take_once(created.code) == b"hello"
        assert store.has_valid_entry(created.code) is False
    
    def test_has_valid_entry_removes_expired(self, store, clock):
        created = store.create(b"hello")
        clock.advance(TTL_MS + 1)
        
        assert store.has_valid_entry(created.code) is False
        assert store.count() == 0
    
    def test_sweep_removes_only_expired(self, store, clock):
        old = store.create(b"old")
        clock.advance(TTL_MS // 2)
        fresh = store.create(b"fresh")
        clock.advance(TTL_MS // 2 + 1)
        
        removed = store.sweep()
        
        assert removed == 1
        assert store.count() == 1
        assert store.take_once(old.code) is None
        assert store.take_once(fresh.code) == b"fresh"
    
    def test_sweep_empty_store(self, store):
        assert store.sweep() == 0


class TestTampering:
    """Authentication failures must look like not-found."""
    
    def test_tampered_entry_not_found(self, store):
        created = store.create(b"hello")
        entry = store._entries[created.code]
        bad_tag = bytes(b ^ 0xFF for b in entry.payload.auth_tag)
        store._entries[created.code] = dataclasses.replace(
            entry,
            payload=dataclasses.replace(entry.payload, auth_tag=bad_tag),
        )
        
        assert store.take_once(created.code) is None
        assert store.count() == 0


class TestConcurrency:
    """Concurrent take_once on one code yields exactly one winner."""
    
    def test_threaded_take_once(self, store):
        created = store.create(b"race")
        workers = 32
        barrier = threading.Barrier(workers)
        
        def take():
            barrier.wait()
            return store.take_once(created.code)
        
        with ThreadPoolExecutor(max_workers=workers) as pool:
            results = list(pool.map(lambda _: take(), range(workers)))
        
        assert results.count(b"race") == 1
        assert results.count(None) == workers - 1
    
    def test_concurrent_creates_unique(self, store):
        with ThreadPoolExecutor(max_workers=16) as pool:
            created = list(pool.map(lambda i: store.create(str(i).encode()), range(400)))
        
        assert len({c.code for c in created}) == 400
        assert store.count() == 400
    
    @pytest.mark.asyncio
    async def test_async_take_once(self, store):
        """Handlers offloaded to threads from asyncio see one winner."""
        created = store.create(b"race")
        
        results = await asyncio.gather(*[
            asyncio.to_thread(store.take_once, created.code)
            for _ in range(20)
        ])
        
        assert results.count(b"race") == 1
        assert results.count(None) == 19


class TestSweepLifecycle:
    """Tests for start_sweep / stop_sweep."""
    
    def test_background_sweep_removes_expired(self, clock):
        store = EntryStore(EntryCipher(), ttl_ms=1000, cleanup_interval_ms=10, clock=clock)
        store.create(b"hello")
        clock.advance(1001)
        
        store.start_sweep()
        try:
            for _ in range(200):
                if store.count() == 0:
                    break
                threading.Event().wait(0.01)
        finally:
            store.stop_sweep()
        
        assert store.count() == 0
    
    def test_start_stop_idempotent(self, store):
        store.start_sweep()
        thread = store._sweeper._thread
        store.start_sweep()
        
        assert store._sweeper._thread is thread
        
        store.stop_sweep()
        store.stop_sweep()
        
        assert store._sweeper.running is False
    
    def test_restart_after_stop(self, store):
        store.start_sweep()
        store.stop_sweep()
        store.start_sweep()
        
        assert store._sweeper.running is True
        
        store.stop_sweep()
