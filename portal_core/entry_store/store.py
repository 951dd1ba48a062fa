"""
Entry Store
===========
In-memory map of code -> encrypted entry with TTL expiry and take-once reads.
"""

import threading
from typing import Dict, Optional

import structlog

from .models import Entry, CreatedEntry
from ..cipher import EntryCipher
from ..clock import Clock, now_ms
from ..codes import MAX_COLLISION_RETRIES, generate_unique_code
from ..exceptions import AllocationExhausted, AuthenticationFailure, ExhaustionError
from ..sweeper import PeriodicSweeper

logger = structlog.get_logger(__name__)

DEFAULT_TTL_MS = 10 * 60 * 1000
DEFAULT_CLEANUP_INTERVAL_MS = 60 * 1000


class EntryStore:
    """
    Owns the entry map. All reads and writes go through one lock, so a
    code can be handed out to at most one caller.
    
    Example:
        store = EntryStore(EntryCipher())
        created = store.create(b"hello")
        store.take_once(created.code)   # b"hello"
        store.take_once(created.code)   # None
    """
    
    def __init__(
        self,
        cipher: EntryCipher,
        ttl_ms: int = DEFAULT_TTL_MS,
        cleanup_interval_ms: int = DEFAULT_CLEANUP_INTERVAL_MS,
        max_code_retries: int = MAX_COLLISION_RETRIES,
        clock: Clock = now_ms,
    ):
        self.ttl_ms = ttl_ms
        self.max_code_retries = max_code_retries
        self._cipher = cipher
        self._clock = clock
        self._entries: Dict[str, Entry] = {}
        self._lock = threading.Lock()
        self._sweeper = PeriodicSweeper("entries", self.sweep, cleanup_interval_ms)
    
    def create(self, plaintext: bytes) -> CreatedEntry:
        """
        Encrypt and store a payload under a fresh code.
        
        Args:
            plaintext: Payload bytes; length is validated by the caller
            
        Returns:
            CreatedEntry with the code and absolute expiry (ms)
            
        Raises:
            AllocationExhausted: If no free code was found
        """
        payload = self._cipher.encrypt(plaintext)
        
        with self._lock:
            try:
                code = generate_unique_code(
                    self._entries.keys(),
                    max_retries=self.max_code_retries,
                )
            except ExhaustionError as e:
                raise AllocationExhausted(str(e), attempts=e.attempts) from e
            
            now = self._clock()
            entry = Entry(
                code=code,
                payload=payload,
                created_at=now,
                expires_at=now + self.ttl_ms,
            )
            self._entries[code] = entry
        
        logger.debug("entry_created", expires_at=entry.expires_at)
        return CreatedEntry(code=code, expires_at=entry.expires_at)
    
    def take_once(self, code: str) -> Optional[bytes]:
        """
        Return the plaintext for a code and destroy the entry.
        
        Absent, expired, already-taken and tampered entries all return None
        so callers cannot tell them apart.
        
        Args:
            code: 6-digit code, format already validated upstream
            
        Returns:
            Plaintext bytes, or None if not found
        """
        with self._lock:
            entry = self._entries.pop(code, None)
            if entry is None:
                return None
            
            if entry.is_expired(self._clock()):
                logger.debug("entry_expired_on_read")
                return None
            
            try:
                plaintext = self._cipher.decrypt(entry.payload)
            except AuthenticationFailure:
                logger.warning("entry_authentication_failed", created_at=entry.created_at)
                return None
        
        logger.debug("entry_consumed")
        return plaintext
    
    def has_valid_entry(self, code: str) -> bool:
        """Check whether a live entry exists without consuming it."""
        with self._lock:
            entry = self._entries.get(code)
            if entry is None:
                return False
            if entry.is_expired(self._clock()):
                del self._entries[code]
                return False
            return True
    
    def count(self) -> int:
        """Number of entries currently held (observability only)."""
        with self._lock:
            return len(self._entries)
    
    def sweep(self) -> int:
        """
        Delete every expired entry.
        
        Returns:
            Number of entries removed
        """
        with self._lock:
            now = self._clock()
            expired = [
                code for code, entry in self._entries.items()
                if entry.is_expired(now)
            ]
            for code in expired:
                del self._entries[code]
            remaining = len(self._entries)
        
        if expired:
            logger.info("entries_swept", removed=len(expired), remaining=remaining)
        return len(expired)
    
    def clear(self) -> None:
        """Drop all entries."""
        with self._lock:
            self._entries.clear()
    
    def start_sweep(self) -> None:
        self._sweeper.start()
    
    def stop_sweep(self) -> None:
        self._sweeper.stop()
