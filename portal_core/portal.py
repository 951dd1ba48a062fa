"""
Text Portal
===========
Wires the cipher, entry store and rate limiters into the four operations
the transport layer calls.
"""

from typing import Any, Dict, Optional

import structlog

from .cipher import EntryCipher
from .clock import Clock, now_ms
from .config import PortalConfig
from .entry_store import CreatedEntry, EntryStore
from .rate_limit import PortalRateLimiter

logger = structlog.get_logger(__name__)


class TextPortal:
    """
    One-time text relay core.
    
    Build one per process and hand it to request handlers. Use as a
    context manager to run the background sweeps for its lifetime.
    
    Example:
        with TextPortal(PortalConfig.from_env()) as portal:
            if portal.check_create_limit(client_ip):
                created = portal.create(b"hello")
    """
    
    def __init__(self, config: Optional[PortalConfig] = None, clock: Clock = now_ms):
        self.config = (config or PortalConfig()).validate()
        self.entries = EntryStore(
            EntryCipher(),
            ttl_ms=self.config.ttl_ms,
            cleanup_interval_ms=self.config.cleanup_interval_ms,
            max_code_retries=self.config.max_code_retries,
            clock=clock,
        )
        self.limits = PortalRateLimiter(
            create_limit=self.config.create_per_window,
            retrieve_limit=self.config.retrieve_per_window,
            window_ms=self.config.rate_window_ms,
            cleanup_interval_ms=self.config.cleanup_interval_ms,
            clock=clock,
        )
    
    def create(self, plaintext: bytes) -> CreatedEntry:
        """Store a payload. Raises AllocationExhausted on code saturation."""
        return self.entries.create(plaintext)
    
    def take_once(self, code: str) -> Optional[bytes]:
        """Consume a payload. Returns None when not found."""
        return self.entries.take_once(code)
    
    def check_create_limit(self, client_key: str) -> bool:
        return self.limits.check_create_limit(client_key)
    
    def check_retrieve_limit(self, client_key: str) -> bool:
        return self.limits.check_retrieve_limit(client_key)
    
    def create_text(self, content: str) -> CreatedEntry:
        """UTF-8 convenience wrapper around create()."""
        return self.create(content.encode("utf-8"))
    
    def take_text(self, code: str) -> Optional[str]:
        """UTF-8 convenience wrapper around take_once()."""
        plaintext = self.take_once(code)
        return plaintext.decode("utf-8") if plaintext is not None else None
    
    def stats(self) -> Dict[str, Any]:
        """Live counts for observability."""
        return {
            "active_entries": self.entries.count(),
            "create_buckets": self.limits.create.bucket_count(),
            "retrieve_buckets": self.limits.retrieve.bucket_count(),
        }
    
    def start_sweep(self) -> None:
        self.entries.start_sweep()
        self.limits.start_sweep()
    
    def stop_sweep(self) -> None:
        self.entries.stop_sweep()
        self.limits.stop_sweep()
    
    def __enter__(self) -> "TextPortal":
        self.start_sweep()
        logger.info(
            "portal_started",
            ttl_ms=self.config.ttl_ms,
            create_per_window=self.config.create_per_window,
            retrieve_per_window=self.config.retrieve_per_window,
        )
        return self
    
    def __exit__(self, *exc_info) -> None:
        self.stop_sweep()
        logger.info("portal_stopped", active_entries=self.entries.count())
