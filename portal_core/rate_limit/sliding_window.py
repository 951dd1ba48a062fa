"""
Sliding Window Rate Limiter
===========================
In-memory sliding window limiter keyed by hashed client prefix.
"""

import threading
from typing import Callable, Dict

import structlog

from .identifiers import hash_client_identifier
from .models import RateLimitInfo, RateWindowRecord
from ..clock import Clock, now_ms
from ..sweeper import PeriodicSweeper

logger = structlog.get_logger(__name__)

DEFAULT_WINDOW_MS = 60 * 1000
DEFAULT_CLEANUP_INTERVAL_MS = 60 * 1000


class SlidingWindowLimiter:
    """
    Sliding window rate limiter.
    
    Counts requests per identifier over the trailing window. Raw client
    keys are hashed by key_func before they touch the map.
    
    Example:
        limiter = SlidingWindowLimiter(namespace="create")
        if not limiter.check("10.0.0.5", limit=10):
            return too_many_requests()
    """
    
    def __init__(
        self,
        namespace: str = "default",
        window_ms: int = DEFAULT_WINDOW_MS,
        cleanup_interval_ms: int = DEFAULT_CLEANUP_INTERVAL_MS,
        key_func: Callable[[str], str] = hash_client_identifier,
        clock: Clock = now_ms,
    ):
        self.namespace = namespace
        self.window_ms = window_ms
        self._key_func = key_func
        self._clock = clock
        self._records: Dict[str, RateWindowRecord] = {}
        self._lock = threading.Lock()
        self._sweeper = PeriodicSweeper(
            f"rate-{namespace}", self.sweep, cleanup_interval_ms
        )
    
    def check_detailed(self, client_key: str, limit: int) -> RateLimitInfo:
        """
        Check and record a request.
        
        Args:
            client_key: Opaque client address
            limit: Maximum requests per window
            
        Returns:
            RateLimitInfo with decision and quota
        """
        identifier = self._key_func(client_key)
        
        with self._lock:
            now = self._clock()
            record = self._records.get(identifier)
            if record is None:
                record = RateWindowRecord(identifier=identifier)
                self._records[identifier] = record
            
            record.prune(now - self.window_ms)
            count = len(record.timestamps)
            
            if count >= limit:
                retry_after = (
                    record.timestamps[0] + self.window_ms - now
                    if record.timestamps else self.window_ms
                )
                blocked = RateLimitInfo(
                    allowed=False,
                    remaining=0,
                    limit=limit,
                    retry_after_ms=max(retry_after, 0),
                )
            else:
                record.timestamps.append(now)
                blocked = None
        
        if blocked is not None:
            logger.info(
                "rate_limit_exceeded",
                namespace=self.namespace,
                bucket=identifier,
                limit=limit,
            )
            return blocked
        
        return RateLimitInfo(
            allowed=True,
            remaining=limit - count - 1,
            limit=limit,
        )
    
    def check(self, client_key: str, limit: int) -> bool:
        """Check and record a request. Returns True if allowed."""
        return self.check_detailed(client_key, limit).allowed
    
    def bucket_count(self) -> int:
        """Number of identifiers currently tracked."""
        with self._lock:
            return len(self._records)
    
    def sweep(self) -> int:
        """
        Prune every record and drop the ones left empty.
        
        Returns:
            Number of buckets removed
        """
        with self._lock:
            cutoff = self._clock() - self.window_ms
            empty = []
            for identifier, record in self._records.items():
                record.prune(cutoff)
                if record.is_empty:
                    empty.append(identifier)
            for identifier in empty:
                del self._records[identifier]
        
        if empty:
            logger.debug("rate_buckets_swept", namespace=self.namespace, removed=len(empty))
        return len(empty)
    
    def start_sweep(self) -> None:
        self._sweeper.start()
    
    def stop_sweep(self) -> None:
        self._sweeper.stop()
