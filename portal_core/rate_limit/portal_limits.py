"""
Portal Rate Limits
==================
Independent create and retrieve limiters with their own ceilings.
"""

from .sliding_window import SlidingWindowLimiter, DEFAULT_WINDOW_MS, DEFAULT_CLEANUP_INTERVAL_MS
from ..clock import Clock, now_ms

DEFAULT_CREATE_PER_WINDOW = 10
# Retrieval is the enumeration target, so it gets the tighter ceiling
DEFAULT_RETRIEVE_PER_WINDOW = 5


class PortalRateLimiter:
    """Two separate sliding window namespaces: create and retrieve."""
    
    def __init__(
        self,
        create_limit: int = DEFAULT_CREATE_PER_WINDOW,
        retrieve_limit: int = DEFAULT_RETRIEVE_PER_WINDOW,
        window_ms: int = DEFAULT_WINDOW_MS,
        cleanup_interval_ms: int = DEFAULT_CLEANUP_INTERVAL_MS,
        clock: Clock = now_ms,
    ):
        self.create_limit = create_limit
        self.retrieve_limit = retrieve_limit
        self.create = SlidingWindowLimiter(
            namespace="create",
            window_ms=window_ms,
            cleanup_interval_ms=cleanup_interval_ms,
            clock=clock,
        )
        self.retrieve = SlidingWindowLimiter(
            namespace="retrieve",
            window_ms=window_ms,
            cleanup_interval_ms=cleanup_interval_ms,
            clock=clock,
        )
    
    def check_create_limit(self, client_key: str) -> bool:
        return self.create.check(client_key, self.create_limit)
    
    def check_retrieve_limit(self, client_key: str) -> bool:
        return self.retrieve.check(client_key, self.retrieve_limit)
    
    def sweep(self) -> int:
        """Sweep both namespaces. Returns total buckets removed."""
        return self.create.sweep() + self.retrieve.sweep()
    
    def start_sweep(self) -> None:
        self.create.start_sweep()
        self.retrieve.start_sweep()
    
    def stop_sweep(self) -> None:
        self.create.stop_sweep()
        self.retrieve.stop_sweep()
