"""
Rate Limiting
=============
Privacy-preserving sliding window rate limiters for create and retrieve traffic.
"""

from .models import RateLimitResult, RateLimitInfo, RateWindowRecord
from .identifiers import client_prefix, hash_client_identifier
from .sliding_window import SlidingWindowLimiter
from .portal_limits import PortalRateLimiter

__all__ = [
    # Models
    "RateLimitResult",
    "RateLimitInfo",
    "RateWindowRecord",
    # Identifiers
    "client_prefix",
    "hash_client_identifier",
    # Limiters
    "SlidingWindowLimiter",
    "PortalRateLimiter",
]
