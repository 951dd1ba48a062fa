"""
Rate Limit Models
=================
Data models for rate limiting state and results.
"""

from typing import List, Optional
from dataclasses import dataclass, field
from enum import Enum


class RateLimitResult(str, Enum):
    """Rate limit decision result."""
    ALLOWED = "allowed"
    BLOCKED = "blocked"


@dataclass
class RateLimitInfo:
    """Rate limit check result with quota information."""
    allowed: bool
    remaining: int
    limit: int
    retry_after_ms: Optional[int] = None  # ms until one slot frees up
    
    @property
    def result(self) -> RateLimitResult:
        return RateLimitResult.ALLOWED if self.allowed else RateLimitResult.BLOCKED


@dataclass
class RateWindowRecord:
    """Recent request instants (ms) for one hashed identifier, oldest first."""
    identifier: str
    timestamps: List[int] = field(default_factory=list)
    
    def prune(self, cutoff: int) -> None:
        """Drop timestamps at or before the cutoff."""
        self.timestamps = [ts for ts in self.timestamps if ts > cutoff]
    
    @property
    def is_empty(self) -> bool:
        return not self.timestamps
