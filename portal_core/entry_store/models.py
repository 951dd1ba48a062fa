"""
Entry Models
============
Data models for stored entries and creation results.
"""

from dataclasses import dataclass

from ..cipher import EncryptedPayload


@dataclass(frozen=True)
class Entry:
    """One pending secret. Immutable once created."""
    code: str
    payload: EncryptedPayload
    created_at: int  # ms since epoch
    expires_at: int  # ms since epoch
    
    def is_expired(self, now: int) -> bool:
        return now > self.expires_at


@dataclass(frozen=True)
class CreatedEntry:
    """Result of a successful create."""
    code: str
    expires_at: int  # ms since epoch
    
    def expires_in(self, now: int) -> int:
        """Whole seconds until expiry, never negative."""
        return max(0, (self.expires_at - now) // 1000)
