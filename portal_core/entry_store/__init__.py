"""
Entry Store
===========
Encrypted, single-use, expiring in-memory entries keyed by 6-digit code.
"""

from .models import Entry, CreatedEntry
from .store import EntryStore
from ..exceptions import AllocationExhausted

__all__ = [
    "Entry",
    "CreatedEntry",
    "EntryStore",
    "AllocationExhausted",
]
