"""
Portal Core Library
===================
Encrypted one-time text relay: entry store, code allocation, payload
cipher and privacy-preserving rate limiting.
"""

__version__ = "0.1.0"

# Errors
from portal_core.exceptions import (
    PortalError,
    ConfigError,
    ExhaustionError,
    AllocationExhausted,
    AuthenticationFailure,
)

# Config
from portal_core.config import PortalConfig

# Logging
from portal_core.logging_config import setup_logging

# Codes
from portal_core.codes import (
    generate_code,
    generate_unique_code,
    is_valid_code_format,
)

# Cipher
from portal_core.cipher import EntryCipher, EncryptedPayload

# Entry Store
from portal_core.entry_store import Entry, CreatedEntry, EntryStore

# Rate Limiting
from portal_core.rate_limit import (
    SlidingWindowLimiter,
    PortalRateLimiter,
    RateLimitInfo,
    RateLimitResult,
    RateWindowRecord,
    hash_client_identifier,
)

# Lifecycle
from portal_core.sweeper import PeriodicSweeper

# Facade
from portal_core.portal import TextPortal

__all__ = [
    # Errors
    "PortalError",
    "ConfigError",
    "ExhaustionError",
    "AllocationExhausted",
    "AuthenticationFailure",
    # Config
    "PortalConfig",
    # Logging
    "setup_logging",
    # Codes
    "generate_code",
    "generate_unique_code",
    "is_valid_code_format",
    # Cipher
    "EntryCipher",
    "EncryptedPayload",
    # Entry Store
    "Entry",
    "CreatedEntry",
    "EntryStore",
    # Rate Limiting
    "SlidingWindowLimiter",
    "PortalRateLimiter",
    "RateLimitInfo",
    "RateLimitResult",
    "RateWindowRecord",
    "hash_client_identifier",
    # Lifecycle
    "PeriodicSweeper",
    # Facade
    "TextPortal",
]
