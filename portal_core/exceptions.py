"""
Portal Exceptions
=================
Exception classes shared across the portal core.
"""


class PortalError(Exception):
    """Base class for all portal core errors."""
    pass


class ConfigError(PortalError):
    """Raised when configuration values are out of range."""
    pass


class ExhaustionError(PortalError):
    """Raised when no free code was found within the retry budget."""
    
    def __init__(self, message: str, attempts: int = 0):
        super().__init__(message)
        self.attempts = attempts


class AllocationExhausted(ExhaustionError):
    """
    Raised by the entry store when a code cannot be allocated.
    
    Callers should treat this as a transient overload (503), not a client error.
    """
    pass


class AuthenticationFailure(PortalError):
    """Raised when a ciphertext fails tag verification or is malformed."""
    pass
