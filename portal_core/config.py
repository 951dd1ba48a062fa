"""
Portal Configuration
====================
Configuration for the entry store and rate limiters.
"""

import os
from dataclasses import dataclass, fields

from .exceptions import ConfigError


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer") from e


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class PortalConfig:
    """Configuration consumed by the portal core. Immutable once built."""
    ttl_ms: int = 10 * 60 * 1000
    cleanup_interval_ms: int = 60 * 1000
    rate_window_ms: int = 60 * 1000
    create_per_window: int = 10
    retrieve_per_window: int = 5
    max_code_retries: int = 10
    max_content_length: int = 50000  # characters, enforced by the transport
    log_level: str = "INFO"
    json_logs: bool = True
    
    @classmethod
    def from_env(cls) -> "PortalConfig":
        """
        Build a config from the current environment.
        
        Unset variables fall back to the class defaults.
        
        Raises:
            ConfigError: If a variable is not an integer or not positive
        """
        return cls(
            ttl_ms=_env_int("PORTAL_TTL_MS", cls.ttl_ms),
            cleanup_interval_ms=_env_int("PORTAL_CLEANUP_INTERVAL_MS", cls.cleanup_interval_ms),
            rate_window_ms=_env_int("PORTAL_RATE_WINDOW_MS", cls.rate_window_ms),
            create_per_window=_env_int("PORTAL_CREATE_PER_MINUTE", cls.create_per_window),
            retrieve_per_window=_env_int("PORTAL_RETRIEVE_PER_MINUTE", cls.retrieve_per_window),
            max_code_retries=_env_int("PORTAL_MAX_CODE_RETRIES", cls.max_code_retries),
            max_content_length=_env_int("PORTAL_MAX_CONTENT_LENGTH", cls.max_content_length),
            log_level=os.environ.get("LOG_LEVEL", cls.log_level),
            json_logs=_env_bool("LOG_JSON", cls.json_logs),
        ).validate()
    
    def validate(self) -> "PortalConfig":
        """
        Check that every duration and ceiling is positive.
        
        Returns:
            self, so calls can be chained
            
        Raises:
            ConfigError: If any numeric field is zero or negative
        """
        for field in fields(self):
            value = getattr(self, field.name)
            if isinstance(value, bool) or not isinstance(value, int):
                continue
            if value <= 0:
                raise ConfigError(f"{field.name} must be positive, got {value}")
        return self
