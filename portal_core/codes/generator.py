"""
Code Generator
==============
Secure random code generation and format validation.
"""

import re
import secrets
from typing import AbstractSet

import structlog

from ..exceptions import ExhaustionError

logger = structlog.get_logger(__name__)

CODE_LENGTH = 6
CODE_SPACE = 10 ** CODE_LENGTH
MAX_COLLISION_RETRIES = 10

# ASCII digits only; \d would also accept other Unicode decimals
_CODE_PATTERN = re.compile(r"[0-9]{6}")


def generate_code() -> str:
    """
    Generate a random 6-digit code.
    
    Drawn uniformly from [0, 999999] using the OS CSPRNG.
    
    Returns:
        Zero-padded code string, e.g. "004829"
    """
    return str(secrets.randbelow(CODE_SPACE)).zfill(CODE_LENGTH)


def generate_unique_code(
    live_codes: AbstractSet[str],
    max_retries: int = MAX_COLLISION_RETRIES,
) -> str:
    """
    Generate a code that is not in the live set.
    
    Args:
        live_codes: Codes currently allocated to live entries
        max_retries: Number of draws before giving up
        
    Returns:
        A code absent from live_codes
        
    Raises:
        ExhaustionError: If every draw collided
    """
    for _ in range(max_retries):
        code = generate_code()
        if code not in live_codes:
            return code
    
    logger.warning(
        "code_allocation_exhausted",
        attempts=max_retries,
        live_codes=len(live_codes),
    )
    raise ExhaustionError(
        "Unable to generate unique code - too many active entries",
        attempts=max_retries,
    )


def is_valid_code_format(value: str) -> bool:
    """Check that a value is exactly six ASCII decimal digits."""
    if not isinstance(value, str):
        return False
    return _CODE_PATTERN.fullmatch(value) is not None
