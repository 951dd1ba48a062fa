"""
Code Allocation
===============
Cryptographically random 6-digit retrieval codes.
"""

from .generator import (
    CODE_LENGTH,
    MAX_COLLISION_RETRIES,
    generate_code,
    generate_unique_code,
    is_valid_code_format,
)
from ..exceptions import ExhaustionError

__all__ = [
    "CODE_LENGTH",
    "MAX_COLLISION_RETRIES",
    "generate_code",
    "generate_unique_code",
    "is_valid_code_format",
    "ExhaustionError",
]
