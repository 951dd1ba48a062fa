"""
Clock Helpers
=============
Single source of wall-clock time for the portal core.
"""

import time
from typing import Callable

Clock = Callable[[], int]


def now_ms() -> int:
    """Current UTC time in milliseconds since the epoch."""
    return int(time.time() * 1000)
