# modgate/core/time.py
from __future__ import annotations
import time

__all__ = ["nowMonotonic"]



def nowMonotonic() -> float:
    """Monotonic clock in seconds. Used to measure real elapsed time between cooperative ticks."""
    return time.perf_counter()
