"""
Time Sources

The meeting never reads the system clock directly. It asks an injected
Clock for "now" and computes elapsed time by difference, so tests can drive
time by hand instead of sleeping.
"""

import time
from abc import ABC, abstractmethod


class Clock(ABC):
    """A monotonic time source."""
    
    @abstractmethod
    def now(self) -> float:
        """
        Current reading in seconds.
        
        Only differences between readings are meaningful. Readings must
        never decrease.
        """
        pass


class MonotonicClock(Clock):
    """Clock backed by time.monotonic()."""
    
    def now(self) -> float:
        return time.monotonic()
