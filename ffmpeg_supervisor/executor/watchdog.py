"""
Inactivity watchdog for supervised processes.
"""

import time
from typing import Callable, Optional


class InactivityWatchdog:
    """
    Tracks the time since the last read activity.

    The window is inclusive: once the gap since the last touch reaches the
    timeout exactly, the watchdog is expired. A None timeout never expires.
    """

    def __init__(
        self,
        timeout: Optional[float],
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize watchdog.

        Args:
            timeout: Maximum allowed gap between reads in seconds (None = disabled)
            clock: Monotonic clock returning seconds
        """
        self.timeout = timeout
        self._clock = clock
        self._last_activity = clock()

    @property
    def enabled(self) -> bool:
        return self.timeout is not None

    def touch(self) -> None:
        """Record read activity, resetting the window."""
        self._last_activity = self._clock()

    def idle_for(self) -> float:
        """Seconds since the last activity."""
        return self._clock() - self._last_activity

    def remaining(self) -> Optional[float]:
        """
        Seconds left before expiry.

        Returns:
            Remaining seconds (never negative), or None when disabled
        """
        if self.timeout is None:
            return None
        return max(self.timeout - self.idle_for(), 0.0)

    def expired(self) -> bool:
        """Check if the gap since the last activity reached the timeout."""
        if self.timeout is None:
            return False
        return self.idle_for() >= self.timeout
