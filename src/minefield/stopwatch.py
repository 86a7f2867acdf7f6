"""
Play-time stopwatch.

Measures how long a game has been running; the engine starts it on the
first activation and stops it when the game is won or lost.
"""
import time
from typing import Callable, Optional


# ============================================================================
# Stopwatch Class
# ============================================================================

class Stopwatch:
    """
    Accumulating timer that can be started, stopped and cleared.

    The clock is any callable returning seconds as a float, so tests can
    drive time by hand.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        """
        Initialize a stopped stopwatch.

        Args:
            clock: Callable returning the current time in seconds.
        """
        self._clock = clock
        self._accumulated = 0.0
        self._started_at: Optional[float] = None

    # ========================================================================
    # Controls
    # ========================================================================

    def start(self) -> None:
        """Start measuring; no effect if already running."""
        if self._started_at is None:
            self._started_at = self._clock()

    def stop(self) -> None:
        """Stop measuring and keep the time so far; no effect if stopped."""
        if self._started_at is not None:
            self._accumulated += self._clock() - self._started_at
            self._started_at = None

    def reset(self) -> None:
        """Stop and clear the accumulated time."""
        self._accumulated = 0.0
        self._started_at = None

    # ========================================================================
    # Readings
    # ========================================================================

    @property
    def running(self) -> bool:
        """Check if the stopwatch is currently measuring."""
        return self._started_at is not None

    @property
    def elapsed(self) -> float:
        """Seconds measured so far, including the running stretch."""
        if self._started_at is None:
            return self._accumulated
        return self._accumulated + self._clock() - self._started_at

    @property
    def elapsed_seconds(self) -> int:
        """Elapsed time truncated to whole seconds."""
        return int(self.elapsed)
