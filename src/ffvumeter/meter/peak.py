"""Peak hold with bounded falloff."""

import numpy as np

from ..exceptions import ConfigurationError


class PeakTracker:
    """
    Tracks the loudest recent smoothed level.

    The peak is the maximum over the last ``window`` samples, but it never
    drops by more than ``falloff_rate`` per sample, so the marker falls
    slowly instead of snapping to the current level.
    """

    def __init__(self, window: int, falloff_rate: float):
        """
        Initialize peak tracker.

        Args:
            window: Number of smoothed samples held
            falloff_rate: Maximum decrease of the peak per sample
        """
        if window < 1:
            raise ConfigurationError(f"Invalid peak window {window}")
        if falloff_rate < 0:
            raise ConfigurationError(f"Invalid falloff rate {falloff_rate}")
        self.window = window
        self.falloff_rate = falloff_rate
        self.last_peak = 0.0
        self._buffer = np.zeros(window, dtype=np.float64)
        self._cursor = 0

    def push(self, smoothed: float) -> float:
        """Store a smoothed level and return the current peak."""
        self._buffer[self._cursor] = smoothed
        self._cursor = (self._cursor + 1) % self.window

        peak = max(smoothed, float(self._buffer.max()))
        if peak < self.last_peak:
            peak = max(peak, self.last_peak - self.falloff_rate)

        self.last_peak = peak
        return peak

    def reset(self) -> None:
        """Clear peak history."""
        self._buffer.fill(0.0)
        self._cursor = 0
        self.last_peak = 0.0
