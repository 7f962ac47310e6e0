"""Moving-average smoothing of normalized levels."""

import numpy as np

from ..exceptions import ConfigurationError


class SmoothingBuffer:
    """Circular buffer of recent levels, averaged on every push."""

    def __init__(self, window: int):
        """
        Initialize smoothing buffer.

        Args:
            window: Number of samples averaged. Slots start at zero, so the
                average ramps up over the first ``window`` samples.
        """
        if window < 1:
            raise ConfigurationError(f"Invalid smoothing window {window}")
        self.window = window
        self._buffer = np.zeros(window, dtype=np.float64)
        self._cursor = 0

    def push(self, level: float) -> float:
        """Store a level and return the mean of the whole window."""
        self._buffer[self._cursor] = level
        self._cursor = (self._cursor + 1) % self.window

        # A flat window averages to its value exactly
        if self._buffer.min() == self._buffer.max():
            return float(self._buffer[0])
        return float(np.mean(self._buffer))

    def reset(self) -> None:
        """Clear smoothing history."""
        self._buffer.fill(0.0)
        self._cursor = 0
