"""
Moving-average speed smoother.

Single-fix GPS speed is noisy enough to make a live readout jump around; a
short trailing mean trades about a second of latency for a stable number.
"""

from collections import deque

import numpy as np


class SpeedSmoother:
    """Trailing arithmetic mean over the last ``window`` instantaneous speeds."""

    def __init__(self, window=5):
        """
        Args:
            window (int): Number of speeds averaged (oldest evicted first)
        """
        if not isinstance(window, int) or window <= 0:
            raise ValueError(f"window must be a positive integer, got {window!r}")
        self.window = window
        self.speed_history = deque(maxlen=window)
        self.smoothed_speed = 0.0  # m/s

    def push(self, speed):
        """Add one instantaneous speed (m/s) and return the smoothed speed."""
        self.speed_history.append(speed)
        self.smoothed_speed = float(np.mean(self.speed_history))
        return self.smoothed_speed

    def reset(self):
        self.speed_history.clear()
        self.smoothed_speed = 0.0

    def __len__(self):
        return len(self.speed_history)
