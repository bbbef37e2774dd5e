"""
Running distance integrator with jitter suppression.

A displacement between consecutive fixes is counted when either signal says
the boat is really moving: the reported speed is above the speed threshold,
or the displacement itself is too large to be noise. Slow drift, where both
are small, is swallowed. The reference position advances either way so
repeated small jitters never add up into one countable jump.
"""

import logging

from .utils import haversine_distance

logger = logging.getLogger(__name__)


class DistanceAccumulator:
    """Accumulates accepted displacement between consecutive good fixes."""

    def __init__(self, distance_fn=haversine_distance):
        """
        Args:
            distance_fn (callable): (lat1, lon1, lat2, lon2) -> meters
        """
        self.distance_fn = distance_fn
        self.last_position = None
        self.total_distance = 0.0  # meters

    def accumulate(self, position, speed, config):
        """
        Integrate one accepted fix.

        Args:
            position (Position): Position of the fix
            speed (float): Sanitized instantaneous speed in m/s
            config (FilterConfig): Jitter thresholds

        Returns:
            float: Distance added to the total (0.0 if suppressed or first fix)
        """
        if self.last_position is None:
            self.last_position = position
            logger.debug("first fix set as distance reference")
            return 0.0

        delta = self.distance_fn(
            self.last_position.latitude, self.last_position.longitude,
            position.latitude, position.longitude,
        )
        self.last_position = position

        is_moving = speed > config.min_speed_mps
        if is_moving or delta > config.min_delta_m:
            self.total_distance += delta
            logger.debug("distance +%.2f m -> total=%.2f m", delta, self.total_distance)
            return delta

        return 0.0

    def rebase(self, position):
        """Move the reference without counting anything (used while not recording)."""
        self.last_position = position

    def clear_reference(self):
        self.last_position = None

    def reset(self):
        self.last_position = None
        self.total_distance = 0.0
