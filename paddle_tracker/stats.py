"""
Session aggregates derived from smoothed speed and accepted distance.

Stroke rate, stroke count and calories are heuristics, not measurements:
there is no cadence sensor, so they are estimated from speed and distance
using the constants in EstimateConfig.
"""

from .models import KMH_PER_MPS, EstimateConfig


def estimate_stroke_rate(speed_kmh, estimates):
    """
    Map a speed to an estimated stroke rate (strokes/min).

    Typical rates run from about 18 SPM paddling easy to the mid 30s racing;
    the mapping is linear in speed and clamped to the configured range.

    Args:
        speed_kmh (float): Smoothed speed in km/h
        estimates (EstimateConfig): Mapping constants

    Returns:
        float: Strokes per minute, or 0.0 when not moving
    """
    if speed_kmh <= 0:
        return 0.0
    spm = estimates.base_stroke_rate + (speed_kmh / estimates.stroke_rate_reference_kmh) * estimates.stroke_rate_gain
    return min(max(spm, estimates.min_stroke_rate), estimates.max_stroke_rate)


class StatsAggregator:
    """
    Running average/max speed, stroke and calorie estimates.

    The owner decides whether the session is active; updates are only
    applied when ``active`` is true so paused or idle fixes never move
    the totals.
    """

    def __init__(self, estimates=None):
        self.estimates = estimates or EstimateConfig()
        self.reset()

    def on_smoothed_speed(self, speed, active=True):
        """
        Record one smoothed speed (m/s).

        Zero speeds do not count towards the average so standing still at
        the dock doesn't drag it down.
        """
        if not active:
            return
        if speed > 0:
            self.speed_samples.append(speed)
            self._speed_sum += speed
            self.average_speed = self._speed_sum / len(self.speed_samples)
            if speed > self.max_speed:
                self.max_speed = speed
        self.stroke_rate = estimate_stroke_rate(speed * KMH_PER_MPS, self.estimates)

    def on_distance_delta(self, delta, active=True):
        """Add accepted distance (m) to the calorie and stroke estimates."""
        if not active or delta <= 0:
            return
        self.calories += (delta / 1000.0) * self.estimates.calories_per_km
        self.total_strokes += delta / self.estimates.meters_per_stroke

    def reset(self):
        self.speed_samples = []
        self._speed_sum = 0.0
        self.average_speed = 0.0  # m/s
        self.max_speed = 0.0  # m/s
        self.stroke_rate = 0.0
        self.calories = 0.0
        self.total_strokes = 0.0
