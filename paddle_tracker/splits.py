"""
Split and lap boundaries.

Splits are automatic: one record each time total distance passes the next
multiple of the split interval. Laps are manual: the rower marks a boundary
and the lap covers everything since the previous one.
"""

import logging
import math
from enum import Enum

import numpy as np

from .models import KMH_PER_MPS, LapRecord, SplitRecord

logger = logging.getLogger(__name__)


class SplitDetector:
    """Emits a SplitRecord for every split mark crossed."""

    def __init__(self, interval=500.0):
        """
        Args:
            interval (float): Split length in meters
        """
        self.set_interval(interval)
        self.splits = []
        self.last_split_distance = 0.0
        self.last_split_time = 0.0
        self.current_split_distance = 0.0

    def set_interval(self, interval):
        if not interval > 0:
            raise ValueError(f"split interval must be > 0, got {interval!r}")
        self.interval = float(interval)

    def on_progress(self, total_distance, elapsed, speed, stroke_rate):
        """
        Check for crossed split marks.

        When one update jumps over several marks (e.g. after a GPS gap) one
        split is emitted per mark, in order, with the time since the last
        split shared evenly between them.

        Args:
            total_distance (float): Accumulated distance in meters
            elapsed (float): Active session time in seconds
            speed (float): Current smoothed speed in m/s
            stroke_rate (float): Current stroke rate estimate

        Returns:
            list[SplitRecord]: Splits emitted by this update (usually empty)
        """
        current_meter = math.floor(total_distance)
        emitted = []
        if total_distance > 0:
            marks = []
            mark = self.last_split_distance + self.interval
            while current_meter >= mark:
                marks.append(mark)
                mark += self.interval

            if marks:
                share = (elapsed - self.last_split_time) / len(marks)
                for mark in marks:
                    split = SplitRecord(
                        sequence_number=len(self.splits) + 1,
                        interval_distance_m=self.interval,
                        elapsed_s=share,
                        average_speed_kmh=speed * KMH_PER_MPS,
                        stroke_rate=stroke_rate,
                    )
                    self.splits.append(split)
                    emitted.append(split)
                    self.last_split_distance = mark
                    logger.info(
                        "split %d at %.0f m: %.1fs (%.1fs/500m)",
                        split.sequence_number, mark, split.elapsed_s, split.pace_per_500m,
                    )
                self.last_split_time = elapsed

        self.current_split_distance = max(0.0, current_meter - self.last_split_distance)
        return emitted

    def reset(self):
        self.splits = []
        self.last_split_distance = 0.0
        self.last_split_time = 0.0
        self.current_split_distance = 0.0


class LapCounter:
    """Builds LapRecords from distance/time deltas between manual boundaries."""

    def __init__(self):
        self.reset()

    def add_boundary(self, total_distance, elapsed):
        distance = total_distance - self.lap_start_distance
        lap_time = elapsed - self.lap_start_time
        # km/h straight from meters and seconds
        average_speed = (distance / 1000.0) / (lap_time / 3600.0) if lap_time > 0 else 0.0

        lap = LapRecord(
            number=len(self.laps) + 1,
            distance_m=distance,
            elapsed_s=lap_time,
            average_speed_kmh=average_speed,
        )
        self.laps.append(lap)
        self.lap_start_distance = total_distance
        self.lap_start_time = elapsed
        logger.info("lap %d: %.0f m in %.1fs", lap.number, lap.distance_m, lap.elapsed_s)
        return lap

    def reset(self):
        self.laps = []
        self.lap_start_distance = 0.0
        self.lap_start_time = 0.0


def summarize_splits(splits):
    """
    Pace summary over a sequence of splits.

    Returns:
        dict: 'average_pace', 'best_pace', 'worst_pace' in seconds per 500 m
              (all 0.0 when there are no splits)
    """
    if not splits:
        return {'average_pace': 0.0, 'best_pace': 0.0, 'worst_pace': 0.0}
    paces = np.array([split.pace_per_500m for split in splits])
    return {
        'average_pace': float(paces.mean()),
        'best_pace': float(paces.min()),
        'worst_pace': float(paces.max()),
    }


class PerformanceRating(Enum):
    ELITE = 'elite'
    EXCELLENT = 'excellent'
    GOOD = 'good'
    AVERAGE = 'average'
    BEGINNER = 'beginner'

    @classmethod
    def from_pace(cls, pace_seconds, multiplier=1.0):
        """
        Rate a 500 m pace.

        Args:
            pace_seconds (float): Seconds per 500 m
            multiplier (float): Scales the pace first, e.g. for crew boats
        """
        adjusted = pace_seconds * multiplier
        for bound, rating in PACE_BANDS:
            if adjusted < bound:
                return rating
        return cls.BEGINNER


# Upper bound (exclusive) of each band, seconds per 500 m
PACE_BANDS = (
    (90.0, PerformanceRating.ELITE),
    (105.0, PerformanceRating.EXCELLENT),
    (120.0, PerformanceRating.GOOD),
    (150.0, PerformanceRating.AVERAGE),
)
