"""
Value types shared by the fix-filtering and session-aggregation pipeline.

Fixes, records and snapshots are immutable. Configuration objects validate
themselves at construction so a bad constant fails before a session starts,
never in the middle of one.
"""

from __future__ import annotations

import math
import uuid
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple

KMH_PER_MPS = 3.6


@dataclass(frozen=True)
class Position:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class Fix:
    """One observation from the location source.

    Accuracy and speed are passed through exactly as the sensor reported
    them; negative values are the sensor's "unknown" sentinels.
    """

    latitude: float
    longitude: float
    horizontal_accuracy_m: float
    speed_mps: float
    timestamp: float

    @property
    def position(self) -> Position:
        return Position(self.latitude, self.longitude)


@dataclass(frozen=True)
class FilterConfig:
    """
    Thresholds for fix gating, smoothing, jitter suppression and splits.

    Args:
        max_accuracy_m (float): Fixes with a worse horizontal accuracy are dropped
        max_fix_age_s (float): Fixes older than this (relative to now) are dropped
        min_delta_m (float): Displacement that counts as movement on its own
        min_speed_mps (float): Speed that counts as movement on its own
        smoothing_window (int): Number of speeds in the moving average
        split_interval_m (float): Distance between automatic split marks
    """

    max_accuracy_m: float = 50.0
    max_fix_age_s: float = 5.0
    min_delta_m: float = 2.0
    min_speed_mps: float = 0.5
    smoothing_window: int = 5
    split_interval_m: float = 500.0

    # min_delta_m per tracking mode
    MODES = {
        'live': 0.5,
        'strict': 2.0,
    }

    def __post_init__(self):
        if not isinstance(self.smoothing_window, int) or self.smoothing_window <= 0:
            raise ValueError(f"smoothing_window must be a positive integer, got {self.smoothing_window!r}")
        if not self.split_interval_m > 0:
            raise ValueError(f"split_interval_m must be > 0, got {self.split_interval_m!r}")
        if not self.max_accuracy_m > 0:
            raise ValueError(f"max_accuracy_m must be > 0, got {self.max_accuracy_m!r}")
        if not self.max_fix_age_s > 0:
            raise ValueError(f"max_fix_age_s must be > 0, got {self.max_fix_age_s!r}")
        if not self.min_delta_m >= 0:
            raise ValueError(f"min_delta_m must be >= 0, got {self.min_delta_m!r}")
        if not self.min_speed_mps >= 0:
            raise ValueError(f"min_speed_mps must be >= 0, got {self.min_speed_mps!r}")

    @classmethod
    def for_mode(cls, mode: str, **overrides) -> "FilterConfig":
        """Build a config whose jitter threshold matches a tracking mode."""
        if mode not in cls.MODES:
            raise ValueError(f"Unknown tracking mode: {mode}. Use {', '.join(sorted(cls.MODES))}")
        overrides.setdefault('min_delta_m', cls.MODES[mode])
        return cls(**overrides)


@dataclass(frozen=True)
class EstimateConfig:
    """
    Heuristic constants for the values no sensor measures directly.

    Stroke rate is mapped from speed in km/h:
    ``base + gain * speed / reference``, clamped to ``[min, max]`` strokes/min.
    Stroke count and calories are proportional to accepted distance.
    """

    calories_per_km: float = 50.0
    meters_per_stroke: float = 9.0
    base_stroke_rate: float = 18.0
    stroke_rate_reference_kmh: float = 5.0
    stroke_rate_gain: float = 8.0
    min_stroke_rate: float = 16.0
    max_stroke_rate: float = 40.0

    def __post_init__(self):
        if not self.meters_per_stroke > 0:
            raise ValueError(f"meters_per_stroke must be > 0, got {self.meters_per_stroke!r}")
        if not self.calories_per_km >= 0:
            raise ValueError(f"calories_per_km must be >= 0, got {self.calories_per_km!r}")
        if not self.stroke_rate_reference_kmh > 0:
            raise ValueError("stroke_rate_reference_kmh must be > 0")
        if self.min_stroke_rate > self.max_stroke_rate:
            raise ValueError(
                f"min_stroke_rate ({self.min_stroke_rate}) exceeds max_stroke_rate ({self.max_stroke_rate})"
            )


class RejectReason(Enum):
    STALE = 'stale'
    INVALID = 'invalid'
    LOW_ACCURACY = 'low_accuracy'


@dataclass(frozen=True)
class FixVerdict:
    """Outcome of gating one fix. ``speed_mps`` is the sanitized speed."""

    accepted: bool
    reason: Optional[RejectReason] = None
    speed_mps: float = 0.0

    @classmethod
    def accept(cls, speed_mps: float) -> "FixVerdict":
        return cls(True, None, speed_mps)

    @classmethod
    def reject(cls, reason: RejectReason) -> "FixVerdict":
        return cls(False, reason, 0.0)


@dataclass(frozen=True)
class SplitRecord:
    sequence_number: int
    interval_distance_m: float
    elapsed_s: float
    average_speed_kmh: float
    stroke_rate: float

    @property
    def pace_per_500m(self) -> float:
        """Seconds per 500 m over this split."""
        if self.interval_distance_m <= 0:
            return 0.0
        return (self.elapsed_s / self.interval_distance_m) * 500.0


@dataclass(frozen=True)
class LapRecord:
    number: int
    distance_m: float
    elapsed_s: float
    average_speed_kmh: float


@dataclass(frozen=True)
class WorkoutSnapshot:
    """Finalized session totals handed to whatever stores workouts."""

    duration_s: float
    distance_m: float
    average_speed_kmh: float
    max_speed_kmh: float
    calories: float
    total_strokes: float
    laps: Tuple[LapRecord, ...] = ()
    splits: Tuple[SplitRecord, ...] = ()
    date: float = 0.0
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def to_dict(self) -> Dict:
        data = asdict(self)
        data['laps'] = [asdict(lap) for lap in self.laps]
        data['splits'] = [asdict(split) for split in self.splits]
        return data


def is_finite(*values) -> bool:
    """True if every value is a real, finite number."""
    for value in values:
        if value is None or isinstance(value, bool):
            return False
        try:
            if not math.isfinite(value):
                return False
        except TypeError:
            return False
    return True

