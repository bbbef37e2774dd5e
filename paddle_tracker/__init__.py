"""
Paddle Tracker
Live speed, distance, split and lap metrics from a noisy GPS fix stream.
"""

__version__ = "1.0.0"

from paddle_tracker.models import (
    EstimateConfig,
    FilterConfig,
    Fix,
    FixVerdict,
    LapRecord,
    Position,
    RejectReason,
    SplitRecord,
    WorkoutSnapshot,
)
from paddle_tracker.location_source import AuthorizationStatus, LocationSource
from paddle_tracker.session_clock import SessionClock, SessionPhase, SessionTicker
from paddle_tracker.workout import WorkoutSession

__all__ = [
    "AuthorizationStatus",
    "EstimateConfig",
    "FilterConfig",
    "Fix",
    "FixVerdict",
    "LapRecord",
    "LocationSource",
    "Position",
    "RejectReason",
    "SessionClock",
    "SessionPhase",
    "SessionTicker",
    "SplitRecord",
    "WorkoutSession",
    "WorkoutSnapshot",
]
