"""
Workout session: the single serialized pipeline from raw fix to live metrics.

Every fix runs validate -> smooth -> accumulate -> aggregate -> split under
one lock, and so does every clock tick and every command. A fix that arrives
while another thread is starting, pausing or resetting the session sees
either the state before the transition or the state after it, never a mix.

Usage:
    session = WorkoutSession(FilterConfig(split_interval_m=500))
    session.start()
    ticker = session.start_ticker()          # 100 ms elapsed-time refresh
    location_source_callback = session.on_fix
    ...
    snapshot = session.save()
"""

import logging
import threading
import time
from collections import Counter

from .filters import DistanceAccumulator, FixValidator, SpeedSmoother, get_distance_function
from .location_source import AuthorizationStatus
from .models import KMH_PER_MPS, EstimateConfig, FilterConfig, WorkoutSnapshot
from .session_clock import SessionClock, SessionPhase, SessionTicker
from .splits import LapCounter, SplitDetector
from .stats import StatsAggregator

logger = logging.getLogger(__name__)


class WorkoutSession:
    """Live metrics for one workout, fed by fixes and clock ticks."""

    def __init__(self, config=None, estimates=None, clock=time.time, distance='haversine'):
        """
        Initialize session.

        Args:
            config (FilterConfig): Gating, smoothing and split thresholds
            estimates (EstimateConfig): Stroke and calorie heuristics
            clock (callable): Returns the current time in seconds
            distance (str): Distance model passed to get_distance_function()
        """
        self.config = config or FilterConfig()
        self.estimates = estimates or EstimateConfig()
        self.clock = clock

        self.validator = FixValidator(self.config)
        self.smoother = SpeedSmoother(self.config.smoothing_window)
        self.accumulator = DistanceAccumulator(get_distance_function(distance))
        self.session_clock = SessionClock(clock)
        self.stats = StatsAggregator(self.estimates)
        self.split_detector = SplitDetector(self.config.split_interval_m)
        self.lap_counter = LapCounter()

        # Display speeds (m/s); zero whenever the session is not recording
        self.smoothed_speed = 0.0
        self.gps_speed = 0.0

        self.authorization_status = AuthorizationStatus.NOT_DETERMINED
        self.is_updating = False
        self.rejections = Counter()
        self.ticker = None

        # Thread safety
        self.lock = threading.Lock()

    # --- Fix and tick events ---

    def on_fix(self, fix):
        """
        Run one fix through the pipeline - thread safe.

        Returns:
            FixVerdict: why the fix was dropped, or the accepted speed
        """
        with self.lock:
            verdict = self.validator.validate(fix, self.clock())
            if not verdict.accepted:
                self.rejections[verdict.reason] += 1
                return verdict

            position = fix.position
            if not self.session_clock.is_active:
                # Keep the reference fresh so starting doesn't count a jump
                self.accumulator.rebase(position)
                self.smoothed_speed = 0.0
                self.gps_speed = 0.0
                return verdict

            self.gps_speed = verdict.speed_mps
            self.smoothed_speed = self.smoother.push(verdict.speed_mps)
            delta = self.accumulator.accumulate(position, verdict.speed_mps, self.config)

            self.stats.on_smoothed_speed(self.smoothed_speed)
            self.stats.on_distance_delta(delta)

            elapsed = self.session_clock.tick()
            self.split_detector.on_progress(
                self.accumulator.total_distance, elapsed, self.smoothed_speed, self.stats.stroke_rate,
            )
            return verdict

    def tick(self):
        """Refresh elapsed time from the wall clock - thread safe."""
        with self.lock:
            return self.session_clock.tick()

    def start_ticker(self, interval=0.1):
        """Start (or restart) the background tick thread."""
        self.stop_ticker()
        self.ticker = SessionTicker(self.tick, interval)
        self.ticker.start()
        return self.ticker

    def stop_ticker(self):
        if self.ticker is not None:
            self.ticker.stop()
            self.ticker = None

    # --- Commands ---

    def start(self):
        with self.lock:
            self.session_clock.start()

    def pause(self):
        with self.lock:
            self.session_clock.pause()

    def reset(self):
        """Clear every total, split and lap. Safe to call in any phase."""
        with self.lock:
            self._reset_locked()

    def add_lap_boundary(self):
        """
        Close the current lap.

        Returns:
            LapRecord or None: None while idle (nothing to measure)
        """
        with self.lock:
            if self.session_clock.phase is SessionPhase.IDLE:
                logger.debug("lap ignored: session is idle")
                return None
            return self.lap_counter.add_boundary(self.accumulator.total_distance, self.session_clock.tick())

    def set_split_interval(self, meters):
        """Change the split length; already recorded splits are kept."""
        with self.lock:
            self.split_detector.set_interval(meters)

    def save(self):
        """Capture the finished workout, then reset for the next one."""
        with self.lock:
            snapshot = self._snapshot_locked()
            self._reset_locked()
        logger.info("workout %s saved: %.0f m in %.1fs", snapshot.id, snapshot.distance_m, snapshot.duration_s)
        return snapshot

    # --- Location source intents ---

    def request_authorization(self, source):
        source.request_authorization()

    def on_authorization_changed(self, status, source=None):
        with self.lock:
            self.authorization_status = status
        logger.info("location authorization: %s", status.value)
        if status.is_authorized and source is not None:
            self.start_updates(source)

    def start_updates(self, source):
        with self.lock:
            self.smoother.reset()
            self.accumulator.clear_reference()
            self.is_updating = True
        source.start_updates()

    def stop_updates(self, source):
        with self.lock:
            self.is_updating = False
        source.stop_updates()

    # --- Read access ---

    @property
    def phase(self):
        return self.session_clock.phase

    @property
    def smoothed_speed_kmh(self):
        return self.smoothed_speed * KMH_PER_MPS

    @property
    def gps_speed_kmh(self):
        return self.gps_speed * KMH_PER_MPS

    @property
    def total_distance_m(self):
        return self.accumulator.total_distance

    @property
    def elapsed_s(self):
        return self.session_clock.elapsed

    @property
    def average_speed_kmh(self):
        return self.stats.average_speed * KMH_PER_MPS

    @property
    def max_speed_kmh(self):
        return self.stats.max_speed * KMH_PER_MPS

    @property
    def stroke_rate(self):
        return self.stats.stroke_rate

    @property
    def total_strokes(self):
        return self.stats.total_strokes

    @property
    def calories(self):
        return self.stats.calories

    @property
    def splits(self):
        return tuple(self.split_detector.splits)

    @property
    def laps(self):
        return tuple(self.lap_counter.laps)

    @property
    def current_split_distance(self):
        return self.split_detector.current_split_distance

    @property
    def average_pace_per_500m(self):
        """Seconds per 500 m at the session average speed (0.0 if unknown)."""
        if self.stats.average_speed <= 0:
            return 0.0
        return 500.0 / self.stats.average_speed

    def metrics(self):
        """Consistent copy of every live value - thread safe."""
        with self.lock:
            return {
                'phase': self.phase.value,
                'elapsed_s': self.elapsed_s,
                'smoothed_speed_kmh': self.smoothed_speed_kmh,
                'gps_speed_kmh': self.gps_speed_kmh,
                'total_distance_m': self.total_distance_m,
                'average_speed_kmh': self.average_speed_kmh,
                'max_speed_kmh': self.max_speed_kmh,
                'stroke_rate': self.stroke_rate,
                'total_strokes': self.total_strokes,
                'calories': self.calories,
                'current_split_distance': self.current_split_distance,
                'split_count': len(self.split_detector.splits),
                'lap_count': len(self.lap_counter.laps),
            }

    def snapshot(self):
        with self.lock:
            return self._snapshot_locked()

    # --- Internals (caller holds self.lock) ---

    def _snapshot_locked(self):
        return WorkoutSnapshot(
            duration_s=self.session_clock.tick(),
            distance_m=self.accumulator.total_distance,
            average_speed_kmh=self.stats.average_speed * KMH_PER_MPS,
            max_speed_kmh=self.stats.max_speed * KMH_PER_MPS,
            calories=self.stats.calories,
            total_strokes=self.stats.total_strokes,
            laps=tuple(self.lap_counter.laps),
            splits=tuple(self.split_detector.splits),
            date=self.clock(),
        )

    def _reset_locked(self):
        self.session_clock.reset()
        self.smoother.reset()
        self.accumulator.reset()
        self.stats.reset()
        self.split_detector.reset()
        self.lap_counter.reset()
        self.smoothed_speed = 0.0
        self.gps_speed = 0.0
        self.rejections.clear()
        logger.info("session reset")
