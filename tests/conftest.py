import math

import pytest

from paddle_tracker.filters.utils import EARTH_RADIUS_M
from paddle_tracker.models import FilterConfig, Fix
from paddle_tracker.workout import WorkoutSession

ORIGIN_LAT = 41.0082
ORIGIN_LON = 28.9784


class FakeClock:
    """Manually advanced clock; call the instance to read it."""

    def __init__(self, start=1000.0):
        self.value = start

    def __call__(self):
        return self.value

    def advance(self, seconds):
        self.value += seconds
        return self.value


def north_of(meters, lat=ORIGIN_LAT):
    """Latitude ``meters`` north of ``lat`` (exact for haversine along a meridian)."""
    return lat + math.degrees(meters / EARTH_RADIUS_M)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_fix(clock):
    def _make(meters_north=0.0, speed=2.0, accuracy=5.0, age=0.0, lon=ORIGIN_LON):
        return Fix(
            latitude=north_of(meters_north),
            longitude=lon,
            horizontal_accuracy_m=accuracy,
            speed_mps=speed,
            timestamp=clock() - age,
        )
    return _make


@pytest.fixture
def config():
    return FilterConfig()


@pytest.fixture
def session(clock, config):
    return WorkoutSession(config, clock=clock)
