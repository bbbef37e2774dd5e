import pytest

from paddle_tracker.models import EstimateConfig
from paddle_tracker.stats import StatsAggregator, estimate_stroke_rate


def test_average_ignores_zero_speeds():
    stats = StatsAggregator()
    for speed in [2.0, 0.0, 4.0, 0.0]:
        stats.on_smoothed_speed(speed)
    assert stats.average_speed == pytest.approx(3.0)
    assert stats.speed_samples == [2.0, 4.0]


def test_max_speed_only_grows():
    stats = StatsAggregator()
    seen = []
    for speed in [1.0, 3.0, 2.0, 0.0, 2.5]:
        stats.on_smoothed_speed(speed)
        seen.append(stats.max_speed)
    assert seen == [1.0, 3.0, 3.0, 3.0, 3.0]


def test_updates_ignored_when_inactive():
    stats = StatsAggregator()
    stats.on_smoothed_speed(3.0, active=False)
    stats.on_distance_delta(100.0, active=False)
    assert stats.max_speed == 0.0
    assert stats.calories == 0.0
    assert stats.total_strokes == 0.0


def test_distance_drives_calories_and_strokes():
    stats = StatsAggregator()
    stats.on_distance_delta(900.0)
    assert stats.calories == pytest.approx(45.0)
    assert stats.total_strokes == pytest.approx(100.0)


def test_non_positive_delta_changes_nothing():
    stats = StatsAggregator()
    stats.on_distance_delta(0.0)
    stats.on_distance_delta(-5.0)
    assert stats.calories == 0.0
    assert stats.total_strokes == 0.0


def test_custom_estimates():
    stats = StatsAggregator(EstimateConfig(calories_per_km=80, meters_per_stroke=10))
    stats.on_distance_delta(500.0)
    assert stats.calories == pytest.approx(40.0)
    assert stats.total_strokes == pytest.approx(50.0)


@pytest.mark.parametrize("kmh, expected", [
    (0.0, 0.0),
    (5.0, 26.0),
    (10.0, 34.0),
    (0.1, 18.16),
    (30.0, 40.0),
])
def test_stroke_rate_mapping(kmh, expected):
    assert estimate_stroke_rate(kmh, EstimateConfig()) == pytest.approx(expected)


def test_stroke_rate_clamped_to_lower_bound():
    estimates = EstimateConfig(base_stroke_rate=10.0)
    assert estimate_stroke_rate(1.0, estimates) == pytest.approx(16.0)


def test_stroke_rate_follows_speed():
    stats = StatsAggregator()
    stats.on_smoothed_speed(5.0 / 3.6)
    assert stats.stroke_rate == pytest.approx(26.0)
    stats.on_smoothed_speed(0.0)
    assert stats.stroke_rate == 0.0


def test_reset_zeroes_everything():
    stats = StatsAggregator()
    stats.on_smoothed_speed(3.0)
    stats.on_distance_delta(50.0)
    stats.reset()
    assert stats.speed_samples == []
    assert (stats.average_speed, stats.max_speed, stats.stroke_rate) == (0.0, 0.0, 0.0)
    assert (stats.calories, stats.total_strokes) == (0.0, 0.0)
