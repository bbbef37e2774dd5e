import pytest

from paddle_tracker.models import SplitRecord
from paddle_tracker.splits import LapCounter, PerformanceRating, SplitDetector, summarize_splits


def test_crossing_one_mark_emits_one_split():
    detector = SplitDetector(interval=500)
    assert detector.on_progress(499.0, 120.0, 4.0, 28.0) == []
    emitted = detector.on_progress(501.0, 121.0, 4.0, 28.0)
    assert len(emitted) == 1
    split = emitted[0]
    assert split.sequence_number == 1
    assert split.interval_distance_m == 500
    assert split.elapsed_s == pytest.approx(121.0)
    assert split.average_speed_kmh == pytest.approx(14.4)
    assert split.stroke_rate == 28.0
    assert detector.last_split_distance == 500
    assert detector.last_split_time == 121.0


def test_fractional_distance_below_mark_does_not_split():
    detector = SplitDetector(interval=500)
    assert detector.on_progress(499.99, 100.0, 4.0, 28.0) == []


def test_second_split_measures_from_previous_one():
    detector = SplitDetector(interval=500)
    detector.on_progress(500.0, 100.0, 5.0, 30.0)
    emitted = detector.on_progress(1000.4, 210.0, 4.5, 27.0)
    assert [s.sequence_number for s in emitted] == [2]
    assert emitted[0].elapsed_s == pytest.approx(110.0)


def test_jump_over_several_marks_emits_one_split_per_mark():
    detector = SplitDetector(interval=500)
    emitted = detector.on_progress(1620.0, 600.0, 3.0, 24.0)
    assert [s.sequence_number for s in emitted] == [1, 2, 3]
    assert [s.elapsed_s for s in emitted] == [pytest.approx(200.0)] * 3
    assert detector.last_split_distance == 1500
    assert detector.current_split_distance == pytest.approx(120.0)
    assert detector.on_progress(1700.0, 650.0, 3.0, 24.0) == []


@pytest.mark.parametrize("interval", [100.2, 100.4, 1.6])
def test_decimal_interval_splits_every_meter_without_error(interval):
    detector = SplitDetector(interval=interval)
    for meter in range(1, 1000):
        for split in detector.on_progress(float(meter), float(meter), 3.0, 24.0):
            assert split.elapsed_s > 0
    assert len(detector.splits) == int(999 // interval)
    assert [s.sequence_number for s in detector.splits] == list(range(1, len(detector.splits) + 1))
    assert 0.0 <= detector.current_split_distance < interval


def test_zero_distance_never_splits():
    detector = SplitDetector(interval=500)
    assert detector.on_progress(0.0, 30.0, 0.0, 0.0) == []


def test_records_are_append_only():
    detector = SplitDetector(interval=100)
    detector.on_progress(150.0, 40.0, 3.0, 24.0)
    first = detector.splits[0]
    detector.on_progress(260.0, 80.0, 3.0, 24.0)
    assert detector.splits[0] is first
    with pytest.raises(AttributeError):
        first.elapsed_s = 1.0


def test_interval_change_applies_to_next_mark():
    detector = SplitDetector(interval=500)
    detector.on_progress(510.0, 100.0, 5.0, 30.0)
    detector.set_interval(250)
    emitted = detector.on_progress(760.0, 150.0, 5.0, 30.0)
    assert len(emitted) == 1
    assert emitted[0].interval_distance_m == 250


@pytest.mark.parametrize("interval", [0, -100])
def test_rejects_bad_interval(interval):
    with pytest.raises(ValueError):
        SplitDetector(interval=interval)


def test_reset_starts_over():
    detector = SplitDetector(interval=500)
    detector.on_progress(700.0, 100.0, 5.0, 30.0)
    detector.reset()
    assert detector.splits == []
    assert detector.current_split_distance == 0.0
    assert len(detector.on_progress(501.0, 10.0, 5.0, 30.0)) == 1


def test_laps_measure_since_previous_boundary():
    laps = LapCounter()
    first = laps.add_boundary(1000.0, 300.0)
    assert (first.number, first.distance_m, first.elapsed_s) == (1, 1000.0, 300.0)
    assert first.average_speed_kmh == pytest.approx(12.0)
    second = laps.add_boundary(1500.0, 450.0)
    assert (second.number, second.distance_m, second.elapsed_s) == (2, 500.0, 150.0)
    assert second.average_speed_kmh == pytest.approx(12.0)


def test_zero_length_lap_has_zero_speed():
    laps = LapCounter()
    lap = laps.add_boundary(0.0, 0.0)
    assert lap.average_speed_kmh == 0.0


def test_pace_per_500m():
    split = SplitRecord(1, 500.0, 110.0, 16.4, 30.0)
    assert split.pace_per_500m == pytest.approx(110.0)
    assert SplitRecord(1, 250.0, 60.0, 15.0, 30.0).pace_per_500m == pytest.approx(120.0)


def test_split_summary():
    splits = [
        SplitRecord(1, 500.0, 120.0, 15.0, 26.0),
        SplitRecord(2, 500.0, 100.0, 18.0, 30.0),
        SplitRecord(3, 500.0, 110.0, 16.4, 28.0),
    ]
    summary = summarize_splits(splits)
    assert summary == {
        'average_pace': pytest.approx(110.0),
        'best_pace': pytest.approx(100.0),
        'worst_pace': pytest.approx(120.0),
    }
    assert summarize_splits([]) == {'average_pace': 0.0, 'best_pace': 0.0, 'worst_pace': 0.0}


@pytest.mark.parametrize("pace, rating", [
    (85.0, PerformanceRating.ELITE),
    (90.0, PerformanceRating.EXCELLENT),
    (110.0, PerformanceRating.GOOD),
    (149.9, PerformanceRating.AVERAGE),
    (150.0, PerformanceRating.BEGINNER),
])
def test_performance_rating(pace, rating):
    assert PerformanceRating.from_pace(pace) is rating


def test_performance_rating_multiplier():
    assert PerformanceRating.from_pace(100.0, multiplier=1.25) is PerformanceRating.AVERAGE
