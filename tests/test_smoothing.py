import pytest

from paddle_tracker.filters import SpeedSmoother


def test_mean_over_full_window():
    smoother = SpeedSmoother(window=5)
    for speed in [0, 0, 0, 0]:
        smoother.push(speed)
    assert smoother.push(10) == pytest.approx(2.0)


def test_sixth_value_evicts_oldest():
    smoother = SpeedSmoother(window=5)
    for speed in [10, 0, 0, 0, 0]:
        smoother.push(speed)
    assert smoother.smoothed_speed == pytest.approx(2.0)
    assert smoother.push(0) == pytest.approx(0.0)
    assert len(smoother) == 5


def test_partial_window_averages_what_it_has():
    smoother = SpeedSmoother(window=5)
    smoother.push(2.0)
    assert smoother.push(4.0) == pytest.approx(3.0)


def test_reset_empties_buffer():
    smoother = SpeedSmoother(window=3)
    smoother.push(5.0)
    smoother.reset()
    assert len(smoother) == 0
    assert smoother.smoothed_speed == 0.0
    assert smoother.push(1.0) == pytest.approx(1.0)


@pytest.mark.parametrize("window", [0, -1, 2.5])
def test_rejects_bad_window(window):
    with pytest.raises(ValueError):
        SpeedSmoother(window=window)
