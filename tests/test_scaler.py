import math

import pytest

from analyzers.scaler import Scaler, require_positive
from models.exceptions import InvalidParameterError
from models.workout import Sample, Timeline


@pytest.fixture
def timeline():
    return Timeline(samples=(
        Sample(time=0, power=0.6),
        Sample(time=90, text="Turn right"),
        Sample(time=120, power=0.85, text="Up that hill"),
        Sample(time=240, power=0.7),
    ))


def test_identity_scaling_returns_same_timeline(timeline):
    assert Scaler().scale(timeline) is timeline


def test_accel_divides_times(timeline):
    scaled = Scaler(accel=2.0).scale(timeline)

    assert [s.time for s in scaled] == [0, 45, 60, 120]
    assert [s.power for s in scaled] == [0.6, None, 0.85, 0.7]
    assert scaled.total_duration == timeline.total_duration / 2


def test_power_scale_multiplies_powers_and_keeps_text(timeline):
    scaled = Scaler(power_scale=1.5).scale(timeline)

    assert [s.time for s in scaled] == [0, 90, 120, 240]
    assert scaled.samples[0].power == pytest.approx(0.9)
    assert scaled.samples[2].power == pytest.approx(1.275)
    assert scaled.samples[1].power is None
    assert [s.text for s in scaled] == [None, "Turn right", "Up that hill", None]


def test_power_is_not_clamped():
    timeline = Timeline(samples=(Sample(time=0, power=2.0), Sample(time=10, power=0.1)))
    scaled = Scaler(power_scale=3.0).scale(timeline)
    assert scaled.samples[0].power == 6.0


def test_power_precision_rounds_scaled_powers():
    timeline = Timeline(samples=(Sample(time=0, power=180 / 250), Sample(time=10, power=181 / 250)))
    scaled = Scaler(power_scale=1.0, power_precision=2).scale(timeline)
    assert [s.power for s in scaled] == [0.72, 0.72]


def test_scale_preserves_order(timeline):
    scaled = Scaler(accel=3.0, power_scale=0.5).scale(timeline)
    times = [s.time for s in scaled]
    assert times == sorted(times)


@pytest.mark.parametrize("kwargs", [
    {"accel": 0},
    {"accel": -1.0},
    {"power_scale": 0},
    {"power_scale": -0.5},
    {"accel": math.nan},
])
def test_non_positive_factors_raise(kwargs):
    with pytest.raises(InvalidParameterError):
        Scaler(**kwargs)


def test_require_positive_returns_value():
    assert require_positive("raster", 30) == 30
    with pytest.raises(InvalidParameterError, match="raster must be positive"):
        require_positive("raster", 0)
