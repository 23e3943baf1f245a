"""Shared fixtures for Course Builder tests."""

import pytest

from models.workout import Sample


@pytest.fixture
def hill_ride_samples():
    """The hill ride course with raw watt values left unscaled."""
    return [
        Sample(time=0, power=180),
        Sample(time=90, text="Turn right"),
        Sample(time=120, power=210, text="Up that hill"),
        Sample(time=210, power=160),
        Sample(time=270, text="You're done!"),
    ]


@pytest.fixture
def hill_ride_csv(tmp_path):
    """The hill ride course as a CSV file in watts."""
    path = tmp_path / "hill_ride.csv"
    path.write_text(
        "time,power,text\n"
        "00:00:00,180,\n"
        "00:01:30,,\"Turn right\"\n"
        "00:02:00,210,\"Up that hill\"\n"
        "00:03:30,160,\n"
        "00:04:30,,\"You're done!\"\n",
        encoding="utf-8",
    )
    return path
