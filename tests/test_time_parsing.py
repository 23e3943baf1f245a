import pytest

from utils.time_parsing import format_seconds, parse_time_string


@pytest.mark.parametrize("value, expected", [
    ("00:00:00", 0),
    ("00:01:30", 90),
    ("01:00:00", 3600),
    ("1:02:03", 3723),
    ("2:30", 150),
    ("90:00", 5400),
    ("00:00:12.5", 12.5),
    ("45", 45),
    ("45.25", 45.25),
    ("30s", 30),
    (" 10 s ", 10),
])
def test_parse_valid_times(value, expected):
    assert parse_time_string(value) == expected


@pytest.mark.parametrize("value", [
    "",
    "abc",
    "-5",
    "00:60:00",
    "00:00:60",
    "1:2:3:4",
    "12:",
    "inf",
])
def test_parse_invalid_times(value):
    with pytest.raises(ValueError):
        parse_time_string(value)


@pytest.mark.parametrize("seconds, expected", [
    (0, "0:00:00"),
    (90, "0:01:30"),
    (3723, "1:02:03"),
    (59.6, "0:01:00"),
])
def test_format_seconds(seconds, expected):
    assert format_seconds(seconds) == expected
