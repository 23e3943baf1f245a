import io

import pytest

from analyzers.course_builder import CourseBuilder
from analyzers.normalizer import Normalizer
from models.exceptions import CsvFormatError, InvalidParameterError
from models.workout import Sample, SampleTable
from parsers.csv_parser import CsvParser


def _parse(text, **kwargs):
    kwargs.setdefault('ftp', 200)
    return CsvParser(**kwargs).parse(io.StringIO(text))


def test_parse_hill_ride_file(hill_ride_csv):
    table = CsvParser(ftp=250).parse_file(hill_ride_csv)

    assert isinstance(table, SampleTable)
    assert table.source == hill_ride_csv
    assert list(table) == [
        Sample(time=0, power=0.72),
        Sample(time=90, text="Turn right"),
        Sample(time=120, power=0.84, text="Up that hill"),
        Sample(time=210, power=0.64),
        Sample(time=270, text="You're done!"),
    ]


def test_fraction_power_unit():
    table = _parse("time,power,text\n0,0.75,\n60,1.1,Go\n", ftp=None, power_unit="fraction")
    assert [s.power for s in table] == [0.75, 1.1]


def test_time_formats():
    table = _parse("time,power\n00:00:00,100\n1:30,120\n200,140\n250.5s,160\n")
    assert [s.time for s in table] == [0, 90, 200, 250.5]


def test_missing_optional_columns():
    table = _parse("time,power\n0,100\n60,200\n")
    assert list(table) == [Sample(time=0, power=0.5), Sample(time=60, power=1.0)]


def test_headers_are_case_insensitive():
    table = _parse(" Time , POWER , Text\n0,100,Hi\n")
    assert list(table) == [Sample(time=0, power=0.5, text="Hi")]


def test_text_with_commas_and_quotes():
    table = _parse('time,power,text\n0,100,"Easy, then ""hard"""\n')
    assert table.samples[0].text == 'Easy, then "hard"'


def test_blank_row_holds_last_power():
    table = _parse("time,power,text\n0,100,\n60,,\n")
    assert table.samples[1] == Sample(time=60, power=0.5)


def test_blank_row_before_any_power_stays_bare():
    table = _parse("time,power,text\n0,,\n30,100,\n")
    assert table.samples[0] == Sample(time=0)


def test_short_rows_are_padded():
    table = _parse("time,power,text\n0,100\n30\n")
    assert list(table) == [Sample(time=0, power=0.5), Sample(time=30, power=0.5)]


def test_out_of_order_hold_takes_power_in_effect_at_its_time():
    table = _parse(
        "time,power,text\n0,0.5,\n200,1.0,\n100,,\n300,,Bye\n",
        ftp=None, power_unit="fraction",
    )
    assert table.samples[2] == Sample(time=100, power=0.5)

    workout = CourseBuilder(raster=100).build(table, name="Holds", author="Tester")
    assert [(s.start, s.power) for s in workout.steps] == [(0, 0.5), (200, 1.0)]


def test_hold_at_power_time_is_dropped():
    table = _parse("time,power,text\n0,100,\n60,,\n60,160,\n120,,\n")

    assert list(table) == [
        Sample(time=0, power=0.5),
        Sample(time=60, power=0.8),
        Sample(time=120, power=0.8),
    ]
    # No collision left for the Normalizer to reject
    assert len(Normalizer().normalize(table)) == 3


def test_repeated_holds_keep_one_marker():
    table = _parse("time,power,text\n0,100,\n90,,\n90,,\n")
    assert list(table) == [Sample(time=0, power=0.5), Sample(time=90, power=0.5)]


def test_duration_mode_accumulates_start_times():
    table = _parse(
        "time,power,text\n00:01:00,100,Warm up\n00:00:30,200,\n00:00:00,,Bye\n00:02:00,150,\n",
        time_mode="duration",
    )
    assert list(table) == [
        Sample(time=0, power=0.5, text="Warm up"),
        Sample(time=60, power=1.0),
        Sample(time=90, text="Bye"),
        Sample(time=90, power=0.75),
        Sample(time=210, power=0.75),
    ]


def test_duration_mode_without_trailing_duration_adds_no_marker():
    table = _parse("time,power\n00:01:00,100\n00:00:00,200\n", time_mode="duration")
    assert list(table) == [Sample(time=0, power=0.5), Sample(time=60, power=1.0)]


@pytest.mark.parametrize("content, message", [
    ("time,power\nabc,100\n", "line 1"),
    ("time,power\n0,100\n00:61:00,100\n", "line 2"),
    ("time,power\n0,lots\n", "invalid power"),
    ("time,power\n0,-5\n", "non-negative"),
    ("power,text\n100,hi\n", "headers"),
])
def test_malformed_rows_raise(content, message):
    with pytest.raises(CsvFormatError, match=message):
        _parse(content)


def test_empty_file_raises():
    with pytest.raises(CsvFormatError):
        _parse("")


def test_header_only_file_gives_empty_table():
    assert len(_parse("time,power,text\n")) == 0


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        CsvParser(ftp=250).parse_file(tmp_path / "missing.csv")


def test_unsupported_suffix_raises(tmp_path):
    path = tmp_path / "course.fit"
    path.write_bytes(b"")
    with pytest.raises(CsvFormatError, match="Unsupported file format"):
        CsvParser(ftp=250).parse_file(path)


@pytest.mark.parametrize("kwargs", [
    {"ftp": 0},
    {"ftp": None},
    {"ftp": 250, "time_mode": "lap"},
    {"ftp": 250, "power_unit": "kcal"},
])
def test_invalid_parser_settings_raise(kwargs):
    with pytest.raises(InvalidParameterError):
        CsvParser(**kwargs)
