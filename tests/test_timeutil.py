import pytest

from week_planner.timeutil import ParseError, check_interval, format_minutes, hour_of, is_valid_time, to_minutes


def test_to_minutes_known_values():
    assert to_minutes("08:00") == 480
    assert to_minutes("23:59") == 1439
    assert to_minutes("00:00") == 0
    assert to_minutes("9:05") == 545


@pytest.mark.parametrize("raw", ["", "8", "08:00:00", "ab:cd", "24:00", "12:60", "-1:30", "12:3x", " 8:00"])
def test_to_minutes_rejects_malformed(raw):
    with pytest.raises(ParseError):
        to_minutes(raw)


def test_parse_error_is_value_error():
    with pytest.raises(ValueError):
        to_minutes("nope")


def test_format_minutes_and_hour_of():
    assert format_minutes(545) == "09:05"
    assert format_minutes(0) == "00:00"
    assert hour_of("14:45") == 14
    with pytest.raises(ParseError):
        format_minutes(1440)


def test_is_valid_time():
    assert is_valid_time("10:30")
    assert not is_valid_time("10:75")


def test_check_interval():
    assert check_interval("09:00", "10:30") == (540, 630)
    for start, end in [("10:00", "10:00"), ("11:00", "09:00"), ("9am", "10:00")]:
        with pytest.raises(ParseError):
            check_interval(start, end)
