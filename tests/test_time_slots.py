import pytest

from salonbase.utils.time_slots import format_duration, minutes_to_time, normalize_time, time_to_minutes


@pytest.mark.parametrize("raw, expected", [("9:05", "09:05"), ("09:05", "09:05"), (" 23:59 ", "23:59"), ("0:00", "00:00")])
def test_normalize_time_pads_hours(raw, expected):
    assert normalize_time(raw) == expected


@pytest.mark.parametrize("raw", ["24:00", "12:60", "1230", "ab:cd", ""])
def test_normalize_time_rejects_invalid_values(raw):
    with pytest.raises(ValueError):
        normalize_time(raw)


def test_time_to_minutes():
    assert time_to_minutes("00:00") == 0
    assert time_to_minutes("10:30") == 630
    assert time_to_minutes("23:59") == 1439


def test_minutes_to_time_wraps_past_midnight():
    assert minutes_to_time(660) == "11:00"
    assert minutes_to_time(24 * 60 + 30) == "00:30"


@pytest.mark.parametrize("minutes, expected", [(45, "45m"), (60, "1h"), (90, "1h 30m"), (480, "8h")])
def test_format_duration(minutes, expected):
    assert format_duration(minutes) == expected
