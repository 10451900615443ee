import pytest

from week_planner.layout import (
    GridWindow,
    calculate_height,
    group_by_day,
    label_position,
    minutes_to_position,
    place_activity,
    time_labels,
)
from week_planner.media import device_class, is_mobile
from week_planner.models import WEEKDAYS
from conftest import make_activity


def test_place_activity_in_default_window():
    p = place_activity(make_activity("monday", "14:00", "15:00"))
    assert p.top == pytest.approx(50.0)
    assert p.height == pytest.approx(6.25)


def test_window_edges():
    assert minutes_to_position(6 * 60) == 0
    assert minutes_to_position(22 * 60) == pytest.approx(100.0)
    assert calculate_height("06:00", "22:00") == pytest.approx(100.0)


def test_positions_are_not_clamped():
    early = place_activity(make_activity("monday", "05:00", "07:00"))
    assert early.top == pytest.approx(-60 / 960 * 100)
    late = place_activity(make_activity("monday", "21:30", "23:30"))
    assert late.top + late.height > 100


def test_custom_window():
    window = GridWindow(start_hour=8, end_hour=18)
    assert window.total_minutes == 600
    p = place_activity(make_activity("sunday", "13:00", "14:30"), window)
    assert p.top == pytest.approx(50.0)
    assert p.height == pytest.approx(15.0)


def test_invalid_window_rejected():
    with pytest.raises(ValueError):
        GridWindow(start_hour=10, end_hour=10)


def test_group_by_day_keeps_all_days_and_order():
    a = make_activity("tuesday", "09:00", "10:00", title="a")
    b = make_activity("tuesday", "08:00", "09:00", title="b")
    c = make_activity("sunday", "12:00", "13:00", title="c")
    grouped = group_by_day([a, c, b])
    assert list(grouped) == list(WEEKDAYS)
    assert grouped["tuesday"] == [a, b]
    assert grouped["sunday"] == [c]
    assert grouped["monday"] == []


def test_time_labels_and_guides():
    labels = time_labels()
    assert labels[0] == "6:00" and labels[-1] == "22:00"
    assert len(labels) == 17
    assert label_position(0) == 0
    assert label_position(len(labels) - 1) == pytest.approx(100.0)
    assert label_position(8) == pytest.approx(50.0)


def test_device_class_breakpoint():
    assert device_class(767) == "mobile"
    assert device_class(768) == "desktop"
    assert is_mobile(400)
    assert not is_mobile(1200)
