from week_planner.conflicts import (
    Conflict,
    detect_overlaps,
    find_batch_conflicts,
    find_conflict,
    format_conflicts,
    times_overlap,
)
from conftest import make_activity


def test_overlap_is_symmetric():
    pairs = [
        (("10:00", "11:00"), ("10:30", "10:45")),
        (("10:00", "11:00"), ("11:00", "12:00")),
        (("08:00", "09:30"), ("09:00", "10:00")),
        (("08:00", "09:00"), ("13:00", "14:00")),
    ]
    for (s1, e1), (s2, e2) in pairs:
        assert times_overlap(s1, e1, s2, e2) == times_overlap(s2, e2, s1, e1)


def test_back_to_back_does_not_conflict():
    a = make_activity("monday", "10:00", "11:00", title="A")
    b = make_activity("monday", "11:00", "12:00", title="B")
    assert find_conflict(b, [a]) is None
    assert find_conflict(a, [b]) is None


def test_contained_interval_conflicts():
    a = make_activity("monday", "10:00", "11:00", title="A")
    candidate = make_activity("monday", "10:30", "10:45")
    assert find_conflict(candidate, [a]) is a


def test_different_days_never_conflict():
    a = make_activity("monday", "10:00", "11:00")
    candidate = make_activity("tuesday", "10:00", "11:00")
    assert find_conflict(candidate, [a]) is None


def test_first_found_in_iteration_order():
    first = make_activity("friday", "09:00", "10:00", title="First")
    second = make_activity("friday", "09:30", "11:00", title="Second")
    candidate = make_activity("friday", "09:45", "10:15")
    assert find_conflict(candidate, [first, second]) is first
    assert find_conflict(candidate, [second, first]) is second


def test_batch_reports_each_offending_candidate():
    existing = [
        make_activity("monday", "09:00", "10:00", title="Gym"),
        make_activity("wednesday", "14:00", "15:00", title="Piano"),
    ]
    batch = [
        make_activity("monday", "09:30", "10:30", title="Study"),
        make_activity("tuesday", "09:30", "10:30", title="Study"),
        make_activity("wednesday", "14:30", "15:30", title="Study"),
    ]
    conflicts = find_batch_conflicts(batch, existing)
    assert [c.candidate for c in conflicts] == [batch[0], batch[2]]
    assert [c.existing.title for c in conflicts] == ["Gym", "Piano"]


def test_batch_does_not_check_siblings():
    batch = [
        make_activity("monday", "09:00", "10:00"),
        make_activity("monday", "09:30", "10:30"),
    ]
    assert find_batch_conflicts(batch, []) == []


def test_conflict_message_names_day_title_and_range():
    existing = make_activity("monday", "09:00", "10:00", title="Gym")
    candidate = make_activity("monday", "09:30", "10:30")
    conflict = Conflict(candidate=candidate, existing=existing)
    assert conflict.describe() == 'Monday: "Gym" (09:00 - 10:00)'
    text = format_conflicts([conflict])
    assert text.splitlines()[0] == "Schedule conflicts detected:"
    assert 'Monday: "Gym" (09:00 - 10:00)' in text
    assert format_conflicts([]) == ""


def test_detect_overlaps():
    assert detect_overlaps([
        make_activity("monday", "09:00", "10:00"),
        make_activity("monday", "09:50", "10:30"),
    ])
    assert not detect_overlaps([
        make_activity("monday", "09:00", "10:00"),
        make_activity("monday", "10:00", "10:30"),
        make_activity("tuesday", "09:30", "10:30"),
    ])
