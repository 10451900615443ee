from __future__ import annotations

"""Validation of raw add-activity form input.

The dialog collects one start/end pair per selected weekday. Validation is
pure and returns every field problem at once so the form can show them all.
"""

from dataclasses import dataclass, field
import re
from typing import List, Optional

from .models import Activity, DEFAULT_COLOR, WEEKDAYS, new_activity_id
from .timeutil import is_valid_time, to_minutes

MIN_TITLE_LENGTH = 2
_HEX_COLOR_RE = re.compile(r"#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})")


@dataclass(slots=True)
class ActivityInput:
    title: str
    days: List[str]
    start_times: List[str]
    end_times: List[str]
    description: Optional[str] = None
    color: str = DEFAULT_COLOR


@dataclass(slots=True, frozen=True)
class FieldError:
    field: str
    message: str


@dataclass(slots=True)
class ValidationResult:
    errors: List[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def messages(self) -> List[str]:
        return [e.message for e in self.errors]


def validate_activity_input(data: ActivityInput) -> ValidationResult:
    result = ValidationResult()

    def add(field_name: str, message: str) -> None:
        result.errors.append(FieldError(field_name, message))

    if len(data.title.strip()) < MIN_TITLE_LENGTH:
        add("title", f"Title must be at least {MIN_TITLE_LENGTH} characters.")

    if not data.days:
        add("days", "Select at least one day.")
    unknown = [d for d in data.days if d not in WEEKDAYS]
    if unknown:
        add("days", f"Unknown day(s): {', '.join(unknown)}.")
    if len(set(data.days)) != len(data.days):
        add("days", "Each day can only be selected once.")

    if len(data.start_times) != len(data.days):
        add("start_times", "Select a start time for every day.")
    if len(data.end_times) != len(data.days):
        add("end_times", "Select an end time for every day.")

    for i, (start, end) in enumerate(zip(data.start_times, data.end_times)):
        start_ok = is_valid_time(start)
        end_ok = is_valid_time(end)
        if not start_ok:
            add(f"start_times[{i}]", "Select a valid start time (HH:MM).")
        if not end_ok:
            add(f"end_times[{i}]", "Select a valid end time (HH:MM).")
        if start_ok and end_ok and to_minutes(start) >= to_minutes(end):
            add(f"end_times[{i}]", "End time must be after start time.")

    if not _HEX_COLOR_RE.fullmatch(data.color or ""):
        add("color", "Color must be a hex value like #4f46e5.")
    return result


def build_activities(data: ActivityInput) -> List[Activity]:
    """Create one Activity per selected day. Input must validate."""
    result = validate_activity_input(data)
    if not result.ok:
        raise ValueError("; ".join(result.messages()))
    title = data.title.strip()
    description = (data.description or "").strip() or None
    return [
        Activity(
            id=new_activity_id(),
            title=title,
            day=day,
            start_time=start,
            end_time=end,
            description=description,
            color=data.color,
        )
        for day, start, end in zip(data.days, data.start_times, data.end_times)
    ]


__all__ = [
    "ActivityInput",
    "FieldError",
    "ValidationResult",
    "validate_activity_input",
    "build_activities",
    "MIN_TITLE_LENGTH",
]
