from __future__ import annotations

"""Vertical placement of activities on the weekly grid.

Positions are percentages of the visible window height. They are deliberately
left unclamped: an activity starting before ``start_hour`` gets a negative top
and one ending after ``end_hour`` extends past 100%. Whoever draws the grid
decides whether to clip.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List

from .models import Activity, WEEKDAYS
from .timeutil import to_minutes


@dataclass(slots=True, frozen=True)
class GridWindow:
    start_hour: int = 6
    end_hour: int = 22

    def __post_init__(self) -> None:
        if not (0 <= self.start_hour < self.end_hour <= 24):
            raise ValueError(f"invalid grid window {self.start_hour}-{self.end_hour}")

    @property
    def total_minutes(self) -> int:
        return (self.end_hour - self.start_hour) * 60


DEFAULT_WINDOW = GridWindow()


@dataclass(slots=True, frozen=True)
class Placement:
    top: float  # percent
    height: float  # percent


def minutes_to_position(minutes: int, window: GridWindow = DEFAULT_WINDOW) -> float:
    relative = minutes - window.start_hour * 60
    return relative / window.total_minutes * 100


def calculate_height(start_time: str, end_time: str, window: GridWindow = DEFAULT_WINDOW) -> float:
    duration = to_minutes(end_time) - to_minutes(start_time)
    return duration / window.total_minutes * 100


def place_activity(activity: Activity, window: GridWindow = DEFAULT_WINDOW) -> Placement:
    return Placement(
        top=minutes_to_position(to_minutes(activity.start_time), window),
        height=calculate_height(activity.start_time, activity.end_time, window),
    )


def group_by_day(activities: Iterable[Activity]) -> Dict[str, List[Activity]]:
    grouped: Dict[str, List[Activity]] = {day: [] for day in WEEKDAYS}
    for a in activities:
        if a.day in grouped:
            grouped[a.day].append(a)
    return grouped


def time_labels(window: GridWindow = DEFAULT_WINDOW) -> List[str]:
    return [f"{h}:00" for h in range(window.start_hour, window.end_hour + 1)]


def label_position(index: int, window: GridWindow = DEFAULT_WINDOW) -> float:
    """Percent offset of the ``index``-th hourly guide line."""
    count = window.end_hour - window.start_hour
    return index / count * 100


__all__ = [
    "GridWindow",
    "DEFAULT_WINDOW",
    "Placement",
    "minutes_to_position",
    "calculate_height",
    "place_activity",
    "group_by_day",
    "time_labels",
    "label_position",
]
