from __future__ import annotations

"""Dataclass models for the weekly schedule."""

from dataclasses import dataclass
from typing import Any, Optional
import uuid

from .timeutil import check_interval


DEFAULT_COLOR = "#4f46e5"

WEEKDAYS: tuple[str, ...] = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

DAY_LABELS: dict[str, str] = {
    "monday": "Monday",
    "tuesday": "Tuesday",
    "wednesday": "Wednesday",
    "thursday": "Thursday",
    "friday": "Friday",
    "saturday": "Saturday",
    "sunday": "Sunday",
}

DAY_ABBREVIATIONS: dict[str, str] = {day: label[:3] for day, label in DAY_LABELS.items()}


def new_activity_id() -> str:
    return str(uuid.uuid4())


@dataclass(slots=True)
class Activity:
    id: str
    title: str
    day: str  # one of WEEKDAYS
    start_time: str  # HH:MM
    end_time: str  # HH:MM
    description: Optional[str] = None
    color: str = DEFAULT_COLOR

    def to_dict(self) -> dict[str, Any]:
        """Serialise using the camelCase keys of the stored JSON format."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "day": self.day,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "color": self.color,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Activity":
        """Build from a stored record. Raises KeyError/ValueError when malformed.

        Times must parse and the start must come before the end.
        """
        day = data["day"]
        if day not in WEEKDAYS:
            raise ValueError(f"unknown day {day!r}")
        for key in ("id", "title", "startTime", "endTime"):
            if not isinstance(data[key], str):
                raise ValueError(f"{key} must be a string")
        check_interval(data["startTime"], data["endTime"])
        return cls(
            id=data["id"],
            title=data["title"],
            day=day,
            start_time=data["startTime"],
            end_time=data["endTime"],
            description=data.get("description") or None,
            color=data.get("color") or DEFAULT_COLOR,
        )


__all__ = [
    "Activity",
    "DEFAULT_COLOR",
    "WEEKDAYS",
    "DAY_LABELS",
    "DAY_ABBREVIATIONS",
    "new_activity_id",
]
