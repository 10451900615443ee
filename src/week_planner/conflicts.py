from __future__ import annotations

"""Same-day time conflict detection.

Intervals are half-open ``[start, end)``: an activity ending at 11:00 does not
collide with one starting at 11:00.
"""

from dataclasses import dataclass
from itertools import combinations
from typing import Callable, Iterable, List, Optional

from .models import Activity, DAY_LABELS
from .timeutil import to_minutes

ConflictFinder = Callable[[Activity, Iterable[Activity]], Optional[Activity]]


def times_overlap(start1: str, end1: str, start2: str, end2: str) -> bool:
    return to_minutes(start1) < to_minutes(end2) and to_minutes(start2) < to_minutes(end1)


def find_conflict(candidate: Activity, existing: Iterable[Activity]) -> Optional[Activity]:
    """Return the first activity in ``existing`` that overlaps ``candidate`` on its day."""
    for other in existing:
        if other.day != candidate.day:
            continue
        if times_overlap(candidate.start_time, candidate.end_time, other.start_time, other.end_time):
            return other
    return None


@dataclass(slots=True, frozen=True)
class Conflict:
    candidate: Activity
    existing: Activity

    def describe(self) -> str:
        label = DAY_LABELS.get(self.candidate.day, self.candidate.day)
        e = self.existing
        return f'{label}: "{e.title}" ({e.start_time} - {e.end_time})'


def find_batch_conflicts(
    candidates: Iterable[Activity],
    existing: Iterable[Activity],
    finder: ConflictFinder = find_conflict,
) -> List[Conflict]:
    # Candidates are checked against the existing collection only, not each other.
    existing = list(existing)
    out: List[Conflict] = []
    for candidate in candidates:
        hit = finder(candidate, existing)
        if hit is not None:
            out.append(Conflict(candidate=candidate, existing=hit))
    return out


def format_conflicts(conflicts: Iterable[Conflict]) -> str:
    lines = [c.describe() for c in conflicts]
    if not lines:
        return ""
    return "Schedule conflicts detected:\n" + "\n".join(f"- {line}" for line in lines)


def detect_overlaps(activities: Iterable[Activity]) -> bool:
    for a, b in combinations(list(activities), 2):
        if a.day == b.day and times_overlap(a.start_time, a.end_time, b.start_time, b.end_time):
            return True
    return False


__all__ = [
    "Conflict",
    "ConflictFinder",
    "times_overlap",
    "find_conflict",
    "find_batch_conflicts",
    "format_conflicts",
    "detect_overlaps",
]
