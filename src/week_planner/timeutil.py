from __future__ import annotations

"""Wall-clock time helpers. Times are naive "HH:MM" strings, minute granularity."""

import re

_HM_RE = re.compile(r"(\d{1,2}):(\d{1,2})", re.ASCII)


class ParseError(ValueError):
    pass


def to_minutes(hm: str) -> int:
    match = _HM_RE.fullmatch(hm) if isinstance(hm, str) else None
    if not match:
        raise ParseError(f"invalid time {hm!r}; expected HH:MM")
    h, m = int(match.group(1)), int(match.group(2))
    if not (0 <= h <= 23):
        raise ParseError(f"hour out of range in {hm!r}")
    if not (0 <= m <= 59):
        raise ParseError(f"minute out of range in {hm!r}")
    return h * 60 + m


def format_minutes(minutes: int) -> str:
    if not (0 <= minutes < 24 * 60):
        raise ParseError(f"minutes out of range: {minutes}")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def hour_of(hm: str) -> int:
    return to_minutes(hm) // 60


def check_interval(start: str, end: str) -> tuple[int, int]:
    """Parse both ends and require start strictly before end."""
    s, e = to_minutes(start), to_minutes(end)
    if s >= e:
        raise ParseError(f"end {end!r} is not after start {start!r}")
    return s, e


def is_valid_time(hm: str) -> bool:
    try:
        to_minutes(hm)
    except ParseError:
        return False
    return True


__all__ = ["ParseError", "to_minutes", "check_interval", "format_minutes", "hour_of", "is_valid_time"]
