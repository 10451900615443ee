from __future__ import annotations

"""Key-value persistence helpers on top of the ``settings`` table."""

import json
import logging
from typing import Iterable

from .database_manager import DatabaseManager
from .models import Activity

ACTIVITIES_KEY = "activities"

_log = logging.getLogger(__name__)


# --- Settings ---------------------------------------------------------------

def get_setting(db: DatabaseManager, key: str) -> str | None:
    row = db.query_one("SELECT value FROM settings WHERE key=?", (key,))
    return row["value"] if row else None


def set_setting(db: DatabaseManager, key: str, value: str) -> None:
    with db.transaction() as conn:
        conn.execute(
            "INSERT INTO settings(key, value) VALUES(?, ?) ON CONFLICT(key) DO UPDATE SET value=excluded.value",
            (key, value),
        )


def delete_setting(db: DatabaseManager, key: str) -> None:
    with db.transaction() as conn:
        conn.execute("DELETE FROM settings WHERE key=?", (key,))


# --- Activities -------------------------------------------------------------

def load_activities(db: DatabaseManager) -> list[Activity]:
    """Read the stored collection. Missing or unreadable data yields ``[]``."""
    raw = get_setting(db, ACTIVITIES_KEY)
    if raw is None:
        return []
    try:
        data = json.loads(raw)
        if not isinstance(data, list):
            raise ValueError("stored activities is not a list")
        return [Activity.from_dict(item) for item in data]
    except (ValueError, KeyError, TypeError) as e:
        _log.warning("stored activities unreadable; starting empty: %s", e)
        return []


def save_activities(db: DatabaseManager, activities: Iterable[Activity]) -> None:
    payload = json.dumps([a.to_dict() for a in activities], ensure_ascii=False)
    set_setting(db, ACTIVITIES_KEY, payload)


__all__ = [
    "ACTIVITIES_KEY",
    "get_setting",
    "set_setting",
    "delete_setting",
    "load_activities",
    "save_activities",
]
