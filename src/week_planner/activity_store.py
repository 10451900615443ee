from __future__ import annotations

"""ActivityStore owns the weekly activity collection and emits change signals.

Every insertion goes through the conflict detector first. A batch is
all-or-nothing: if any candidate collides with the existing collection nothing
is committed and the conflicts are handed back for display. Candidates with
unparseable or reversed times raise ``ParseError`` before any check. Memory is
updated only after the new collection has been saved.
"""

import logging
from typing import Iterable, List

from PyQt6.QtCore import QObject, pyqtSignal

from .conflicts import Conflict, ConflictFinder, find_batch_conflicts, find_conflict, format_conflicts
from .database_manager import DatabaseManager
from .models import Activity
from .repositories import load_activities, save_activities
from .timeutil import check_interval

_log = logging.getLogger(__name__)


class ActivityStore(QObject):
    changed = pyqtSignal()
    error = pyqtSignal(str)

    def __init__(self, db: DatabaseManager, detector: ConflictFinder = find_conflict):
        super().__init__()
        self._db = db
        self._detector = detector
        self._activities: List[Activity] = []
        self._loaded = False

    # --- Loading --------------------------------------------------------
    def load(self) -> None:
        self._activities = load_activities(self._db)
        self._loaded = True
        _log.info("loaded activities", extra={"_json_count": len(self._activities)})
        self.changed.emit()

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self.load()

    # --- Mutations ------------------------------------------------------
    def add(self, activity: Activity) -> List[Conflict]:
        return self.add_batch([activity])

    def add_batch(self, activities: Iterable[Activity]) -> List[Conflict]:
        """Commit all candidates or none. Returns the conflicts that blocked the batch."""
        self._ensure_loaded()
        candidates = list(activities)
        if not candidates:
            return []
        for c in candidates:
            check_interval(c.start_time, c.end_time)
        conflicts = find_batch_conflicts(candidates, self._activities, finder=self._detector)
        if conflicts:
            _log.info("batch rejected", extra={"_json_conflicts": len(conflicts)})
            self.error.emit(format_conflicts(conflicts))
            return conflicts
        self._commit(self._activities + candidates)
        _log.info("activities added", extra={"_json_count": len(candidates)})
        self.changed.emit()
        return []

    def remove(self, activity_id: str) -> bool:
        self._ensure_loaded()
        idx = next((i for i, a in enumerate(self._activities) if a.id == activity_id), None)
        if idx is None:
            return False
        self._commit(self._activities[:idx] + self._activities[idx + 1 :])
        _log.info("activity removed", extra={"_json_id": activity_id})
        self.changed.emit()
        return True

    def _commit(self, activities: List[Activity]) -> None:
        save_activities(self._db, activities)
        self._activities = activities

    # --- Access ---------------------------------------------------------
    def activities(self) -> List[Activity]:
        self._ensure_loaded()
        return list(self._activities)

    def get(self, activity_id: str) -> Activity | None:
        self._ensure_loaded()
        return next((a for a in self._activities if a.id == activity_id), None)


__all__ = ["ActivityStore"]
