from __future__ import annotations

"""User settings persisted in the ``settings`` table, plus data directory lookup."""

from dataclasses import dataclass, field
import logging
import os
from pathlib import Path

from .database_manager import DatabaseManager
from .layout import GridWindow
from .repositories import get_setting, set_setting

THEME_KEY = "ui.theme"  # light|dark
GRID_START_KEY = "grid.start_hour"
GRID_END_KEY = "grid.end_hour"
EXPORT_DIR_KEY = "export.dir"

DATA_DIR_ENV = "WEEK_PLANNER_DATA_DIR"
THEMES = ("light", "dark")

_log = logging.getLogger(__name__)


def default_data_dir() -> Path:
    override = os.environ.get(DATA_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".week_planner"


@dataclass(slots=True)
class PlannerSettings:
    theme: str = "light"
    grid_start_hour: int = 6
    grid_end_hour: int = 22
    export_dir: Path = field(default_factory=Path.home)

    @property
    def window(self) -> GridWindow:
        return GridWindow(self.grid_start_hour, self.grid_end_hour)


def _int_or_none(value: str | None) -> int | None:
    if value in (None, ""):
        return None
    try:
        return int(value)  # type: ignore[arg-type]
    except ValueError:
        return None


def load_settings(db: DatabaseManager) -> PlannerSettings:
    defaults = PlannerSettings()
    theme = get_setting(db, THEME_KEY) or defaults.theme
    if theme not in THEMES:
        theme = defaults.theme
    start = _int_or_none(get_setting(db, GRID_START_KEY))
    end = _int_or_none(get_setting(db, GRID_END_KEY))
    start = defaults.grid_start_hour if start is None else start
    end = defaults.grid_end_hour if end is None else end
    if not (0 <= start < end <= 24):
        _log.warning("invalid grid window %s-%s in settings; using defaults", start, end)
        start, end = defaults.grid_start_hour, defaults.grid_end_hour
    export_dir = get_setting(db, EXPORT_DIR_KEY)
    return PlannerSettings(
        theme=theme,
        grid_start_hour=start,
        grid_end_hour=end,
        export_dir=Path(export_dir) if export_dir else defaults.export_dir,
    )


def save_settings(db: DatabaseManager, settings: PlannerSettings) -> None:
    set_setting(db, THEME_KEY, settings.theme)
    set_setting(db, GRID_START_KEY, str(settings.grid_start_hour))
    set_setting(db, GRID_END_KEY, str(settings.grid_end_hour))
    set_setting(db, EXPORT_DIR_KEY, str(settings.export_dir))


__all__ = [
    "PlannerSettings",
    "load_settings",
    "save_settings",
    "default_data_dir",
    "THEME_KEY",
    "GRID_START_KEY",
    "GRID_END_KEY",
    "EXPORT_DIR_KEY",
    "DATA_DIR_ENV",
    "THEMES",
]
