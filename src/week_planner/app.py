from __future__ import annotations

import sys
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from PyQt6.QtWidgets import (
    QApplication,
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMenu,
    QPushButton,
    QToolButton,
    QVBoxLayout,
    QWidget,
)

from . import __version__
from .activity_dialog import AddActivityDialog
from .activity_store import ActivityStore
from .conflicts import detect_overlaps
from .database_manager import DBConfig, DatabaseManager
from .exporters import ExportError, ExportService, default_export_path
from .logging_setup import configure_logging
from .schedule_view import ScheduleView
from .settings import PlannerSettings, default_data_dir, load_settings, save_settings
from .toast import show_toast


APP_NAME = "Week Planner"
EXPORT_LABELS = {"xlsx": "Export as Excel", "pdf": "Export as PDF", "png": "Export as Image"}
EXPORT_FILTERS = {"xlsx": "Excel (*.xlsx)", "pdf": "PDF (*.pdf)", "png": "PNG image (*.png)"}

_log = logging.getLogger(__name__)


@dataclass(slots=True)
class AppState:
    db_path: Path
    db: DatabaseManager
    settings: PlannerSettings
    activity_store: ActivityStore
    exports: ExportService


def get_app_state(data_dir: Path | None = None) -> AppState:
    data_dir = data_dir or default_data_dir()
    data_dir.mkdir(parents=True, exist_ok=True)
    # Logging first
    configure_logging(data_dir)
    db_path = data_dir / "week_planner.sqlite"
    db = DatabaseManager(DBConfig(path=db_path))
    db.init_db()
    settings = load_settings(db)
    activity_store = ActivityStore(db)
    activity_store.load()
    if detect_overlaps(activity_store.activities()):
        _log.warning("stored schedule contains overlapping activities")
    exports = ExportService(activity_store.activities, window=settings.window)
    _log.info("app_state_created", extra={"_json_version": __version__, "_json_db": str(db_path)})
    return AppState(
        db_path=db_path,
        db=db,
        settings=settings,
        activity_store=activity_store,
        exports=exports,
    )


class MainWindow(QMainWindow):
    def __init__(self, state: AppState) -> None:
        super().__init__()
        self.state = state
        # The add dialog shows conflicts inline; store errors are not toasted meanwhile.
        self._adding = False
        self.setWindowTitle(APP_NAME)
        self.resize(1100, 760)

        title = QLabel("Week Planner")
        title.setStyleSheet("font-size: 20px; font-weight: 600;")
        self.export_btn = QToolButton()
        self.export_btn.setText("Export")
        self.export_btn.setPopupMode(QToolButton.ToolButtonPopupMode.InstantPopup)
        menu = QMenu(self.export_btn)
        for kind in state.exports.formats():
            action = menu.addAction(EXPORT_LABELS.get(kind, kind))
            action.triggered.connect(lambda _checked=False, k=kind: self._export(k))
        self.export_btn.setMenu(menu)
        self.theme_btn = QPushButton()
        self.theme_btn.clicked.connect(self._toggle_theme)
        self.add_btn = QPushButton("Add Activity")
        self.add_btn.clicked.connect(self._add)

        header = QHBoxLayout()
        header.addWidget(title)
        header.addStretch(1)
        header.addWidget(self.export_btn)
        header.addWidget(self.theme_btn)
        header.addWidget(self.add_btn)

        self.schedule = ScheduleView(state.settings.window)
        self.schedule.remove_requested.connect(self._remove)

        container = QWidget()
        layout = QVBoxLayout(container)
        layout.addLayout(header)
        layout.addWidget(self.schedule, 1)
        self.setCentralWidget(container)

        store = state.activity_store
        store.changed.connect(self.refresh)
        store.error.connect(self._on_store_error)
        state.exports.started.connect(lambda _k: self.export_btn.setEnabled(False))
        state.exports.finished.connect(self._on_export_finished)
        state.exports.failed.connect(self._on_export_failed)

        self.apply_theme(state.settings.theme)
        self.refresh()

    def refresh(self) -> None:
        self.schedule.set_activities(self.state.activity_store.activities())

    # --- Activities -----------------------------------------------------
    def _add(self) -> None:
        dlg = AddActivityDialog(self, self.state.activity_store)
        self._adding = True
        try:
            accepted = dlg.exec() == AddActivityDialog.DialogCode.Accepted.value
        finally:
            self._adding = False
        if accepted:
            show_toast(self, "Activities added", "success")

    def _on_store_error(self, message: str) -> None:
        if self._adding:
            return
        show_toast(self, message, "error")

    def _remove(self, activity_id: str) -> None:
        if self.state.activity_store.remove(activity_id):
            show_toast(self, "Activity deleted")

    # --- Export ---------------------------------------------------------
    def _export(self, kind: str) -> None:  # pragma: no cover UI
        if self.state.exports.exporting:
            return
        if not self.state.activity_store.activities():
            show_toast(self, "No activities to export", "error")
            return
        suggested = default_export_path(self.state.settings.export_dir, kind)
        path, _ = QFileDialog.getSaveFileName(self, "Export schedule", str(suggested), EXPORT_FILTERS[kind])
        if not path:
            return
        try:
            self.state.exports.export_async(kind, Path(path))
        except ExportError as e:
            show_toast(self, str(e), "error")

    def _on_export_finished(self, path: str) -> None:  # pragma: no cover UI
        self.export_btn.setEnabled(True)
        settings = self.state.settings
        settings.export_dir = Path(path).parent
        save_settings(self.state.db, settings)
        show_toast(self, f"Schedule exported to {Path(path).name}", "success")

    def _on_export_failed(self, message: str) -> None:  # pragma: no cover UI
        self.export_btn.setEnabled(True)
        show_toast(self, message, "error")

    # --- Theme handling -----------------------------------------------
    def _toggle_theme(self) -> None:  # pragma: no cover UI
        settings = self.state.settings
        settings.theme = "light" if settings.theme == "dark" else "dark"
        save_settings(self.state.db, settings)
        self.apply_theme(settings.theme)

    def apply_theme(self, theme: str) -> None:  # pragma: no cover UI
        dark = theme == "dark"
        self.theme_btn.setText("Light mode" if dark else "Dark mode")
        self.schedule.set_dark(dark)
        if dark:
            self.setStyleSheet(
                """
                QWidget { background-color: #202225; color: #ddd; }
                QLineEdit, QTimeEdit { background: #2b2d31; color: #eee; border: 1px solid #444; }
                QPushButton, QToolButton { background: #3a3d42; color: #eee; border: 1px solid #555; padding:4px 8px; }
                QPushButton:hover, QToolButton:hover { background: #44484f; }
                """
            )
        else:
            self.setStyleSheet("")


def run(argv: Optional[list[str]] = None) -> int:
    if argv is None:
        argv = sys.argv
    app = QApplication(argv)
    state = get_app_state()
    window = MainWindow(state)
    window.show()
    code = app.exec()
    state.db.close()
    return code


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(run())
