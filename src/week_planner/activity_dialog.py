from __future__ import annotations

"""Add-activity dialog and the read-only detail dialog used on narrow windows."""

from PyQt6.QtCore import QTime, pyqtSignal
from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import (
    QCheckBox,
    QColorDialog,
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QTimeEdit,
    QVBoxLayout,
    QWidget,
)

from .activity_store import ActivityStore
from .conflicts import format_conflicts
from .models import Activity, DAY_LABELS, DEFAULT_COLOR, WEEKDAYS
from .validation import ActivityInput, build_activities, validate_activity_input


class AddActivityDialog(QDialog):  # pragma: no cover simple UI
    def __init__(self, parent: QWidget, store: ActivityStore):
        super().__init__(parent)
        self.setWindowTitle("Add Activity")
        self._store = store

        self.title_edit = QLineEdit()
        self.title_edit.setPlaceholderText("e.g. Math class")
        self.desc_edit = QLineEdit()
        self.desc_edit.setPlaceholderText("e.g. Room 201 (optional)")
        self.color_edit = QLineEdit(DEFAULT_COLOR)
        self.color_btn = QPushButton("Pick…")
        self.color_btn.clicked.connect(self._pick_color)
        color_row = QHBoxLayout()
        color_row.addWidget(self.color_edit, 1)
        color_row.addWidget(self.color_btn)

        # One row per weekday: checkbox + its own start/end.
        self._day_rows: dict[str, tuple[QCheckBox, QTimeEdit, QTimeEdit]] = {}
        days_grid = QGridLayout()
        days_grid.addWidget(QLabel("Day"), 0, 0)
        days_grid.addWidget(QLabel("Start"), 0, 1)
        days_grid.addWidget(QLabel("End"), 0, 2)
        for r, day in enumerate(WEEKDAYS, start=1):
            cb = QCheckBox(DAY_LABELS[day])
            start = QTimeEdit(QTime(9, 0))
            end = QTimeEdit(QTime(10, 0))
            for te in (start, end):
                te.setDisplayFormat("HH:mm")
                te.setEnabled(False)
            cb.toggled.connect(start.setEnabled)
            cb.toggled.connect(end.setEnabled)
            days_grid.addWidget(cb, r, 0)
            days_grid.addWidget(start, r, 1)
            days_grid.addWidget(end, r, 2)
            self._day_rows[day] = (cb, start, end)
        self._day_rows["monday"][0].setChecked(True)

        self.error_label = QLabel("")
        self.error_label.setStyleSheet("color: #b91c1c;")
        self.error_label.setWordWrap(True)

        form = QFormLayout()
        form.addRow("Title", self.title_edit)
        form.addRow("Description", self.desc_edit)
        form.addRow("Color", color_row)
        buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel)
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        layout = QVBoxLayout(self)
        layout.addLayout(form)
        layout.addLayout(days_grid)
        layout.addWidget(self.error_label)
        layout.addWidget(buttons)

    def _pick_color(self) -> None:
        color = QColorDialog.getColor(QColor(self.color_edit.text()), self, "Activity color")
        if color.isValid():
            self.color_edit.setText(color.name())

    def get_input(self) -> ActivityInput:
        days, starts, ends = [], [], []
        for day, (cb, start, end) in self._day_rows.items():
            if cb.isChecked():
                days.append(day)
                starts.append(start.time().toString("HH:mm"))
                ends.append(end.time().toString("HH:mm"))
        return ActivityInput(
            title=self.title_edit.text(),
            description=self.desc_edit.text(),
            days=days,
            start_times=starts,
            end_times=ends,
            color=self.color_edit.text().strip(),
        )

    def accept(self) -> None:
        data = self.get_input()
        result = validate_activity_input(data)
        if not result.ok:
            self.error_label.setText("\n".join(result.messages()))
            return
        conflicts = self._store.add_batch(build_activities(data))
        if conflicts:
            self.error_label.setText(format_conflicts(conflicts))
            return
        super().accept()


class ActivityDetailDialog(QDialog):  # pragma: no cover simple UI
    remove_requested = pyqtSignal(str)

    def __init__(self, parent: QWidget, activity: Activity):
        super().__init__(parent)
        self.setWindowTitle(activity.title)
        layout = QVBoxLayout(self)
        if activity.description:
            layout.addWidget(QLabel(activity.description))
        layout.addWidget(QLabel(f"{DAY_LABELS[activity.day]}, {activity.start_time} - {activity.end_time}"))
        delete_btn = QPushButton("Delete activity")
        delete_btn.setStyleSheet("background: #b91c1c; color: #fff; padding: 6px;")
        delete_btn.clicked.connect(self._on_delete)
        layout.addWidget(delete_btn)
        self._activity_id = activity.id

    def _on_delete(self) -> None:
        self.remove_requested.emit(self._activity_id)
        self.accept()


__all__ = ["AddActivityDialog", "ActivityDetailDialog"]
