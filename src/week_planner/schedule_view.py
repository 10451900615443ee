from __future__ import annotations

"""Weekly grid widget: seven day columns on an hourly time axis.

Block geometry comes from ``layout.place_activity``; painting is clipped to
the grid area so blocks outside the visible window are cut at its edges.
Desktop: hover shows details, the corner cross deletes. Mobile: tapping a
block opens the detail dialog.
"""

from typing import List, Optional, Tuple

from PyQt6.QtCore import QEvent, QPointF, QRectF, Qt, pyqtSignal
from PyQt6.QtGui import QColor, QFont, QPainter, QPen
from PyQt6.QtWidgets import QMessageBox, QSizePolicy, QToolTip, QWidget

from .activity_dialog import ActivityDetailDialog
from .layout import DEFAULT_WINDOW, GridWindow, group_by_day, label_position, place_activity, time_labels
from .media import is_mobile
from .models import Activity, DAY_ABBREVIATIONS, DAY_LABELS, WEEKDAYS

HEADER_HEIGHT = 28
TIME_COLUMN_WIDTH = 48
PADDING = 4
DELETE_BOX = 14
BLOCK_TEXT_FLAGS = (Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignTop).value | Qt.TextFlag.TextWordWrap.value

LIGHT = {"bg": "#ffffff", "column": "#f4f4f5", "grid": "#d4d4d8", "text": "#27272a"}
DARK = {"bg": "#202225", "column": "#2b2d31", "grid": "#44484f", "text": "#dddddd"}


class ScheduleView(QWidget):  # pragma: no cover heavy UI
    remove_requested = pyqtSignal(str)

    def __init__(self, window: GridWindow = DEFAULT_WINDOW):
        super().__init__()
        self._window = window
        self._activities: List[Activity] = []
        self._blocks: List[Tuple[QRectF, Activity]] = []
        self._palette = LIGHT
        self.setMouseTracking(True)
        self.setMinimumHeight(480)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)

    # --- Public API -----------------------------------------------------
    def set_activities(self, activities: List[Activity]) -> None:
        self._activities = list(activities)
        self.update()

    def set_window(self, window: GridWindow) -> None:
        self._window = window
        self.update()

    def set_dark(self, dark: bool) -> None:
        self._palette = DARK if dark else LIGHT
        self.update()

    # --- Geometry -------------------------------------------------------
    def _grid_rect(self) -> QRectF:
        return QRectF(
            TIME_COLUMN_WIDTH,
            HEADER_HEIGHT,
            max(1.0, self.width() - TIME_COLUMN_WIDTH - PADDING),
            max(1.0, self.height() - HEADER_HEIGHT - PADDING * 3),
        )

    def _column_width(self) -> float:
        return self._grid_rect().width() / len(WEEKDAYS)

    def _layout_blocks(self) -> None:
        grid = self._grid_rect()
        col_w = self._column_width()
        self._blocks = []
        for col, (day, acts) in enumerate(group_by_day(self._activities).items()):
            x = grid.left() + col * col_w
            for a in acts:
                p = place_activity(a, self._window)
                top = grid.top() + grid.height() * p.top / 100
                height = grid.height() * p.height / 100
                self._blocks.append((QRectF(x + col_w * 0.025, top, col_w * 0.95, height), a))

    def _block_at(self, pos) -> Optional[Tuple[QRectF, Activity]]:
        pos = QPointF(pos)
        for rect, a in reversed(self._blocks):
            if rect.contains(pos) and self._grid_rect().contains(pos):
                return rect, a
        return None

    @staticmethod
    def _delete_rect(block: QRectF) -> QRectF:
        return QRectF(block.right() - DELETE_BOX - 2, block.top() + 2, DELETE_BOX, DELETE_BOX)

    # --- Painting -------------------------------------------------------
    def paintEvent(self, _event) -> None:
        self._layout_blocks()
        pal = self._palette
        p = QPainter(self)
        p.setRenderHint(QPainter.RenderHint.Antialiasing)
        p.fillRect(self.rect(), QColor(pal["bg"]))
        grid = self._grid_rect()
        col_w = self._column_width()
        compact = is_mobile(self.width())

        p.setPen(QColor(pal["text"]))
        header_font = QFont(self.font())
        header_font.setBold(True)
        p.setFont(header_font)
        for col, day in enumerate(WEEKDAYS):
            label = DAY_ABBREVIATIONS[day] if compact else DAY_LABELS[day]
            rect = QRectF(grid.left() + col * col_w, 0, col_w, HEADER_HEIGHT)
            p.drawText(rect, Qt.AlignmentFlag.AlignCenter, label)
            p.fillRect(QRectF(rect.left() + 2, grid.top(), col_w - 4, grid.height()), QColor(pal["column"]))

        p.setFont(self.font())
        for i, label in enumerate(time_labels(self._window)):
            y = grid.top() + grid.height() * label_position(i, self._window) / 100
            p.setPen(QPen(QColor(pal["grid"]), 1))
            p.drawLine(int(grid.left()), int(y), int(grid.right()), int(y))
            p.setPen(QColor(pal["text"]))
            p.drawText(QRectF(0, y - 8, TIME_COLUMN_WIDTH - 6, 16), Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter, label)

        p.setClipRect(grid)
        for rect, a in self._blocks:
            p.setPen(Qt.PenStyle.NoPen)
            p.setBrush(QColor(a.color))
            p.drawRoundedRect(rect, 4, 4)
            p.setPen(QColor("#ffffff"))
            inner = rect.adjusted(4, 2, -DELETE_BOX - 4, -2)
            p.drawText(inner, BLOCK_TEXT_FLAGS, f"{a.title}\n{a.start_time} - {a.end_time}")
            if not compact:
                p.drawText(self._delete_rect(rect), Qt.AlignmentFlag.AlignCenter, "×")
        p.end()

    # --- Interaction ----------------------------------------------------
    def event(self, e) -> bool:
        if e.type() == QEvent.Type.ToolTip and not is_mobile(self.width()):
            hit = self._block_at(e.pos())
            if hit:
                _, a = hit
                lines = [a.title]
                if a.description:
                    lines.append(a.description)
                lines.append(f"Time: {a.start_time} - {a.end_time}")
                QToolTip.showText(e.globalPos(), "\n".join(lines), self)
            else:
                QToolTip.hideText()
            return True
        return super().event(e)

    def mousePressEvent(self, e) -> None:
        hit = self._block_at(e.position())
        if not hit:
            return super().mousePressEvent(e)
        rect, a = hit
        if is_mobile(self.width()):
            dlg = ActivityDetailDialog(self, a)
            dlg.remove_requested.connect(self.remove_requested)
            dlg.exec()
        elif self._delete_rect(rect).contains(e.position()):
            if QMessageBox.question(self, "Confirm", f"Delete '{a.title}'?") == QMessageBox.StandardButton.Yes:
                self.remove_requested.emit(a.id)


__all__ = ["ScheduleView"]
