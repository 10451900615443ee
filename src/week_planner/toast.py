from __future__ import annotations

"""Toast overlay for success, validation, conflict and export messages."""

from PyQt6.QtCore import QTimer, Qt
from PyQt6.QtWidgets import QLabel, QWidget

_STYLES = {
    "info": "background: rgba(40,40,40,0.88); color: #fff;",
    "success": "background: rgba(22,101,52,0.92); color: #fff;",
    "error": "background: rgba(153,27,27,0.92); color: #fff;",
}


class Toast(QLabel):  # pragma: no cover - UI utility
    def __init__(self, parent: QWidget, message: str, kind: str = "info", timeout_ms: int = 3000):
        super().__init__(parent)
        self.setText(message)
        self.setWordWrap(True)
        self.setMaximumWidth(max(240, int(parent.width() * 0.6)))
        self.setStyleSheet(_STYLES.get(kind, _STYLES["info"]) + " padding: 6px 12px; border-radius: 6px;")
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents)
        self.adjustSize()
        w = parent.width()
        self.move(int((w - self.width()) / 2), 30)
        self.show()
        self.raise_()
        QTimer.singleShot(timeout_ms, self.close)


def show_toast(parent: QWidget, message: str, kind: str = "info", timeout_ms: int = 3000) -> None:  # pragma: no cover
    # Multi-line messages (conflict lists) stay up longer.
    if "\n" in message:
        timeout_ms = max(timeout_ms, 5000)
    Toast(parent, message, kind, timeout_ms)


__all__ = ["show_toast"]
