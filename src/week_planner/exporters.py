from __future__ import annotations

"""Schedule export: spreadsheet, image and PDF.

Sinks receive a snapshot of the collection taken when the export starts and
never touch the store. ``ExportService`` allows a single export at a time;
``export_async`` runs the job on a background thread and reports back through
Qt signals so the window can re-enable its export menu.
"""

from dataclasses import replace
import io
import logging
from pathlib import Path
import threading
from typing import Callable, Dict, List, Protocol, Sequence, Tuple

from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
from matplotlib.patches import Rectangle
from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter
from PyQt6.QtCore import QObject, pyqtSignal
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from .layout import DEFAULT_WINDOW, GridWindow, group_by_day, label_position, place_activity, time_labels
from .models import Activity, DAY_LABELS, WEEKDAYS
from .timeutil import hour_of

_log = logging.getLogger(__name__)

SHEET_TITLE = "Schedule"
PDF_TOP_OFFSET = 20 * mm
DEFAULT_FILENAMES: Dict[str, str] = {
    "xlsx": "my-schedule.xlsx",
    "pdf": "my-schedule.pdf",
    "png": "my-schedule.png",
}


class ExportError(Exception):
    pass


class ExportInProgressError(ExportError):
    pass


class ExportSink(Protocol):
    def write(self, activities: Sequence[Activity], path: Path) -> Path: ...


def default_export_path(export_dir: Path, kind: str) -> Path:
    return Path(export_dir) / DEFAULT_FILENAMES[kind]


# --- Spreadsheet ------------------------------------------------------------

Cell = Tuple[int, int]  # (row, column), 0-based over the rows grid


def build_sheet(activities: Sequence[Activity]) -> tuple[List[List[str]], Dict[Cell, str]]:
    """Hour-by-day grid for the spreadsheet plus the fill colour per occupied cell.

    Row 0 is the header, rows 1..24 are hours 0..23. An activity is written into
    every hour row from its start hour to its end hour inclusive.
    """
    rows: List[List[str]] = [["Hour", *(DAY_LABELS[d] for d in WEEKDAYS)]]
    rows += [[f"{h}:00", *([""] * len(WEEKDAYS))] for h in range(24)]
    fills: Dict[Cell, str] = {}
    for a in activities:
        col = WEEKDAYS.index(a.day) + 1
        start_hour, end_hour = hour_of(a.start_time), hour_of(a.end_time)
        for hour in range(start_hour, end_hour + 1):
            if hour == start_hour and hour == end_hour:
                text = f"{a.title} ({a.start_time} - {a.end_time})"
            elif hour == start_hour:
                text = f"{a.title} ({a.start_time})"
            elif hour == end_hour:
                text = f"{a.title} ({a.end_time})"
            else:
                text = a.title
            rows[hour + 1][col] = text
            fills[(hour + 1, col)] = a.color
    return rows, fills


def build_sheet_rows(activities: Sequence[Activity]) -> List[List[str]]:
    return build_sheet(activities)[0]


def _argb(color: str) -> str:
    hexpart = color.lstrip("#")
    if len(hexpart) == 3:
        hexpart = "".join(ch * 2 for ch in hexpart)
    return "FF" + hexpart.upper()


class SpreadsheetSink:
    def write(self, activities: Sequence[Activity], path: Path) -> Path:
        rows, fills = build_sheet(activities)
        wb = Workbook()
        ws = wb.active
        ws.title = SHEET_TITLE
        for row in rows:
            ws.append(row)
        for (r, c), color in fills.items():
            cell = ws.cell(row=r + 1, column=c + 1)
            cell.fill = PatternFill(fill_type="solid", fgColor=_argb(color), bgColor=_argb(color))
            cell.alignment = Alignment(wrap_text=True, vertical="top")
        for cell in ws[1]:
            cell.font = Font(bold=True)
        ws.column_dimensions["A"].width = 8
        for c in range(2, len(WEEKDAYS) + 2):
            ws.column_dimensions[get_column_letter(c)].width = 24
        wb.save(path)
        return path


# --- Image ------------------------------------------------------------------

def render_schedule_png(
    activities: Sequence[Activity], window: GridWindow = DEFAULT_WINDOW, dpi: int = 150
) -> bytes:
    """Rasterise the weekly grid. Blocks outside the window are clipped at the axes."""
    fig = Figure(figsize=(12, 8), facecolor="white")
    FigureCanvasAgg(fig)
    ax = fig.add_axes((0.06, 0.02, 0.93, 0.92))
    ax.set_xlim(0, len(WEEKDAYS))
    ax.set_ylim(100, 0)
    for spine in ax.spines.values():
        spine.set_visible(False)

    labels = time_labels(window)
    ticks = [label_position(i, window) for i in range(len(labels))]
    ax.set_yticks(ticks, labels, fontsize=8)
    ax.xaxis.tick_top()
    ax.set_xticks([i + 0.5 for i in range(len(WEEKDAYS))], [DAY_LABELS[d] for d in WEEKDAYS], fontsize=9)
    ax.tick_params(length=0)
    for y in ticks:
        ax.axhline(y, color="#d4d4d8", linewidth=0.6, zorder=1)

    grouped = group_by_day(activities)
    for col, day in enumerate(WEEKDAYS):
        ax.add_patch(Rectangle((col + 0.02, 0), 0.96, 100, facecolor="#f4f4f5", edgecolor="none", zorder=0))
        for a in grouped[day]:
            p = place_activity(a, window)
            ax.add_patch(Rectangle((col + 0.045, p.top), 0.91, p.height, facecolor=a.color, edgecolor="none", zorder=2))
            ax.text(
                col + 0.08,
                p.top + 0.5,
                f"{a.title}\n{a.start_time} - {a.end_time}",
                color="white",
                fontsize=7,
                fontweight="bold",
                ha="left",
                va="top",
                clip_on=True,
                zorder=3,
            )

    buf = io.BytesIO()
    fig.savefig(buf, format="png", dpi=dpi, facecolor="white")
    return buf.getvalue()


class ImageSink:
    def __init__(self, window: GridWindow = DEFAULT_WINDOW):
        self.window = window

    def write(self, activities: Sequence[Activity], path: Path) -> Path:
        path.write_bytes(render_schedule_png(activities, self.window))
        return path


# --- PDF --------------------------------------------------------------------

def fit_image(
    img_w: float, img_h: float, page_w: float, page_h: float, top: float
) -> tuple[float, float, float, float]:
    """Scale an image into the page area below ``top``, keeping aspect ratio.

    Returns ``(x, top, width, height)`` with ``top`` measured from the page's
    upper edge; the image is centred horizontally.
    """
    ratio = min(page_w / img_w, (page_h - top) / img_h)
    w, h = img_w * ratio, img_h * ratio
    return (page_w - w) / 2, top, w, h


class PdfSink:
    def __init__(self, window: GridWindow = DEFAULT_WINDOW):
        self.window = window

    def write(self, activities: Sequence[Activity], path: Path) -> Path:
        reader = ImageReader(io.BytesIO(render_schedule_png(activities, self.window)))
        img_w, img_h = reader.getSize()
        page_w, page_h = landscape(A4)
        x, top, w, h = fit_image(img_w, img_h, page_w, page_h, PDF_TOP_OFFSET)
        pdf = canvas.Canvas(str(path), pagesize=(page_w, page_h))
        pdf.setTitle("Weekly schedule")
        pdf.drawImage(reader, x, page_h - top - h, width=w, height=h)
        pdf.showPage()
        pdf.save()
        return path


def default_sinks(window: GridWindow = DEFAULT_WINDOW) -> Dict[str, ExportSink]:
    return {"xlsx": SpreadsheetSink(), "png": ImageSink(window), "pdf": PdfSink(window)}


# --- Service ----------------------------------------------------------------

class ExportService(QObject):
    started = pyqtSignal(str)  # kind
    finished = pyqtSignal(str)  # output path
    failed = pyqtSignal(str)  # user-facing message

    def __init__(
        self,
        snapshot: Callable[[], Sequence[Activity]],
        sinks: Dict[str, ExportSink] | None = None,
        window: GridWindow = DEFAULT_WINDOW,
    ):
        super().__init__()
        self._snapshot = snapshot
        self._sinks = sinks if sinks is not None else default_sinks(window)
        self._lock = threading.Lock()
        self._exporting = False

    @property
    def exporting(self) -> bool:
        return self._exporting

    def formats(self) -> List[str]:
        return list(self._sinks)

    def export(self, kind: str, path: Path) -> Path:
        self._begin(kind)
        try:
            return self._run(kind, self._take_snapshot(), Path(path))
        finally:
            self._end()

    def export_async(self, kind: str, path: Path) -> None:
        self._begin(kind)
        try:
            activities = self._take_snapshot()
        except Exception:
            self._end()
            raise
        self.started.emit(kind)

        def worker():
            try:
                out = self._run(kind, activities, Path(path))
            except ExportError as e:
                self._end()
                self.failed.emit(str(e))
                return
            self._end()
            self.finished.emit(str(out))

        threading.Thread(target=worker, daemon=True).start()

    # --- Internal -------------------------------------------------------
    def _begin(self, kind: str) -> None:
        if kind not in self._sinks:
            raise ExportError(f"Unknown export format: {kind}")
        with self._lock:
            if self._exporting:
                raise ExportInProgressError("An export is already running")
            self._exporting = True

    def _end(self) -> None:
        with self._lock:
            self._exporting = False

    def _take_snapshot(self) -> List[Activity]:
        return [replace(a) for a in self._snapshot()]

    def _run(self, kind: str, activities: List[Activity], path: Path) -> Path:
        if not activities:
            raise ExportError("No activities to export")
        sink = self._sinks[kind]
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            out = sink.write(activities, path)
        except Exception as e:
            _log.exception("export failed", extra={"_json_kind": kind, "_json_path": str(path)})
            raise ExportError(f"Export as {kind} failed: {e}") from e
        _log.info("schedule exported", extra={"_json_kind": kind, "_json_path": str(out)})
        return out


__all__ = [
    "ExportError",
    "ExportInProgressError",
    "ExportService",
    "SpreadsheetSink",
    "ImageSink",
    "PdfSink",
    "build_sheet",
    "build_sheet_rows",
    "render_schedule_png",
    "fit_image",
    "default_sinks",
    "default_export_path",
    "DEFAULT_FILENAMES",
    "PDF_TOP_OFFSET",
]
