from pathlib import Path

import pytest
from openpyxl import load_workbook
from reportlab.lib.pagesizes import A4, landscape

from week_planner.exporters import (
    DEFAULT_FILENAMES,
    PDF_TOP_OFFSET,
    ExportError,
    ExportInProgressError,
    ExportService,
    ImageSink,
    PdfSink,
    SpreadsheetSink,
    build_sheet,
    build_sheet_rows,
    default_export_path,
    fit_image,
)
from conftest import make_activity


def _week():
    return [
        make_activity("monday", "09:00", "11:30", title="Math", color="#ff0000"),
        make_activity("tuesday", "14:15", "14:45", title="Call", color="#00ff00"),
    ]


def test_sheet_grid_text():
    rows = build_sheet_rows(_week())
    assert rows[0] == ["Hour", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
    assert len(rows) == 25
    assert rows[1][0] == "0:00" and rows[24][0] == "23:00"
    assert rows[10][1] == "Math (09:00)"
    assert rows[11][1] == "Math"
    assert rows[12][1] == "Math (11:30)"
    assert rows[13][1] == ""
    assert rows[15][2] == "Call (14:15 - 14:45)"


def test_sheet_end_hour_row_is_inclusive():
    rows, fills = build_sheet([make_activity("friday", "10:00", "11:00", title="Gym", color="#123456")])
    assert rows[11][5] == "Gym (10:00)"
    assert rows[12][5] == "Gym (11:00)"
    assert fills == {(11, 5): "#123456", (12, 5): "#123456"}


def test_spreadsheet_sink_writes_fills(tmp_path):
    path = SpreadsheetSink().write(_week(), tmp_path / "s.xlsx")
    ws = load_workbook(path)["Schedule"]
    assert ws["A1"].value == "Hour"
    assert ws["B11"].value == "Math (09:00)"
    assert ws["B11"].fill.fgColor.rgb == "FFFF0000"
    assert ws["C16"].fill.fgColor.rgb == "FF00FF00"


def test_image_and_pdf_sinks(tmp_path):
    png = ImageSink().write(_week(), tmp_path / "s.png")
    assert png.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"
    pdf = PdfSink().write(_week(), tmp_path / "s.pdf")
    assert pdf.read_bytes()[:5] == b"%PDF-"


def test_fit_image_preserves_ratio_and_centres():
    page_w, page_h = landscape(A4)
    x, top, w, h = fit_image(1800, 1200, page_w, page_h, PDF_TOP_OFFSET)
    assert w / h == pytest.approx(1.5)
    assert top + h <= page_h + 1e-6
    assert w <= page_w + 1e-6
    assert x == pytest.approx((page_w - w) / 2)


def test_default_export_path(tmp_path):
    assert default_export_path(tmp_path, "xlsx") == tmp_path / DEFAULT_FILENAMES["xlsx"]


class RecordingSink:
    def __init__(self):
        self.seen = None

    def write(self, activities, path):
        self.seen = activities
        path.write_text("ok")
        return path


class FailingSink:
    def write(self, activities, path):
        raise OSError("disk full")


def test_service_exports_snapshot(tmp_path, qtbot):
    acts = _week()
    sink = RecordingSink()
    service = ExportService(lambda: acts, sinks={"xlsx": sink})
    out = service.export("xlsx", tmp_path / "out" / "s.xlsx")
    assert out.read_text() == "ok"
    assert sink.seen == acts
    assert sink.seen[0] is not acts[0]
    assert not service.exporting


def test_service_refuses_empty_collection(tmp_path, qtbot):
    service = ExportService(lambda: [], sinks={"xlsx": RecordingSink()})
    with pytest.raises(ExportError, match="No activities"):
        service.export("xlsx", tmp_path / "s.xlsx")
    assert not service.exporting


def test_service_unknown_format(tmp_path, qtbot):
    service = ExportService(_week, sinks={"xlsx": RecordingSink()})
    with pytest.raises(ExportError):
        service.export("docx", tmp_path / "s.docx")


def test_service_wraps_sink_failure_and_leaves_collection(tmp_path, qtbot):
    acts = _week()
    service = ExportService(lambda: acts, sinks={"pdf": FailingSink()})
    with pytest.raises(ExportError, match="disk full"):
        service.export("pdf", tmp_path / "s.pdf")
    assert len(acts) == 2
    assert not service.exporting


def test_service_rejects_concurrent_export(tmp_path, qtbot):
    errors = []

    class ReentrantSink:
        def write(self, activities, path):
            assert service.exporting
            try:
                service.export("xlsx", path)
            except ExportInProgressError as e:
                errors.append(e)
            path.write_text("done")
            return path

    service = ExportService(_week, sinks={"xlsx": ReentrantSink()})
    service.export("xlsx", tmp_path / "s.xlsx")
    assert len(errors) == 1
    assert not service.exporting


def test_export_async_reports_finished(tmp_path, qtbot):
    service = ExportService(_week, sinks={"xlsx": RecordingSink()})
    target = tmp_path / "async.xlsx"
    with qtbot.waitSignal(service.finished, timeout=5000) as blocker:
        service.export_async("xlsx", target)
    assert blocker.args == [str(target)]
    assert target.read_text() == "ok"


def test_export_async_reports_failure(tmp_path, qtbot):
    service = ExportService(_week, sinks={"png": FailingSink()})
    with qtbot.waitSignal(service.failed, timeout=5000) as blocker:
        service.export_async("png", tmp_path / "s.png")
    assert "disk full" in blocker.args[0]
