"""Excel workbook export of a pipeline run."""

from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Optional

from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from src.endpoints import EndpointCase, EndpointTestSummary, endpoint_catalog
from src.performance import LatencySummary

from .exceptions import ReportWriteError
from .files import report_path

if TYPE_CHECKING:
    from src.orchestrator.models import PipelineResult

SHEET_NAMES = ("Pipeline Summary", "Step Details", "API Tests", "Performance", "Endpoints")
TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def _ok(flag: bool) -> str:
    return "OK" if flag else "FAIL"


def _autosize(ws) -> None:
    for index, column in enumerate(ws.columns, 1):
        width = max((len(str(cell.value)) for cell in column if cell.value is not None), default=8)
        ws.column_dimensions[get_column_letter(index)].width = min(width + 2, 80)


def _add_sheet(wb: Workbook, title: str, header: list[str], rows: Iterable[list]) -> None:
    ws = wb.create_sheet(title)
    ws.append(header)
    for row in rows:
        ws.append(row)
    _autosize(ws)


def _summary_rows(result: "PipelineResult", finished: datetime) -> list[list]:
    duration = result.total_duration_seconds or max(
        (finished - result.started_at).total_seconds(), 0.0
    )
    return [
        ["Start time", result.started_at.strftime(TIME_FORMAT), "OK"],
        ["End time", finished.strftime(TIME_FORMAT), "OK"],
        ["Total duration", f"{duration:.2f} seconds", "OK"],
        ["Overall status", "SUCCESS" if result.success else "FAILURE", _ok(result.success)],
    ]


def _step_rows(result: "PipelineResult") -> list[list]:
    rows = []
    for step in result.steps.values():
        if step.skipped:
            status = "Skipped"
        else:
            status = "Passed" if step.success else "Failed"
        rows.append([step.name, status, _ok(step.success), round(step.duration_seconds, 2), step.error or ""])
    return rows


def _api_rows(summary: EndpointTestSummary) -> list[list]:
    rows = [
        ["Total tests", summary.total, "OK"],
        ["Passed tests", summary.passed, "OK"],
        ["Failed tests", summary.failed, _ok(summary.failed == 0)],
        ["Success rate", f"{summary.success_rate:.2f}%", "OK"],
    ]
    rows.extend([case.line, "", _ok(case.passed)] for case in summary.cases)
    return rows


def _performance_rows(latency: LatencySummary) -> list[list]:
    rows = []
    for name, value in latency.samples.items():
        if value < 0:
            rows.append([name, "FAILED", "FAIL"])
        else:
            rows.append([name, f"{value:.2f} ms", "OK"])
    rows.extend(
        [
            ["Average", f"{latency.average_ms:.2f} ms", "OK"],
            ["Min", f"{latency.min_ms:.2f} ms", "OK"],
            ["Max", f"{latency.max_ms:.2f} ms", "OK"],
            ["Successful samples", f"{latency.successful_tests}/{latency.planned}", "OK"],
        ]
    )
    return rows


def build_workbook(
    result: "PipelineResult",
    cases: tuple[EndpointCase, ...],
    now: Optional[datetime] = None,
) -> Workbook:
    """Build the five-sheet workbook for a run."""
    finished = result.finished_at or now or datetime.now(result.started_at.tzinfo)
    summary = result.endpoint_summary or EndpointTestSummary()
    latency = result.latency_summary or LatencySummary()

    wb = Workbook()
    wb.remove(wb.active)
    _add_sheet(wb, SHEET_NAMES[0], ["Item", "Value", "Status"], _summary_rows(result, finished))
    _add_sheet(
        wb,
        SHEET_NAMES[1],
        ["Step", "Status", "Code", "Duration (s)", "Error"],
        _step_rows(result),
    )
    _add_sheet(wb, SHEET_NAMES[2], ["Metric", "Value", "Status"], _api_rows(summary))
    _add_sheet(wb, SHEET_NAMES[3], ["Metric", "Value", "Status"], _performance_rows(latency))
    _add_sheet(
        wb,
        SHEET_NAMES[4],
        ["Endpoint", "Description"],
        ([endpoint, description] for endpoint, description in endpoint_catalog(cases)),
    )
    return wb


def write_excel_report(
    result: "PipelineResult",
    cases: tuple[EndpointCase, ...],
    report_dir: Path,
    prefix: str,
    now: Optional[datetime] = None,
) -> Path:
    """Build and save ``<prefix>_<stamp>.xlsx`` into ``report_dir``.

    Raises:
        ReportWriteError: If the workbook cannot be saved.
    """
    path = report_path(report_dir, prefix, ".xlsx", now=now)
    wb = build_workbook(result, cases, now=now)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(str(path))
    except OSError as e:
        raise ReportWriteError(str(path), str(e)) from e
    return path
