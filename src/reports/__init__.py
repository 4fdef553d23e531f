"""Report renderer module for pipeline runs.

Produces a self-contained HTML report, an Excel workbook, and a detailed
log rendering, and manages report files on disk.

Public API:
    write_html_report: Render and write the HTML report.
    write_excel_report: Build and save the Excel workbook.
    display_detailed_results: Log every result line, sample, and step.
    cleanup_old_reports: Delete earlier report files for a prefix.
    latest_report: Most recent report file for a prefix.
    open_in_browser: Open a report with the default browser.
    ReportError: Base exception for module errors.
    ReportRenderError: Raised when a report cannot be rendered.
    ReportWriteError: Raised when a report cannot be written.
"""

from .console import display_detailed_results
from .excel_report import SHEET_NAMES, build_workbook, write_excel_report
from .exceptions import ReportError, ReportRenderError, ReportWriteError
from .files import cleanup_old_reports, latest_report, open_in_browser, report_path
from .html_report import render_html, write_html_report

__all__ = [
    "write_html_report",
    "render_html",
    "write_excel_report",
    "build_workbook",
    "SHEET_NAMES",
    "display_detailed_results",
    "cleanup_old_reports",
    "latest_report",
    "open_in_browser",
    "report_path",
    "ReportError",
    "ReportRenderError",
    "ReportWriteError",
]
