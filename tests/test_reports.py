"""Unit tests for the report renderers and report file handling."""

import logging
import webbrowser
from datetime import datetime, timezone
from html.parser import HTMLParser
from unittest.mock import MagicMock

import pytest
from openpyxl import load_workbook

from src.endpoints import ITINERARY_CASES, CaseResult, EndpointTestSummary
from src.orchestrator import PipelineResult, Step, StepName
from src.performance import FAILED_SAMPLE, LatencySummary
from src.reports import (
    SHEET_NAMES,
    cleanup_old_reports,
    display_detailed_results,
    latest_report,
    open_in_browser,
    render_html,
    report_path,
    write_excel_report,
    write_html_report,
)

FIXED_NOW = datetime(2025, 4, 1, 9, 30, 5)
VOID_TAGS = {"meta", "input", "br", "img", "link"}


class _TagBalance(HTMLParser):
    def __init__(self):
        super().__init__()
        self.stack: list[str] = []
        self.errors: list[str] = []

    def handle_starttag(self, tag, attrs):
        if tag not in VOID_TAGS:
            self.stack.append(tag)

    def handle_endtag(self, tag):
        if not self.stack or self.stack[-1] != tag:
            self.errors.append(tag)
            return
        self.stack.pop()


def _result(endpoint_summary=None, latency=None, failed_step=False) -> PipelineResult:
    result = PipelineResult(started_at=datetime(2025, 4, 1, 9, 0, 0, tzinfo=timezone.utc))
    result.record(Step(StepName.CHECK_PREREQUISITES.value, True, 1.25, True))
    result.record(Step(StepName.INITIALIZE_DATABASE.value, True, 0.0, skipped=True))
    if failed_step:
        result.record(Step(StepName.HEALTH_CHECKS.value, False, 0.5, error="db <down>"))
    if endpoint_summary is not None:
        result.record(Step(StepName.API_TESTS.value, True, 2.0, endpoint_summary))
    if latency is not None:
        result.record(Step(StepName.PERFORMANCE_TESTS.value, True, 1.0, latency))
    result.finalize()
    return result


def _summary() -> EndpointTestSummary:
    summary = EndpointTestSummary()
    summary.add(CaseResult("GET", "/actuator/health", "Health", "Actuator", 200, status_code=200, elapsed_ms=12))
    summary.add(CaseResult("GET", "/search?q=<script>", "Search", "Itineraries", 200, status_code=500, elapsed_ms=7))
    summary.add(CaseResult("DELETE", "/x", "Delete", "Itineraries", 404, error="refused"))
    return summary


class TestReportFiles:
    def test_report_path_uses_timestamp(self, tmp_path):
        path = report_path(tmp_path, "MusafirGO_Pipeline_Report", ".html", now=FIXED_NOW)
        assert path == tmp_path / "MusafirGO_Pipeline_Report_20250401_093005.html"

    def test_cleanup_removes_only_matching_prefix(self, tmp_path):
        (tmp_path / "Run_Report_20250101_000000.html").write_text("old")
        (tmp_path / "Run_Report_20250101_000000.xlsx").write_text("old")
        (tmp_path / "Run_Report_20250101_000000.csv").write_text("old")
        (tmp_path / "Other_20250101_000000.html").write_text("keep")
        (tmp_path / "notes.txt").write_text("keep")

        assert cleanup_old_reports(tmp_path, "Run_Report") == 3
        assert sorted(p.name for p in tmp_path.iterdir()) == [
            "Other_20250101_000000.html",
            "notes.txt",
        ]

    def test_cleanup_is_idempotent(self, tmp_path):
        (tmp_path / "Run_Report_20250101_000000.html").write_text("old")
        cleanup_old_reports(tmp_path, "Run_Report")
        assert cleanup_old_reports(tmp_path, "Run_Report") == 0

    def test_cleanup_missing_directory(self, tmp_path):
        assert cleanup_old_reports(tmp_path / "missing", "Run_Report") == 0

    def test_latest_report(self, tmp_path):
        for stamp in ("20250101_000000", "20250301_120000", "20250201_000000"):
            (tmp_path / f"Run_Report_{stamp}.html").write_text("x")
        (tmp_path / "Run_Report_20251231_000000.xlsx").write_text("x")

        assert latest_report(tmp_path, "Run_Report").name == "Run_Report_20250301_120000.html"

    def test_latest_report_none(self, tmp_path):
        assert latest_report(tmp_path, "Run_Report") is None


class TestOpenInBrowser:
    def test_opens_file_uri_in_new_tab(self, tmp_path):
        report = tmp_path / "r.html"
        report.write_text("x")
        opener = MagicMock(return_value=True)

        assert open_in_browser(report, opener=opener) is True
        opener.assert_called_once_with(report.resolve().as_uri(), new=2)

    def test_browser_error_is_not_raised(self, tmp_path):
        opener = MagicMock(side_effect=webbrowser.Error("no display"))
        assert open_in_browser(tmp_path / "r.html", opener=opener) is False

    def test_no_browser_available(self, tmp_path):
        opener = MagicMock(return_value=False)
        assert open_in_browser(tmp_path / "r.html", opener=opener) is False


class TestHtmlReport:
    def test_document_is_well_formed(self):
        document = render_html(
            _result(_summary(), LatencySummary(samples={"Health Check": 5.0}, planned=1)),
            title="MusafirGO Pipeline Report",
            base_url="http://testserver",
        )

        assert document.startswith("<!doctype html>")
        assert document.endswith("</html>\n")
        parser = _TagBalance()
        parser.feed(document)
        assert parser.errors == []
        assert parser.stack == []

    def test_endpoint_rows_and_controls(self):
        document = render_html(_result(_summary()), title="T", base_url="http://testserver")

        assert document.count("data-status='PASSED'") == 1
        assert document.count("data-status='FAILED'") == 2
        assert "href='http://testserver/actuator/health'" in document
        assert 'id="searchInput"' in document
        assert 'id="statusFilter"' in document
        assert "Showing 3 of 3 endpoints" in document
        assert "function sortTable" in document

    def test_content_is_escaped(self):
        document = render_html(
            _result(_summary(), failed_step=True),
            title="A & B",
            base_url="http://testserver",
        )

        assert "q=<script>" not in document
        assert "/search?q=&lt;script&gt;" in document
        assert "db &lt;down&gt;" in document
        assert "<title>A &amp; B</title>" in document
        assert "FAILURE" in document

    def test_missing_summaries_render_as_empty(self):
        document = render_html(_result(), title="T", base_url="http://testserver")

        assert "Showing 0 of 0 endpoints" in document
        assert "No samples taken." in document
        assert "SUCCESS" in document

    def test_times_carry_zone_label(self):
        document = render_html(_result(), title="T", base_url="http://testserver")
        assert "<span>2025-04-01 09:00:00 UTC</span>" in document

    def test_failed_sample_shown_as_failed(self):
        latency = LatencySummary(samples={"Slow": FAILED_SAMPLE}, planned=1)
        document = render_html(_result(latency=latency), title="T", base_url="http://testserver")
        assert "<td>Slow</td><td>FAILED</td>" in document

    def test_write_html_report(self, tmp_path):
        path = write_html_report(
            _result(_summary()),
            tmp_path / "reports",
            "Run_Report",
            title="T",
            base_url="http://testserver",
            now=FIXED_NOW,
        )

        assert path.name == "Run_Report_20250401_093005.html"
        assert path.read_text(encoding="utf-8").startswith("<!doctype html>")


class TestExcelReport:
    def test_workbook_sheets_and_rows(self, tmp_path):
        latency = LatencySummary(samples={"Health Check": 5.0, "Broken": FAILED_SAMPLE}, planned=2)
        path = write_excel_report(
            _result(_summary(), latency),
            ITINERARY_CASES,
            tmp_path,
            "Run_Report",
            now=FIXED_NOW,
        )

        assert path.name == "Run_Report_20250401_093005.xlsx"
        wb = load_workbook(path)
        assert tuple(wb.sheetnames) == SHEET_NAMES

        api = [list(row) for row in wb["API Tests"].iter_rows(values_only=True)]
        assert api[0] == ["Metric", "Value", "Status"]
        assert api[1] == ["Total tests", 3, "OK"]
        assert api[3] == ["Failed tests", 2, "FAIL"]

        steps = [list(row) for row in wb["Step Details"].iter_rows(min_row=2, values_only=True)]
        assert steps[1][:3] == ["InitializeDatabase", "Skipped", "OK"]

        performance = [list(row) for row in wb["Performance"].iter_rows(min_row=2, values_only=True)]
        assert performance[1] == ["Broken", "FAILED", "FAIL"]

        endpoints = [row[0] for row in wb["Endpoints"].iter_rows(min_row=2, values_only=True)]
        assert "GET /api/itineraries" in endpoints
        assert len(endpoints) == len(set(endpoints))

    def test_empty_run_still_exports(self, tmp_path):
        path = write_excel_report(_result(), (), tmp_path, "Run_Report", now=FIXED_NOW)
        wb = load_workbook(path)
        api = [list(row) for row in wb["API Tests"].iter_rows(min_row=2, values_only=True)]
        assert api[0] == ["Total tests", 0, "OK"]
        assert api[3] == ["Success rate", "100.00%", "OK"]


class TestDisplayDetailedResults:
    def test_logs_every_line(self, caplog):
        caplog.set_level(logging.INFO)
        latency = LatencySummary(samples={"Health Check": 5.0, "Broken": FAILED_SAMPLE}, planned=2)

        assert display_detailed_results(_result(_summary(), latency)) is True

        text = caplog.text
        assert "GET /actuator/health - PASSED (12ms)" in text
        assert "DELETE /x - FAILED (refused)" in text
        assert "Broken: FAILED" in text
        assert "InitializeDatabase: SKIPPED" in text

    def test_works_without_summaries(self, caplog):
        caplog.set_level(logging.INFO)
        assert display_detailed_results(_result()) is True
        assert "Total: 0 | Passed: 0 | Failed: 0" in caplog.text


@pytest.mark.parametrize("prefix", ["MusafirGO_Pipeline_Report", "MusafirGO_Web_Pipeline_Report"])
def test_prefixes_do_not_collide(tmp_path, prefix):
    (tmp_path / "MusafirGO_Pipeline_Report_20250101_000000.html").write_text("x")
    (tmp_path / "MusafirGO_Web_Pipeline_Report_20250101_000000.html").write_text("x")

    assert cleanup_old_reports(tmp_path, prefix) == 1
