"""Self-contained HTML report for a pipeline run."""

import html
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from src.endpoints import CaseResult, EndpointTestSummary
from src.performance import LatencySummary

from .exceptions import ReportRenderError
from .files import report_path, write_text

if TYPE_CHECKING:
    from src.orchestrator.models import PipelineResult, Step

PASS_COLOR = "#166534"
FAIL_COLOR = "#9f1239"
SKIP_COLOR = "#6b7280"

_STYLES = """
    body { font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", sans-serif; margin: 0; padding: 24px; background: #f3f4f6; color: #111827; }
    .container { max-width: 1200px; margin: 0 auto; background: #fff; border-radius: 12px; box-shadow: 0 10px 30px rgba(0,0,0,0.08); overflow: hidden; }
    .header { background: #1e3a8a; color: #fff; padding: 24px 28px; }
    .header h1 { margin: 0; font-weight: 400; }
    .header .meta { opacity: 0.85; margin-top: 6px; }
    .status { display: inline-block; padding: 6px 10px; border-radius: 8px; color: #fff; font-weight: 600; margin-top: 12px; }
    .content { padding: 24px 28px; }
    .grid { display: grid; grid-template-columns: repeat(auto-fit, minmax(280px, 1fr)); gap: 16px; margin-bottom: 24px; }
    .card { border: 1px solid #e5e7eb; border-radius: 8px; padding: 14px 16px; }
    .card h2 { margin: 0 0 10px; font-size: 18px; }
    .stat { display: flex; justify-content: space-between; padding: 6px 0; border-bottom: 1px solid #f3f4f6; }
    .stat:last-child { border-bottom: none; }
    .progress { background: #e5e7eb; border-radius: 6px; height: 14px; overflow: hidden; margin-top: 10px; }
    .progress-fill { background: #16a34a; height: 100%; }
    .bars { display: flex; align-items: flex-end; gap: 24px; height: 140px; margin-top: 10px; }
    .bar { width: 60px; text-align: center; color: #fff; font-weight: 600; border-radius: 6px 6px 0 0; min-height: 4px; }
    .bar-labels { display: flex; gap: 24px; }
    .bar-labels span { width: 60px; text-align: center; font-size: 12px; color: #4b5563; }
    .section { margin-top: 28px; }
    table { width: 100%; border-collapse: collapse; margin-top: 8px; }
    th, td { border: 1px solid #e5e7eb; padding: 8px 10px; text-align: left; font-size: 13px; vertical-align: top; }
    th { background: #f9fafb; }
    th.sortable { cursor: pointer; user-select: none; }
    .controls { display: flex; gap: 12px; margin-top: 8px; }
    .controls input { flex: 1; padding: 6px 8px; }
    .table-info { margin-top: 8px; color: #4b5563; font-size: 13px; }
    .passed { color: #166534; font-weight: 700; }
    .failed { color: #9f1239; font-weight: 700; }
"""

_SCRIPT = """
    var sortState = { column: -1, ascending: true };

    function cellValue(row, column) {
      var text = row.cells[column].textContent.trim();
      var number = parseFloat(text);
      return isNaN(number) ? text.toLowerCase() : number;
    }

    function sortTable(column) {
      var body = document.getElementById('endpointRows');
      var rows = Array.prototype.slice.call(body.rows);
      sortState.ascending = sortState.column === column ? !sortState.ascending : true;
      sortState.column = column;
      rows.sort(function (a, b) {
        var left = cellValue(a, column);
        var right = cellValue(b, column);
        if (left < right) { return sortState.ascending ? -1 : 1; }
        if (left > right) { return sortState.ascending ? 1 : -1; }
        return 0;
      });
      rows.forEach(function (row) { body.appendChild(row); });
    }

    function filterTable() {
      var term = document.getElementById('searchInput').value.toLowerCase();
      var status = document.getElementById('statusFilter').value;
      var rows = document.getElementById('endpointRows').rows;
      var visible = 0;
      for (var i = 0; i < rows.length; i++) {
        var row = rows[i];
        var matchesTerm = row.textContent.toLowerCase().indexOf(term) !== -1;
        var matchesStatus = status === '' || row.getAttribute('data-status') === status;
        row.style.display = matchesTerm && matchesStatus ? '' : 'none';
        if (matchesTerm && matchesStatus) { visible++; }
      }
      document.getElementById('tableInfo').textContent =
        'Showing ' + visible + ' of ' + rows.length + ' endpoints';
    }

    document.addEventListener('DOMContentLoaded', function () {
      document.getElementById('searchInput').addEventListener('input', filterTable);
      document.getElementById('statusFilter').addEventListener('change', filterTable);
      filterTable();
    });
"""


def _fmt_time(value: Optional[datetime]) -> str:
    if value is None:
        return "-"
    return value.strftime("%Y-%m-%d %H:%M:%S %Z").strip()


def _step_status(step: "Step") -> tuple[str, str]:
    if step.skipped:
        return "SKIPPED", SKIP_COLOR
    if step.success:
        return "OK", PASS_COLOR
    return "FAILED", FAIL_COLOR


def render_step_rows(result: "PipelineResult") -> str:
    if not result.steps:
        return "<tr><td colspan='4'>No steps recorded.</td></tr>"
    rows: list[str] = []
    for step in result.steps.values():
        status, color = _step_status(step)
        rows.append(
            "<tr>"
            f"<td>{html.escape(step.name)}</td>"
            f"<td style='color:{color};font-weight:700'>{status}</td>"
            f"<td>{step.duration_seconds:.2f}</td>"
            f"<td>{html.escape(step.error or '')}</td>"
            "</tr>"
        )
    return "".join(rows)


def _endpoint_row(index: int, case: CaseResult, base_url: str) -> str:
    status = "PASSED" if case.passed else "FAILED"
    url = base_url + case.path
    elapsed = "-" if case.elapsed_ms is None else str(case.elapsed_ms)
    received = "-" if case.status_code is None else str(case.status_code)
    title = case.description if case.error is None else f"{case.description}: {case.error}"
    return (
        f"<tr data-status='{status}'>"
        f"<td>{index}</td>"
        f"<td>{html.escape(case.method)}</td>"
        f"<td><a href='{html.escape(url, quote=True)}' target='_blank' title='{html.escape(title, quote=True)}'>"
        f"{html.escape(case.path)}</a></td>"
        f"<td class='{status.lower()}'>{status}</td>"
        f"<td>{elapsed}</td>"
        f"<td>{case.expected_status}</td>"
        f"<td>{received}</td>"
        "</tr>"
    )


def render_endpoint_rows(summary: EndpointTestSummary, base_url: str) -> str:
    return "".join(
        _endpoint_row(index, case, base_url) for index, case in enumerate(summary.cases, 1)
    )


def render_sample_rows(latency: LatencySummary) -> str:
    if not latency.samples:
        return "<tr><td colspan='2'>No samples taken.</td></tr>"
    rows: list[str] = []
    for name, value in latency.samples.items():
        shown = "FAILED" if value < 0 else f"{value:.2f}"
        rows.append(f"<tr><td>{html.escape(name)}</td><td>{shown}</td></tr>")
    return "".join(rows)


def _bar_height(count: int, total: int) -> float:
    if total == 0:
        return 0.0
    return count / total * 100


def render_html(
    result: "PipelineResult",
    title: str,
    base_url: str,
    generated_at: Optional[datetime] = None,
) -> str:
    """Render the full report document.

    A missing API or performance summary is rendered as an empty one.
    """
    try:
        summary = result.endpoint_summary or EndpointTestSummary()
        latency = result.latency_summary or LatencySummary()
        generated = generated_at or datetime.now().astimezone()
        finished = result.finished_at or generated
        duration = result.total_duration_seconds or max(
            (finished - result.started_at).total_seconds(), 0.0
        )
        success = result.success
    except (TypeError, AttributeError) as e:
        raise ReportRenderError(str(e)) from e

    status_text = "SUCCESS" if success else "FAILURE"
    status_color = PASS_COLOR if success else FAIL_COLOR
    rate = summary.success_rate
    passed_height = _bar_height(summary.passed, summary.total)
    failed_height = _bar_height(summary.failed, summary.total)
    escaped_title = html.escape(title)

    return f"""<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>{escaped_title}</title>
  <style>{_STYLES}</style>
</head>
<body>
<div class="container">
  <div class="header">
    <h1>{escaped_title}</h1>
    <div class="meta">Target: {html.escape(base_url)} | Generated at {_fmt_time(generated)}</div>
    <div class="status" style="background:{status_color}">{status_text}</div>
  </div>
  <div class="content">
    <div class="grid">
      <div class="card">
        <h2>Run Summary</h2>
        <div class="stat"><span>Start</span><span>{_fmt_time(result.started_at)}</span></div>
        <div class="stat"><span>End</span><span>{_fmt_time(finished)}</span></div>
        <div class="stat"><span>Duration</span><span>{duration:.2f} s</span></div>
        <div class="stat"><span>Steps</span><span>{len(result.steps)}</span></div>
      </div>
      <div class="card">
        <h2>API Tests</h2>
        <div class="stat"><span>Total</span><span>{summary.total}</span></div>
        <div class="stat"><span>Passed</span><span class="passed">{summary.passed}</span></div>
        <div class="stat"><span>Failed</span><span class="failed">{summary.failed}</span></div>
        <div class="stat"><span>Success rate</span><span>{rate:.2f}%</span></div>
        <div class="progress"><div class="progress-fill" style="width:{rate:.2f}%"></div></div>
      </div>
      <div class="card">
        <h2>Passed vs Failed</h2>
        <div class="bars">
          <div class="bar" style="height:{passed_height:.2f}%;background:{PASS_COLOR}">{summary.passed}</div>
          <div class="bar" style="height:{failed_height:.2f}%;background:{FAIL_COLOR}">{summary.failed}</div>
        </div>
        <div class="bar-labels"><span>Passed</span><span>Failed</span></div>
      </div>
      <div class="card">
        <h2>Performance</h2>
        <div class="stat"><span>Average</span><span>{latency.average_ms:.2f} ms</span></div>
        <div class="stat"><span>Min</span><span>{latency.min_ms:.2f} ms</span></div>
        <div class="stat"><span>Max</span><span>{latency.max_ms:.2f} ms</span></div>
        <div class="stat"><span>Successful samples</span><span>{latency.successful_tests}/{latency.planned}</span></div>
      </div>
    </div>

    <div class="section">
      <h2>Step Durations</h2>
      <table>
        <thead><tr><th>Step</th><th>Status</th><th>Duration (s)</th><th>Error</th></tr></thead>
        <tbody>
          {render_step_rows(result)}
        </tbody>
      </table>
    </div>

    <div class="section">
      <h2>Latency Samples</h2>
      <table>
        <thead><tr><th>Sample</th><th>Time (ms)</th></tr></thead>
        <tbody>
          {render_sample_rows(latency)}
        </tbody>
      </table>
    </div>

    <div class="section">
      <h2>Endpoints</h2>
      <div class="controls">
        <input type="text" id="searchInput" placeholder="Search endpoints...">
        <select id="statusFilter">
          <option value="">All statuses</option>
          <option value="PASSED">PASSED</option>
          <option value="FAILED">FAILED</option>
        </select>
      </div>
      <table id="endpointTable">
        <thead>
          <tr>
            <th class="sortable" onclick="sortTable(0)">#</th>
            <th class="sortable" onclick="sortTable(1)">Method</th>
            <th class="sortable" onclick="sortTable(2)">URL</th>
            <th class="sortable" onclick="sortTable(3)">Status</th>
            <th class="sortable" onclick="sortTable(4)">Time (ms)</th>
            <th class="sortable" onclick="sortTable(5)">Expected</th>
            <th class="sortable" onclick="sortTable(6)">Received</th>
          </tr>
        </thead>
        <tbody id="endpointRows">
          {render_endpoint_rows(summary, base_url)}
        </tbody>
      </table>
      <div class="table-info" id="tableInfo">Showing {summary.total} of {summary.total} endpoints</div>
    </div>
  </div>
</div>
<script>{_SCRIPT}</script>
</body>
</html>
"""


def write_html_report(
    result: "PipelineResult",
    report_dir: Path,
    prefix: str,
    title: str,
    base_url: str,
    now: Optional[datetime] = None,
) -> Path:
    """Render and write ``<prefix>_<stamp>.html`` into ``report_dir``.

    Raises:
        ReportRenderError: If rendering fails.
        ReportWriteError: If the file cannot be written.
    """
    document = render_html(result, title=title, base_url=base_url)
    return write_text(report_path(report_dir, prefix, ".html", now=now), document)
