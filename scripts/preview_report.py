#!/usr/bin/env python3
"""Render sample HTML and Excel reports without any running services.

Useful for checking report layout after template changes. Writes the
files into the given directory (default: ./preview-reports).

Run from project root:
    python scripts/preview_report.py [output-dir]
"""

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent

sys.path.insert(0, str(PROJECT_ROOT))
from src.endpoints import ITINERARY_CASES, CaseResult, EndpointTestSummary
from src.orchestrator import PipelineResult, Step, StepName
from src.performance import FAILED_SAMPLE, LatencySummary
from src.reports import write_excel_report, write_html_report

PREFIX = "MusafirGO_Pipeline_Report_Preview"


def sample_result() -> PipelineResult:
    summary = EndpointTestSummary()
    for index, case in enumerate(ITINERARY_CASES[:12]):
        received = case.expected_status if index % 4 else 500
        summary.add(
            CaseResult(
                method=case.method,
                path=case.path,
                description=case.description,
                category=case.category,
                expected_status=case.expected_status,
                status_code=received,
                elapsed_ms=20 + index * 7,
            )
        )

    latency = LatencySummary(planned=4)
    latency.record("Health Check", 12.0)
    latency.record("List Itineraries", 48.0)
    latency.record("Search by City", 35.0)
    latency.record("Swagger UI", FAILED_SAMPLE)

    result = PipelineResult()
    result.record(Step(StepName.CHECK_PREREQUISITES.value, True, 0.4, True))
    result.record(Step(StepName.INITIALIZE_DATABASE.value, True, 0.0, skipped=True))
    result.record(Step(StepName.API_TESTS.value, True, 3.1, summary))
    result.record(Step(StepName.PERFORMANCE_TESTS.value, True, 0.9, latency))
    result.record(
        Step(StepName.BUILD_APPLICATION_IMAGE.value, False, 1.2, False, error="'docker-compose build' exited with code 1")
    )
    result.finalize()
    return result


def main() -> int:
    out_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else PROJECT_ROOT / "preview-reports"
    result = sample_result()

    html_path = write_html_report(
        result,
        report_dir=out_dir,
        prefix=PREFIX,
        title="MusafirGO Pipeline Report (preview)",
        base_url="http://localhost:8080",
    )
    xlsx_path = write_excel_report(result, ITINERARY_CASES, report_dir=out_dir, prefix=PREFIX)

    print(f"HTML:  {html_path}")
    print(f"Excel: {xlsx_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
