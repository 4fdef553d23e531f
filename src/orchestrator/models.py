"""Data models for pipeline execution results."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Union

from src.endpoints import EndpointTestSummary
from src.performance import LatencySummary

StepPayload = Union[bool, EndpointTestSummary, LatencySummary, None]


class StepName(str, Enum):
    """Names of every step either pipeline can record."""

    CHECK_PREREQUISITES = "CheckPrerequisites"
    BUILD_APPLICATION_IMAGE = "BuildApplicationImage"
    INITIALIZE_DATABASE = "InitializeDatabase"
    LOAD_TEST_DATA = "LoadTestData"
    BUILD_ANGULAR_APPLICATION = "BuildAngularApplication"
    START_MOCK_SERVICES = "StartMockServices"
    HEALTH_CHECKS = "HealthChecks"
    API_TESTS = "APITests"
    PERFORMANCE_TESTS = "PerformanceTests"
    RELOAD_TEST_DATA = "ReloadTestData"
    DISPLAY_DETAILED_RESULTS = "DisplayDetailedResults"
    CLEANUP_OLD_REPORTS = "CleanupOldReports"
    GENERATE_HTML_REPORT = "GenerateHTMLReport"
    GENERATE_EXCEL_REPORT = "GenerateExcelReport"
    OPEN_REPORT_IN_BROWSER = "OpenReportInBrowser"


@dataclass
class StepOutcome:
    """Explicit success or failure returned by a step operation."""

    success: bool
    payload: StepPayload = None
    error: Optional[str] = None
    skipped: bool = False

    @classmethod
    def ok(cls, payload: StepPayload = None) -> "StepOutcome":
        return cls(success=True, payload=payload)

    @classmethod
    def failed(cls, error: str, payload: StepPayload = None) -> "StepOutcome":
        return cls(success=False, payload=payload, error=error or "unknown error")

    @classmethod
    def skip(cls, payload: StepPayload = None) -> "StepOutcome":
        return cls(success=True, payload=payload, skipped=True)


@dataclass
class Step:
    """Result of a single pipeline step.

    ``error`` is None exactly when ``success`` is True. A skipped step
    counts as successful.
    """

    name: str
    success: bool
    duration_seconds: float
    result: StepPayload = None
    error: Optional[str] = None
    skipped: bool = False


@dataclass
class PipelineResult:
    """Aggregate result of a full pipeline run."""

    started_at: datetime = field(default_factory=lambda: datetime.now().astimezone())
    finished_at: Optional[datetime] = None
    total_duration_seconds: float = 0.0
    steps: dict[str, Step] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return all(step.success for step in self.steps.values())

    def record(self, step: Step) -> None:
        self.steps[step.name] = step

    def finalize(self) -> None:
        """Stamp the end time and total duration."""
        self.finished_at = datetime.now().astimezone()
        self.total_duration_seconds = round(
            (self.finished_at - self.started_at).total_seconds(), 2
        )

    @property
    def endpoint_summary(self) -> Optional[EndpointTestSummary]:
        step = self.steps.get(StepName.API_TESTS.value)
        if step is not None and isinstance(step.result, EndpointTestSummary):
            return step.result
        return None

    @property
    def latency_summary(self) -> Optional[LatencySummary]:
        step = self.steps.get(StepName.PERFORMANCE_TESTS.value)
        if step is not None and isinstance(step.result, LatencySummary):
            return step.result
        return None
