"""Data models for the endpoint exerciser module."""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class EndpointCase:
    """A static HTTP request template plus its expected outcome.

    Attributes:
        method: HTTP verb (GET, POST, PUT, DELETE).
        path: Path relative to the base URL. May contain ``{id}`` and
            ``{mediaId}`` placeholders and query strings.
        description: Human-readable label shown in reports.
        expected_status: Status code that makes the case pass.
        category: Grouping label (e.g. "Itineraries", "Actuator").
        body: JSON body sent with the request, if any.
        upload: Send the configured test image as multipart field ``file``.
    """

    method: str
    path: str
    description: str
    expected_status: int
    category: str
    body: Optional[dict[str, Any]] = None
    upload: bool = False


@dataclass
class CaseResult:
    """Outcome of exercising a single EndpointCase."""

    method: str
    path: str
    description: str
    category: str
    expected_status: int
    status_code: Optional[int] = None
    elapsed_ms: Optional[int] = None
    error: Optional[str] = None

    @property
    def passed(self) -> bool:
        return self.error is None and self.status_code == self.expected_status

    @property
    def line(self) -> str:
        """Result line in the ``<METHOD> <path> - PASSED|FAILED (...)`` form."""
        prefix = f"{self.method} {self.path}"
        if self.error is not None:
            return f"{prefix} - FAILED ({self.error})"
        if self.passed:
            return f"{prefix} - PASSED ({self.elapsed_ms}ms)"
        return f"{prefix} - FAILED (Expected: {self.expected_status}, Got: {self.status_code})"

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "method": self.method,
            "path": self.path,
            "description": self.description,
            "category": self.category,
            "expected_status": self.expected_status,
            "status_code": self.status_code,
            "elapsed_ms": self.elapsed_ms,
            "passed": self.passed,
            "error": self.error,
            "line": self.line,
        }


@dataclass
class EndpointTestSummary:
    """Aggregate of one exerciser run.

    ``passed + failed == total`` always holds; an empty summary reports a
    100% success rate.
    """

    cases: list[CaseResult] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.cases)

    @property
    def passed(self) -> int:
        return sum(1 for case in self.cases if case.passed)

    @property
    def failed(self) -> int:
        return self.total - self.passed

    @property
    def success_rate(self) -> float:
        if self.total == 0:
            return 100.0
        return self.passed / self.total * 100

    @property
    def details(self) -> list[str]:
        return [case.line for case in self.cases]

    def add(self, case: CaseResult) -> None:
        self.cases.append(case)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "success_rate": self.success_rate,
            "details": self.details,
        }
