"""Data models for the performance sampler module."""

from dataclasses import dataclass, field
from typing import Any, Optional

# Recorded instead of a duration when the request never got a response.
FAILED_SAMPLE = -1.0


@dataclass(frozen=True)
class SamplePlan:
    """One timed request in a performance plan."""

    name: str
    method: str
    path: str
    body: Optional[dict[str, Any]] = None


@dataclass
class LatencySummary:
    """Ordered latency samples and the statistics derived from them.

    Attributes:
        samples: Sample name -> milliseconds, in plan order.
            ``FAILED_SAMPLE`` marks a transport failure.
        planned: Number of samples the plan intended to take.
    """

    samples: dict[str, float] = field(default_factory=dict)
    planned: int = 0

    def record(self, name: str, duration_ms: float) -> None:
        self.samples[name] = duration_ms

    @property
    def valid_samples(self) -> list[float]:
        return [value for value in self.samples.values() if value >= 0]

    @property
    def successful_tests(self) -> int:
        return len(self.valid_samples)

    @property
    def average_ms(self) -> float:
        valid = self.valid_samples
        if not valid:
            return 0.0
        return sum(valid) / len(valid)

    @property
    def min_ms(self) -> float:
        return min(self.valid_samples, default=0.0)

    @property
    def max_ms(self) -> float:
        return max(self.valid_samples, default=0.0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "samples": dict(self.samples),
            "planned": self.planned,
            "successful_tests": self.successful_tests,
            "average_ms": self.average_ms,
            "min_ms": self.min_ms,
            "max_ms": self.max_ms,
        }
