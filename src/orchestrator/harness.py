"""Step harness: timing, fault isolation, and result recording."""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional

from src.config import PipelineConfig
from src.logging_config import SUCCESS

from .models import PipelineResult, Step, StepName, StepOutcome

logger = logging.getLogger(__name__)


def describe_fault(exc: BaseException) -> str:
    """Human-readable description of an exception raised by a step."""
    return str(exc) or type(exc).__name__


def normalize_outcome(name: str, value: Any) -> StepOutcome:
    """Turn whatever a step operation returned into a StepOutcome.

    A StepOutcome is kept as-is, ``True``/``False`` map to ok/failed, and
    any other value becomes the payload of an ok outcome.
    """
    if isinstance(value, StepOutcome):
        return value
    if value is True:
        return StepOutcome.ok(True)
    if value is False:
        return StepOutcome.failed(f"{name} reported failure", payload=False)
    return StepOutcome.ok(value)


@dataclass
class PipelineContext:
    """Shared state for one pipeline run.

    Attributes:
        config: Configuration the run was started with.
        result: Result map the harness records steps into.
        artifacts: Report files written so far, in creation order.
    """

    config: PipelineConfig
    result: PipelineResult = field(default_factory=PipelineResult)
    artifacts: list[Path] = field(default_factory=list)
    log: logging.Logger = logger

    def execute_step(self, name: str, operation: Callable[[], Any]) -> Step:
        """Run a pipeline step with timing and error isolation.

        A raised exception becomes a failed step; it never propagates and
        never prevents later steps from running.
        """
        step_name = name.value if isinstance(name, StepName) else name
        self.log.info("Starting step: %s", step_name)

        start = time.monotonic()
        try:
            outcome = normalize_outcome(step_name, operation())
        except Exception as e:
            self.log.exception("Step %s raised", step_name)
            outcome = StepOutcome.failed(describe_fault(e))
        duration = max(time.monotonic() - start, 0.0)

        step = Step(
            name=step_name,
            success=outcome.success,
            duration_seconds=round(duration, 2),
            result=outcome.payload,
            error=None if outcome.success else (outcome.error or f"{step_name} reported failure"),
            skipped=outcome.skipped,
        )
        self.result.record(step)

        if step.skipped:
            self.log.info("Step %s skipped", step_name)
        elif step.success:
            self.log.log(SUCCESS, "Step %s completed successfully in %.2f seconds", step_name, duration)
        else:
            self.log.error("Step %s failed: %s", step_name, step.error)
        return step

    def add_artifact(self, path: Path) -> None:
        self.artifacts.append(path)

    def latest_artifact(self, suffix: str) -> Optional[Path]:
        for path in reversed(self.artifacts):
            if path.suffix == suffix:
                return path
        return None
