"""Detailed console (log) rendering of a run."""

import logging
from typing import TYPE_CHECKING

from src.endpoints import EndpointTestSummary
from src.logging_config import SUCCESS
from src.performance import LatencySummary

if TYPE_CHECKING:
    from src.orchestrator.models import PipelineResult

logger = logging.getLogger(__name__)


def display_detailed_results(result: "PipelineResult") -> bool:
    """Log API results, latency samples, and step statuses recorded so far."""
    summary = result.endpoint_summary or EndpointTestSummary()
    latency = result.latency_summary or LatencySummary()

    logger.info("=== DETAILED API RESULTS ===")
    logger.info(
        "Total: %d | Passed: %d | Failed: %d | Success rate: %.2f%%",
        summary.total,
        summary.passed,
        summary.failed,
        summary.success_rate,
    )
    for case in summary.cases:
        if case.passed:
            logger.log(SUCCESS, "  %s", case.line)
        else:
            logger.error("  %s", case.line)

    logger.info("=== DETAILED PERFORMANCE RESULTS ===")
    for name, value in latency.samples.items():
        if value < 0:
            logger.error("  %s: FAILED", name)
        else:
            logger.info("  %s: %.2f ms", name, value)
    logger.info(
        "Average: %.2f ms | Min: %.2f ms | Max: %.2f ms | Successful: %d/%d",
        latency.average_ms,
        latency.min_ms,
        latency.max_ms,
        latency.successful_tests,
        latency.planned,
    )

    logger.info("=== STEP STATUS ===")
    for step in result.steps.values():
        if step.skipped:
            logger.info("  %s: SKIPPED", step.name)
        elif step.success:
            logger.log(SUCCESS, "  %s: OK (%.2fs)", step.name, step.duration_seconds)
        else:
            logger.error("  %s: FAILED (%.2fs) %s", step.name, step.duration_seconds, step.error)
    return True
