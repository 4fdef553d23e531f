"""PerformanceSampler for timing a fixed set of requests."""

import logging
import time
from typing import Iterable, Optional

import httpx

from src.logging_config import SUCCESS

from .models import FAILED_SAMPLE, LatencySummary, SamplePlan
from .plans import THROWAWAY_ITINERARY_BODY, THROWAWAY_SAMPLE_COUNT, throwaway_plan

logger = logging.getLogger(__name__)


class PerformanceSampler:
    """Times single requests and summarizes their latency.

    Any HTTP response counts as a sample regardless of status; only a
    transport failure records ``FAILED_SAMPLE``.
    """

    def __init__(self, client: httpx.Client):
        self._client = client

    def measure(self, plan: SamplePlan) -> float:
        """Time one request in milliseconds, or return ``FAILED_SAMPLE``."""
        start = time.monotonic()
        try:
            if plan.body is not None:
                self._client.request(plan.method, plan.path, json=plan.body)
            else:
                self._client.request(plan.method, plan.path)
        except httpx.HTTPError as e:
            logger.error("  - %s - FAILED (%s)", plan.name, e)
            return FAILED_SAMPLE

        duration_ms = round((time.monotonic() - start) * 1000, 2)
        logger.log(SUCCESS, "  - %s - %.2f ms", plan.name, duration_ms)
        return duration_ms

    def run(self, plans: Iterable[SamplePlan], planned: Optional[int] = None) -> LatencySummary:
        plans = list(plans)
        summary = LatencySummary(planned=planned if planned is not None else len(plans))
        for plan in plans:
            summary.record(plan.name, self.measure(plan))
        return summary

    def _create_throwaway_itinerary(self) -> Optional[str]:
        try:
            response = self._client.post("/api/itineraries", json=THROWAWAY_ITINERARY_BODY)
        except httpx.HTTPError as e:
            logger.warning("Could not create throwaway itinerary: %s", e)
            return None
        if response.status_code != 201:
            logger.warning(
                "Throwaway itinerary creation returned %d, skipping dependent samples",
                response.status_code,
            )
            return None
        try:
            body = response.json()
        except ValueError:
            logger.warning("Throwaway itinerary response was not JSON")
            return None
        if not isinstance(body, dict):
            logger.warning("Throwaway itinerary response was not a JSON object")
            return None
        itinerary_id = body.get("id")
        return str(itinerary_id) if itinerary_id else None

    def run_itinerary(self, plans: Iterable[SamplePlan]) -> LatencySummary:
        """Run the itinerary plan, then sample against a throwaway itinerary.

        The dependent samples are only taken when creation returned 201 with
        an ``id``; the throwaway itinerary is deleted afterwards.
        """
        plans = list(plans)
        summary = self.run(plans, planned=len(plans) + THROWAWAY_SAMPLE_COUNT)

        itinerary_id = self._create_throwaway_itinerary()
        if itinerary_id is None:
            return summary

        for plan in throwaway_plan(itinerary_id):
            summary.record(plan.name, self.measure(plan))

        try:
            self._client.delete(f"/api/itineraries/{itinerary_id}")
        except httpx.HTTPError as e:
            logger.warning("Could not delete throwaway itinerary %s: %s", itinerary_id, e)
        return summary

    @staticmethod
    def log_summary(summary: LatencySummary) -> None:
        logger.info("=== PERFORMANCE RESULTS ===")
        logger.info("Successful samples: %d/%d", summary.successful_tests, summary.planned)
        logger.info("Average: %.2f ms", summary.average_ms)
        logger.info("Min: %.2f ms", summary.min_ms)
        logger.info("Max: %.2f ms", summary.max_ms)
