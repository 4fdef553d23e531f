"""HealthProber pings health endpoints; a failed probe is never fatal."""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

import httpx

from src.logging_config import SUCCESS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HealthCheck:
    """A named endpoint expected to answer 200.

    ``url`` is a path relative to the client base URL, or an absolute URL.
    """

    name: str
    url: str


ITINERARY_HEALTH_CHECKS = (
    HealthCheck("Service health", "/actuator/health"),
    HealthCheck("Database health", "/actuator/health/db"),
    HealthCheck("Redis health", "/actuator/health/redis"),
)

WEB_HEALTH_CHECKS = (HealthCheck("Mock API health", "/api/health"),)


class HealthProber:
    """Runs health probes against the target.

    Example:
        prober = HealthProber(client)
        prober.probe_all(ITINERARY_HEALTH_CHECKS)
    """

    def __init__(self, client: httpx.Client, sleep: Callable[[float], None] = time.sleep):
        self._client = client
        self._sleep = sleep

    def probe(self, check: HealthCheck) -> bool:
        try:
            response = self._client.get(check.url)
        except httpx.HTTPError as e:
            logger.debug("%s probe error: %s", check.name, e)
            return False
        return response.status_code == 200

    def probe_all(
        self,
        checks: Sequence[HealthCheck],
        warning_checks: Sequence[HealthCheck] = (),
    ) -> dict[str, bool]:
        """Probe every check and log the outcome.

        Args:
            checks: Probes whose failure is logged as an error.
            warning_checks: Probes whose failure is only a warning.

        Returns:
            Check name -> healthy flag, in probe order.
        """
        logger.info("Running health checks...")
        results: dict[str, bool] = {}

        for check in checks:
            healthy = self.probe(check)
            results[check.name] = healthy
            if healthy:
                logger.log(SUCCESS, "%s: OK", check.name)
            else:
                logger.error("%s: FAILED", check.name)

        for check in warning_checks:
            healthy = self.probe(check)
            results[check.name] = healthy
            if healthy:
                logger.log(SUCCESS, "%s: OK", check.name)
            else:
                logger.warning("%s: NOT AVAILABLE", check.name)

        if all(results.values()):
            logger.log(SUCCESS, "All health checks passed")
        else:
            logger.warning("Some health checks failed")
        return results

    def wait_until_ready(
        self,
        check: HealthCheck,
        attempts: int = 30,
        interval_seconds: float = 2.0,
    ) -> bool:
        """Poll ``check`` until it answers 200 or the attempts run out."""
        for attempt in range(1, attempts + 1):
            if self.probe(check):
                logger.log(SUCCESS, "Service is ready")
                return True
            if attempt < attempts:
                logger.info("Waiting for service... (%d/%d)", attempt, attempts)
                self._sleep(interval_seconds)
        logger.error("Service did not become ready in time")
        return False


def frontend_check(url: Optional[str]) -> tuple[HealthCheck, ...]:
    if not url:
        return ()
    return (HealthCheck("Frontend", url),)
