"""Health prober module.

Public API:
    HealthProber: Probes health endpoints and polls for readiness.
    HealthCheck: A named endpoint expected to answer 200.
"""

from .prober import (
    ITINERARY_HEALTH_CHECKS,
    WEB_HEALTH_CHECKS,
    HealthCheck,
    HealthProber,
    frontend_check,
)

__all__ = [
    "HealthProber",
    "HealthCheck",
    "ITINERARY_HEALTH_CHECKS",
    "WEB_HEALTH_CHECKS",
    "frontend_check",
]
