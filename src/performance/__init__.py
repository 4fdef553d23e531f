"""Performance sampler module for latency measurements.

Public API:
    PerformanceSampler: Times requests from a plan.
    LatencySummary: Ordered samples with average/min/max statistics.
    SamplePlan: One timed request.
    ITINERARY_PLAN: Base plan for the itinerary service.
    WEB_PLAN: Plan for the web mock API.
"""

from .models import FAILED_SAMPLE, LatencySummary, SamplePlan
from .plans import ITINERARY_PLAN, WEB_PLAN
from .sampler import PerformanceSampler

__all__ = [
    "PerformanceSampler",
    "LatencySummary",
    "SamplePlan",
    "FAILED_SAMPLE",
    "ITINERARY_PLAN",
    "WEB_PLAN",
]
