"""Endpoint exerciser module for smoke-testing documented HTTP routes.

Public API:
    EndpointExerciser: Runs a case table and tallies pass/fail.
    EndpointCase: Static request template plus expected status.
    CaseResult: Outcome of a single case.
    EndpointTestSummary: Aggregate counts, success rate, and result lines.
    ITINERARY_CASES: Case table for the itinerary service.
    WEB_CASES: Case table for the web mock API.
"""

from .catalog import ITINERARY_CASES, WEB_CASES, endpoint_catalog
from .exerciser import EndpointExerciser
from .models import CaseResult, EndpointCase, EndpointTestSummary

__all__ = [
    "EndpointExerciser",
    "EndpointCase",
    "CaseResult",
    "EndpointTestSummary",
    "ITINERARY_CASES",
    "WEB_CASES",
    "endpoint_catalog",
]
