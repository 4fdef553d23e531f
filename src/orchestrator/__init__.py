"""Pipeline orchestrator for the local smoke-test pipelines.

Runs the itinerary and web pipelines step by step through a harness that
times every step, converts faults into failed steps, and aggregates the
results.
"""

from .harness import PipelineContext, describe_fault, normalize_outcome
from .models import PipelineResult, Step, StepName, StepOutcome
from .pipeline import BasePipeline, ItineraryPipeline, WebPipeline

__all__ = [
    "BasePipeline",
    "ItineraryPipeline",
    "WebPipeline",
    "PipelineContext",
    "PipelineResult",
    "Step",
    "StepName",
    "StepOutcome",
    "describe_fault",
    "normalize_outcome",
]
