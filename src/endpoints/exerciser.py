"""EndpointExerciser runs a case table against a live base URL."""

import logging
import time
from pathlib import Path
from typing import Iterable, Optional

import httpx

from src.config import IdentifierSet
from src.logging_config import SUCCESS

from .models import CaseResult, EndpointCase, EndpointTestSummary

logger = logging.getLogger(__name__)


class EndpointExerciser:
    """Issues one HTTP request per EndpointCase and tallies the outcomes.

    A case passes iff the observed status code equals the expected one.
    Transport errors and an unreadable upload file are recorded as failed
    cases; nothing raised by a single case stops the run.
    """

    def __init__(
        self,
        client: httpx.Client,
        identifiers: Optional[IdentifierSet] = None,
        test_image_path: Optional[Path] = None,
    ):
        """Initialize the EndpointExerciser.

        Args:
            client: httpx client already bound to the target base URL.
            identifiers: Placeholder and alias substitutions for paths.
            test_image_path: File sent for ``upload`` cases.
        """
        self._client = client
        self._identifiers = identifiers or IdentifierSet.with_legacy_aliases()
        self._test_image_path = test_image_path or Path("test-image.png")

    def resolve_path(self, case: EndpointCase) -> str:
        return self._identifiers.resolve(case.path)

    def _send(self, case: EndpointCase, path: str) -> httpx.Response:
        if case.upload:
            content = self._test_image_path.read_bytes()
            files = {"file": (self._test_image_path.name, content, "image/png")}
            return self._client.request(case.method, path, files=files)
        if case.body is not None:
            return self._client.request(case.method, path, json=case.body)
        return self._client.request(case.method, path)

    def exercise(self, case: EndpointCase) -> CaseResult:
        """Run a single case and classify the response."""
        path = self.resolve_path(case)
        result = CaseResult(
            method=case.method,
            path=path,
            description=case.description,
            category=case.category,
            expected_status=case.expected_status,
        )

        start = time.monotonic()
        try:
            response = self._send(case, path)
        except OSError as e:
            result.error = f"Could not open test image: {e}"
        except httpx.HTTPError as e:
            result.error = str(e) or type(e).__name__
        else:
            result.status_code = response.status_code
            result.elapsed_ms = int((time.monotonic() - start) * 1000)

        if result.passed:
            logger.log(SUCCESS, result.line)
        else:
            logger.error(result.line)
        return result

    def run(self, cases: Iterable[EndpointCase]) -> EndpointTestSummary:
        """Exercise every case in declaration order.

        Returns:
            EndpointTestSummary with one CaseResult per case.
        """
        summary = EndpointTestSummary()
        for case in cases:
            summary.add(self.exercise(case))

        logger.info("=== API TEST RESULTS ===")
        logger.info("Total Tests: %d", summary.total)
        logger.info("Passed: %d", summary.passed)
        logger.info("Failed: %d", summary.failed)
        logger.info("Success Rate: %.2f%%", summary.success_rate)
        return summary
