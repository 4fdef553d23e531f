"""End-to-end tests for ItineraryPipeline and WebPipeline with faked collaborators."""

from unittest.mock import MagicMock

import httpx
import pytest

from src.config import Target
from src.orchestrator import ItineraryPipeline, StepName, WebPipeline

from tests.pipeline_test_helpers import FakeRunner, NoSleep, fail, make_config, mock_client, ok

ITINERARY_STEPS = [
    "CheckPrerequisites",
    "BuildApplicationImage",
    "InitializeDatabase",
    "LoadTestData",
    "HealthChecks",
    "APITests",
    "PerformanceTests",
    "ReloadTestData",
    "DisplayDetailedResults",
    "CleanupOldReports",
    "GenerateHTMLReport",
    "GenerateExcelReport",
    "OpenReportInBrowser",
]

WEB_STEPS = [
    "CheckPrerequisites",
    "BuildAngularApplication",
    "StartMockServices",
    "HealthChecks",
    "APITests",
    "PerformanceTests",
    "CleanupOldReports",
    "GenerateHTMLReport",
]

BUILD = ("docker-compose", "build", "--no-cache", "itinerary-service")


def _always(status: int):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status)

    return handler


def _itinerary_pipeline(tmp_path, runner=None, opener=None, handler=None, **overrides):
    settings = dict(
        report_dir=tmp_path,
        skip_init=True,
        skip_data_load=True,
        skip_tests=True,
        open_report=False,
    )
    settings.update(overrides)
    config = make_config(**settings)
    return ItineraryPipeline(
        config,
        runner=runner or FakeRunner(),
        http_client=mock_client(handler or _always(200)),
        sleep=NoSleep(),
        browser_opener=opener or MagicMock(return_value=True),
        platform="linux",
    )


class TestItineraryPipeline:
    def test_all_skipped_run(self, tmp_path):
        result = _itinerary_pipeline(tmp_path).run()

        assert list(result.steps) == ITINERARY_STEPS
        assert result.success is True
        assert result.finished_at is not None

        api = result.steps["APITests"]
        assert api.skipped is True
        assert api.result.total == 0
        assert api.result.success_rate == 100.0

        for name in ("InitializeDatabase", "LoadTestData", "ReloadTestData", "OpenReportInBrowser"):
            assert result.steps[name].skipped is True

        assert len(list(tmp_path.glob("Test_Report_*.html"))) == 1
        assert len(list(tmp_path.glob("Test_Report_*.xlsx"))) == 1

    def test_performance_runs_when_tests_skipped(self, tmp_path):
        result = _itinerary_pipeline(tmp_path).run()

        latency = result.steps[StepName.PERFORMANCE_TESTS.value].result
        assert latency.planned == 16
        assert latency.successful_tests == 10

    def test_build_failure_does_not_stop_later_steps(self, tmp_path):
        runner = FakeRunner({BUILD: fail(stderr="build error")})
        result = _itinerary_pipeline(tmp_path, runner=runner).run()

        build = result.steps["BuildApplicationImage"]
        assert build.success is False
        assert "build error" in build.error
        assert list(result.steps) == ITINERARY_STEPS
        assert result.steps["GenerateHTMLReport"].success is True
        assert result.success is False

    def test_missing_prerequisite_fails_first_step(self, tmp_path):
        runner = FakeRunner({("docker-compose", "--version"): fail(127)})
        result = _itinerary_pipeline(tmp_path, runner=runner).run()

        assert result.steps["CheckPrerequisites"].success is False
        assert result.steps["CheckPrerequisites"].error == "CheckPrerequisites reported failure"
        assert len(result.steps) == len(ITINERARY_STEPS)

    def test_api_tests_run_full_table(self, tmp_path):
        result = _itinerary_pipeline(tmp_path, skip_tests=False).run()

        summary = result.steps["APITests"].result
        assert summary.total == 56
        assert summary.passed + summary.failed == summary.total
        assert result.steps["APITests"].success is True

    def test_report_opened_in_browser(self, tmp_path):
        opener = MagicMock(return_value=True)
        result = _itinerary_pipeline(tmp_path, opener=opener, open_report=True).run()

        assert result.steps["OpenReportInBrowser"].success is True
        opened_uri = opener.call_args[0][0]
        assert opened_uri.startswith("file://")
        assert opened_uri.endswith(".html")

    def test_browser_failure_is_not_a_step_failure(self, tmp_path):
        opener = MagicMock(return_value=False)
        result = _itinerary_pipeline(tmp_path, opener=opener, open_report=True).run()

        step = result.steps["OpenReportInBrowser"]
        assert step.success is True
        assert step.skipped is False

    def test_unwritable_report_dir(self, tmp_path):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("x")
        result = _itinerary_pipeline(tmp_path, report_dir=blocker, open_report=True).run()

        assert result.steps["GenerateHTMLReport"].success is False
        assert result.steps["GenerateExcelReport"].success is False
        assert result.steps["OpenReportInBrowser"].error == "No HTML report found to open"
        assert result.success is False

    def test_full_bootstrap(self, tmp_path):
        runner = FakeRunner(
            {("docker-compose", "ps", "--services", "--filter", "status=running"): ok("a\nb\nc\n")}
        )
        result = _itinerary_pipeline(
            tmp_path, runner=runner, skip_init=False, skip_data_load=False
        ).run()

        assert result.success is True
        assert result.steps["InitializeDatabase"].skipped is False
        psql_calls = [cmd for cmd in runner.commands if "psql" in cmd]
        assert len(psql_calls) == 2

    def test_unready_service_fails_data_load(self, tmp_path):
        result = _itinerary_pipeline(tmp_path, handler=_always(503), skip_data_load=False).run()

        assert result.steps["LoadTestData"].success is False
        assert "Services not ready" in result.steps["LoadTestData"].error
        assert result.steps["HealthChecks"].success is True


class TestWebPipeline:
    @pytest.fixture
    def runner(self):
        ps = (
            "docker-compose",
            "-f",
            "docker-compose.dev.yml",
            "ps",
            "--services",
            "--filter",
            "status=running",
        )
        return FakeRunner({ps: ok("mock-api\nnginx\n")})

    def _pipeline(self, tmp_path, runner, **overrides):
        config = make_config(Target.WEB, report_dir=tmp_path, **overrides)
        sleep = NoSleep()
        pipeline = WebPipeline(
            config,
            runner=runner,
            http_client=mock_client(_always(200)),
            sleep=sleep,
            platform="linux",
        )
        return pipeline, sleep

    def test_full_run(self, tmp_path, runner):
        pipeline, sleep = self._pipeline(tmp_path, runner)

        result = pipeline.run()

        assert list(result.steps) == WEB_STEPS
        assert result.success is True
        assert ("node", "--version") in runner.commands
        assert ("ng", "version") in runner.commands
        assert ("ng", "build", "--configuration", "production") in runner.commands
        assert sleep.calls == [30.0]
        assert result.steps["APITests"].result.total == 18
        assert len(result.steps["PerformanceTests"].result.samples) == 6
        assert len(list(tmp_path.glob("Test_Report_*.html"))) == 1

    def test_skip_init_skips_mock_services(self, tmp_path, runner):
        pipeline, sleep = self._pipeline(tmp_path, runner, skip_init=True)

        result = pipeline.run()

        assert result.steps["StartMockServices"].skipped is True
        assert sleep.calls == []

    def test_missing_angular_cli(self, tmp_path, runner):
        runner.responses[("ng", "version")] = fail(127)
        pipeline, _ = self._pipeline(tmp_path, runner)

        result = pipeline.run()

        assert result.steps["CheckPrerequisites"].success is False
        assert ("node", "--version") in runner.commands
        assert result.success is False
