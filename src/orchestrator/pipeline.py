"""Itinerary and web pipelines - connect modules into a single run."""

import logging
import time
import webbrowser
from typing import Any, Callable, Optional

import httpx

from src.config import PipelineConfig
from src.endpoints import ITINERARY_CASES, WEB_CASES, EndpointExerciser, EndpointTestSummary
from src.health import (
    ITINERARY_HEALTH_CHECKS,
    WEB_HEALTH_CHECKS,
    HealthCheck,
    HealthProber,
    frontend_check,
)
from src.infra import (
    ANGULAR_CHECK,
    COMPOSE_CHECK_NAME,
    NODE_CHECK,
    CommandRunner,
    ComposeStack,
    DockerEngine,
    ItineraryBootstrapper,
    PrerequisiteChecker,
    ToolCheck,
    WebBootstrapper,
)
from src.logging_config import SUCCESS
from src.performance import ITINERARY_PLAN, WEB_PLAN, PerformanceSampler
from src.reports import (
    cleanup_old_reports,
    display_detailed_results,
    latest_report,
    open_in_browser,
    write_excel_report,
    write_html_report,
)

from .harness import PipelineContext
from .models import PipelineResult, StepName, StepOutcome

logger = logging.getLogger(__name__)

StepList = list[tuple[StepName, Callable[[], Any]]]


class BasePipeline:
    """Runs a fixed list of steps through the step harness.

    Every step runs regardless of earlier failures; overall success is
    the conjunction of step successes. Collaborators are created lazily
    and can be injected for tests.

    Example:
        result = ItineraryPipeline(load_config()).run()
        print(f"Success: {result.success}")
    """

    title = "MusafirGO Pipeline Report"

    def __init__(
        self,
        config: PipelineConfig,
        runner: Optional[CommandRunner] = None,
        http_client: Optional[httpx.Client] = None,
        sleep: Callable[[float], None] = time.sleep,
        browser_opener: Callable[..., bool] = webbrowser.open,
        platform: Optional[str] = None,
    ):
        self._config = config
        self._runner = runner
        self._http_client = http_client
        self._owns_client = False
        self._sleep = sleep
        self._browser_opener = browser_opener
        self._platform = platform
        self._stack: Optional[ComposeStack] = None
        self._context: Optional[PipelineContext] = None

    @property
    def config(self) -> PipelineConfig:
        return self._config

    def _get_runner(self) -> CommandRunner:
        if self._runner is None:
            self._runner = CommandRunner()
        return self._runner

    def _get_client(self) -> httpx.Client:
        if self._http_client is None:
            self._http_client = httpx.Client(
                base_url=self._config.base_url,
                timeout=self._config.http_timeout_seconds,
            )
            self._owns_client = True
        return self._http_client

    def _get_stack(self) -> ComposeStack:
        if self._stack is None:
            self._stack = ComposeStack(
                self._get_runner(),
                command=self._config.compose_command,
                compose_file=self._config.compose_file,
                project_dir=self._config.compose_project_dir,
            )
        return self._stack

    def _get_prober(self) -> HealthProber:
        return HealthProber(self._get_client(), sleep=self._sleep)

    @property
    def context(self) -> PipelineContext:
        if self._context is None:
            raise RuntimeError("Pipeline is not running")
        return self._context

    def _tool_checks(self) -> list[ToolCheck]:
        return [ToolCheck(COMPOSE_CHECK_NAME, tuple(self._config.compose_command) + ("--version",))]

    def _steps(self) -> StepList:
        raise NotImplementedError

    # Shared steps

    def check_prerequisites(self) -> bool:
        runner = self._get_runner()
        engine = DockerEngine(runner, platform=self._platform, sleep=self._sleep)
        return PrerequisiteChecker(runner, engine, self._tool_checks()).check()

    def run_api_tests(self, cases) -> StepOutcome:
        if self._config.skip_tests:
            logger.info("Skipping API tests...")
            return StepOutcome.skip(EndpointTestSummary())
        logger.info("Running API tests for %d documented endpoints...", len(cases))
        exerciser = EndpointExerciser(
            self._get_client(),
            identifiers=self._config.identifiers,
            test_image_path=self._config.test_image_path,
        )
        return StepOutcome.ok(exerciser.run(cases))

    def cleanup_reports(self) -> bool:
        cleanup_old_reports(self._config.report_dir, self._config.report_prefix)
        return True

    def generate_html_report(self) -> bool:
        path = write_html_report(
            self.context.result,
            report_dir=self._config.report_dir,
            prefix=self._config.report_prefix,
            title=self.title,
            base_url=self._config.base_url,
        )
        self.context.add_artifact(path)
        logger.log(SUCCESS, "HTML report generated: %s", path)
        return True

    # Driver

    def run(self) -> PipelineResult:
        """Execute every step in order and finalize the result.

        Returns:
            PipelineResult with one Step per executed step.
        """
        self._context = PipelineContext(config=self._config, result=PipelineResult())
        logger.info("Starting %s against %s", self.title, self._config.base_url)
        try:
            for name, operation in self._steps():
                self._context.execute_step(name, operation)
        finally:
            if self._owns_client and self._http_client is not None:
                self._http_client.close()
                self._http_client = None
                self._owns_client = False

        result = self._context.result
        result.finalize()
        self._log_summary(result)
        return result

    def _log_summary(self, result: PipelineResult) -> None:
        logger.info("=== PIPELINE SUMMARY ===")
        for step in result.steps.values():
            if step.skipped:
                logger.info("  %s: SKIPPED", step.name)
            elif step.success:
                logger.log(SUCCESS, "  %s: OK (%.2fs)", step.name, step.duration_seconds)
            else:
                logger.error("  %s: FAILED (%.2fs) %s", step.name, step.duration_seconds, step.error)
        logger.info("Total duration: %.2f seconds", result.total_duration_seconds)
        if result.success:
            logger.log(SUCCESS, "Pipeline completed successfully")
        else:
            logger.error("Pipeline completed with failures")


class ItineraryPipeline(BasePipeline):
    """Builds, seeds, tests, and reports on the itinerary service."""

    title = "MusafirGO Pipeline Report"

    def _get_bootstrapper(self) -> ItineraryBootstrapper:
        return ItineraryBootstrapper(
            self._config,
            self._get_stack(),
            wait_ready=self._wait_for_service,
            sleep=self._sleep,
        )

    def _wait_for_service(self) -> bool:
        return self._get_prober().wait_until_ready(
            HealthCheck("Service health", "/actuator/health"),
            attempts=self._config.readiness_attempts,
            interval_seconds=self._config.readiness_interval_seconds,
        )

    def build_image(self) -> bool:
        return self._get_bootstrapper().build_image()

    def initialize_database(self) -> Any:
        if self._config.skip_init:
            logger.info("Skipping database initialization...")
            return StepOutcome.skip()
        return self._get_bootstrapper().initialize_database()

    def load_test_data(self) -> Any:
        if self._config.skip_data_load:
            logger.info("Skipping test data loading...")
            return StepOutcome.skip()
        logger.info("Loading test data...")
        return self._get_bootstrapper().load_test_data()

    def health_checks(self) -> bool:
        self._get_prober().probe_all(ITINERARY_HEALTH_CHECKS)
        return True

    def performance_tests(self) -> StepOutcome:
        logger.info("Running performance tests...")
        sampler = PerformanceSampler(self._get_client())
        summary = sampler.run_itinerary(ITINERARY_PLAN)
        sampler.log_summary(summary)
        return StepOutcome.ok(summary)

    def display_results(self) -> bool:
        return display_detailed_results(self.context.result)

    def generate_excel_report(self) -> bool:
        path = write_excel_report(
            self.context.result,
            ITINERARY_CASES,
            report_dir=self._config.report_dir,
            prefix=self._config.report_prefix,
        )
        self.context.add_artifact(path)
        logger.log(SUCCESS, "Excel report generated: %s", path)
        return True

    def open_report(self) -> StepOutcome:
        if not self._config.open_report:
            logger.info("Skipping browser launch...")
            return StepOutcome.skip()
        path = self.context.latest_artifact(".html") or latest_report(
            self._config.report_dir, self._config.report_prefix
        )
        if path is None:
            return StepOutcome.failed("No HTML report found to open")
        open_in_browser(path, opener=self._browser_opener)
        return StepOutcome.ok(True)

    def _steps(self) -> StepList:
        return [
            (StepName.CHECK_PREREQUISITES, self.check_prerequisites),
            (StepName.BUILD_APPLICATION_IMAGE, self.build_image),
            (StepName.INITIALIZE_DATABASE, self.initialize_database),
            (StepName.LOAD_TEST_DATA, self.load_test_data),
            (StepName.HEALTH_CHECKS, self.health_checks),
            (StepName.API_TESTS, lambda: self.run_api_tests(ITINERARY_CASES)),
            (StepName.PERFORMANCE_TESTS, self.performance_tests),
            (StepName.RELOAD_TEST_DATA, self.load_test_data),
            (StepName.DISPLAY_DETAILED_RESULTS, self.display_results),
            (StepName.CLEANUP_OLD_REPORTS, self.cleanup_reports),
            (StepName.GENERATE_HTML_REPORT, self.generate_html_report),
            (StepName.GENERATE_EXCEL_REPORT, self.generate_excel_report),
            (StepName.OPEN_REPORT_IN_BROWSER, self.open_report),
        ]


class WebPipeline(BasePipeline):
    """Builds the Angular front-end, starts mock services, and tests them."""

    title = "MusafirGO Web Pipeline Report"

    def _tool_checks(self) -> list[ToolCheck]:
        return super()._tool_checks() + [NODE_CHECK, ANGULAR_CHECK]

    def _get_bootstrapper(self) -> WebBootstrapper:
        return WebBootstrapper(self._config, self._get_runner(), self._get_stack(), sleep=self._sleep)

    def build_angular_app(self) -> bool:
        logger.info("Building Angular application...")
        return self._get_bootstrapper().build_angular_app()

    def start_mock_services(self) -> Any:
        if self._config.skip_init:
            logger.info("Skipping mock services startup...")
            return StepOutcome.skip()
        return self._get_bootstrapper().start_mock_services()

    def health_checks(self) -> bool:
        self._get_prober().probe_all(
            WEB_HEALTH_CHECKS,
            warning_checks=frontend_check(self._config.frontend_url),
        )
        return True

    def performance_tests(self) -> StepOutcome:
        logger.info("Running performance tests...")
        sampler = PerformanceSampler(self._get_client())
        summary = sampler.run(WEB_PLAN)
        sampler.log_summary(summary)
        return StepOutcome.ok(summary)

    def _steps(self) -> StepList:
        return [
            (StepName.CHECK_PREREQUISITES, self.check_prerequisites),
            (StepName.BUILD_ANGULAR_APPLICATION, self.build_angular_app),
            (StepName.START_MOCK_SERVICES, self.start_mock_services),
            (StepName.HEALTH_CHECKS, self.health_checks),
            (StepName.API_TESTS, lambda: self.run_api_tests(WEB_CASES)),
            (StepName.PERFORMANCE_TESTS, self.performance_tests),
            (StepName.CLEANUP_OLD_REPORTS, self.cleanup_reports),
            (StepName.GENERATE_HTML_REPORT, self.generate_html_report),
        ]
