"""Environment bootstrap: build images, start stacks, load fixtures."""

import logging
import time
from typing import Callable

from src.config import PipelineConfig
from src.logging_config import SUCCESS

from .commands import CommandResult, CommandRunner
from .compose import ComposeStack
from .exceptions import CommandFailedError, ServiceNotReadyError

logger = logging.getLogger(__name__)


def _require(result: CommandResult) -> CommandResult:
    if not result.ok:
        raise CommandFailedError(result.command_line, result.returncode, result.output)
    return result


def start_and_verify(
    stack: ComposeStack,
    wait_seconds: float,
    min_running: int,
    sleep: Callable[[float], None] = time.sleep,
) -> list[str]:
    """Bring the stack up, wait, and require enough running services.

    Raises:
        CommandFailedError: If ``up -d`` fails.
        ServiceNotReadyError: If fewer than ``min_running`` services run.
    """
    logger.info("Starting services...")
    _require(stack.up())

    logger.info("Waiting %.0f seconds for services to be ready...", wait_seconds)
    sleep(wait_seconds)

    running = stack.running_services()
    if len(running) < min_running:
        raise ServiceNotReadyError(
            f"{len(running)} running service(s), expected at least {min_running}"
        )
    logger.info("Running services: %s", ", ".join(running))
    return running


class ItineraryBootstrapper:
    """Builds and starts the itinerary stack and loads its fixtures."""

    def __init__(
        self,
        config: PipelineConfig,
        stack: ComposeStack,
        wait_ready: Callable[[], bool],
        sleep: Callable[[float], None] = time.sleep,
    ):
        """Initialize the ItineraryBootstrapper.

        Args:
            config: Pipeline configuration.
            stack: Compose stack for the itinerary project.
            wait_ready: Polls the service health endpoint; True once ready.
            sleep: Used for the fixed startup wait.
        """
        self._config = config
        self._stack = stack
        self._wait_ready = wait_ready
        self._sleep = sleep

    def build_image(self) -> bool:
        logger.info("Stopping existing services...")
        down = self._stack.down()
        if not down.ok:
            logger.debug("compose down failed, ignoring: %s", down.output)

        logger.info("Building %s image...", self._config.build_service)
        _require(self._stack.build(self._config.build_service))
        logger.log(SUCCESS, "Application image built successfully")
        return True

    def initialize_database(self) -> bool:
        start_and_verify(
            self._stack,
            self._config.startup_wait_seconds,
            self._config.min_running_services,
            sleep=self._sleep,
        )
        logger.log(SUCCESS, "Database initialization completed successfully")
        return True

    def load_test_data(self) -> bool:
        """Wait for the service, then load the fixture dump.

        A failed load only logs a warning; a service that never becomes
        ready fails the step.

        Raises:
            ServiceNotReadyError: If the readiness poll times out.
        """
        if not self._wait_ready():
            raise ServiceNotReadyError("health endpoint did not answer 200")

        cfg = self._config
        logger.info("Loading test data into database...")
        loaded = self._stack.exec(
            cfg.fixture_db_service,
            "psql",
            "-U",
            cfg.fixture_db_user,
            "-d",
            cfg.fixture_db_name,
            "-f",
            cfg.fixture_sql_path,
        )
        if not loaded.ok:
            logger.warning("Test data could not be loaded, continuing: %s", loaded.output)
            return True

        logger.log(SUCCESS, "Test data loaded successfully")
        return True


class WebBootstrapper:
    """Builds the Angular front-end and starts the mock services."""

    def __init__(
        self,
        config: PipelineConfig,
        runner: CommandRunner,
        stack: ComposeStack,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._config = config
        self._runner = runner
        self._stack = stack
        self._sleep = sleep

    def build_angular_app(self) -> bool:
        cwd = self._config.web_project_path
        logger.info("Installing dependencies...")
        _require(self._runner.run(["npm", "install"], cwd=cwd))

        logger.info("Building Angular application for production...")
        _require(self._runner.run(["ng", "build", "--configuration", "production"], cwd=cwd))
        logger.log(SUCCESS, "Angular application built successfully")
        return True

    def start_mock_services(self) -> bool:
        logger.info("Starting mock services...")
        start_and_verify(
            self._stack,
            self._config.startup_wait_seconds,
            self._config.min_running_services,
            sleep=self._sleep,
        )
        logger.log(SUCCESS, "Mock services started successfully")
        return True
