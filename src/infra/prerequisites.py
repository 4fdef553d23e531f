"""Prerequisite checks for the external tools the pipelines depend on."""

import logging
import sys
import time
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from src.logging_config import SUCCESS

from .commands import CommandRunner

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StartPlan:
    """How to launch the container engine on one platform family."""

    command: tuple[str, ...]
    attempts: int
    interval_seconds: float = 2.0


WINDOWS_START = StartPlan(("cmd", "/c", "start", "Docker Desktop"), attempts=30)
MACOS_START = StartPlan(("open", "-a", "Docker"), attempts=30)
LINUX_START = StartPlan(("sudo", "systemctl", "start", "docker"), attempts=15)


def start_plan_for(platform: str) -> StartPlan:
    if platform.startswith("win"):
        return WINDOWS_START
    if platform == "darwin":
        return MACOS_START
    return LINUX_START


class DockerEngine:
    """Pings the Docker engine and tries to start it when it is down."""

    def __init__(
        self,
        runner: CommandRunner,
        platform: Optional[str] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._runner = runner
        self._platform = platform or sys.platform
        self._sleep = sleep

    def ping(self) -> bool:
        return self._runner.run(["docker", "info"]).ok

    def start(self) -> bool:
        """Launch the engine and poll until it answers.

        Returns:
            True if the engine answered within the polling budget.
        """
        plan = start_plan_for(self._platform)
        logger.info("Attempting to start Docker with: %s", " ".join(plan.command))
        launched = self._runner.run(list(plan.command))
        if not launched.ok:
            logger.warning(
                "Could not start Docker automatically (%s). Please start it manually.",
                launched.output or f"exit code {launched.returncode}",
            )
            return False

        logger.info("Waiting for Docker to start...")
        for _ in range(plan.attempts):
            self._sleep(plan.interval_seconds)
            if self.ping():
                logger.log(SUCCESS, "Docker started successfully")
                return True

        logger.error(
            "Docker did not start within %d seconds",
            int(plan.attempts * plan.interval_seconds),
        )
        return False

    def ensure_running(self) -> bool:
        if self.ping():
            return True
        logger.warning("Docker: NOT RUNNING - Attempting to start...")
        return self.start()


@dataclass(frozen=True)
class ToolCheck:
    """A named tool verified by running its version command."""

    name: str
    command: tuple[str, ...]


COMPOSE_CHECK_NAME = "Docker Compose"
NODE_CHECK = ToolCheck("Node.js", ("node", "--version"))
ANGULAR_CHECK = ToolCheck("Angular CLI", ("ng", "version"))


class PrerequisiteChecker:
    """Verifies an ordered list of tools, remediating a stopped engine.

    Every check runs even after an earlier one fails so the log lists all
    missing tools at once.
    """

    def __init__(
        self,
        runner: CommandRunner,
        engine: DockerEngine,
        tools: Sequence[ToolCheck] = (),
    ):
        self._runner = runner
        self._engine = engine
        self._tools = tuple(tools)

    def check(self) -> bool:
        logger.info("Checking prerequisites...")
        results: dict[str, bool] = {}

        if self._engine.ensure_running():
            logger.log(SUCCESS, "Docker: OK")
            results["Docker"] = True
        else:
            logger.error("Docker: FAILED TO START")
            results["Docker"] = False

        for tool in self._tools:
            ok = self._runner.run(list(tool.command)).ok
            results[tool.name] = ok
            if ok:
                logger.log(SUCCESS, "%s: OK", tool.name)
            else:
                logger.error("%s: NOT FOUND", tool.name)

        if not all(results.values()):
            missing = ", ".join(name for name, ok in results.items() if not ok)
            logger.error("Prerequisites check failed. Missing: %s", missing)
            return False

        logger.log(SUCCESS, "All prerequisites satisfied")
        return True
