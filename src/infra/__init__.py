"""Infrastructure module: external commands, compose stacks, prerequisites.

Public API:
    CommandRunner: Runs external commands and captures output.
    ComposeStack: Compose commands bound to one project.
    DockerEngine: Pings and starts the container engine.
    PrerequisiteChecker: Verifies the required tools.
    ItineraryBootstrapper: Builds/starts the itinerary stack, loads fixtures.
    WebBootstrapper: Builds the Angular app and starts mock services.
    BootstrapError: Base exception for module errors.
    CommandFailedError: Raised when a required command exits non-zero.
    ServiceNotReadyError: Raised when services are not up in time.
"""

from .bootstrap import ItineraryBootstrapper, WebBootstrapper
from .commands import COMMAND_NOT_FOUND, CommandResult, CommandRunner
from .compose import ComposeStack
from .exceptions import BootstrapError, CommandFailedError, ServiceNotReadyError
from .prerequisites import (
    ANGULAR_CHECK,
    COMPOSE_CHECK_NAME,
    NODE_CHECK,
    DockerEngine,
    PrerequisiteChecker,
    ToolCheck,
)

__all__ = [
    "CommandRunner",
    "CommandResult",
    "COMMAND_NOT_FOUND",
    "ComposeStack",
    "DockerEngine",
    "PrerequisiteChecker",
    "ToolCheck",
    "COMPOSE_CHECK_NAME",
    "NODE_CHECK",
    "ANGULAR_CHECK",
    "ItineraryBootstrapper",
    "WebBootstrapper",
    "BootstrapError",
    "CommandFailedError",
    "ServiceNotReadyError",
]
