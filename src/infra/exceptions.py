"""Exceptions for the infra module."""


class BootstrapError(Exception):
    """Base exception for environment bootstrap errors."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class CommandFailedError(BootstrapError):
    """Raised when a required external command exits non-zero."""

    def __init__(self, command: str, returncode: int, output: str = ""):
        self.command = command
        self.returncode = returncode
        self.output = output
        reason = f"'{command}' exited with code {returncode}"
        if output:
            reason += f": {output}"
        super().__init__(reason)


class ServiceNotReadyError(BootstrapError):
    """Raised when services are not up after the readiness wait."""

    def __init__(self, reason: str):
        super().__init__(f"Services not ready: {reason}")
