"""Exceptions for the reports module."""


class ReportError(Exception):
    """Base exception for report errors."""

    pass


class ReportRenderError(ReportError):
    """Raised when a report cannot be rendered."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Failed to render report: {reason}")


class ReportWriteError(ReportError):
    """Raised when a rendered report cannot be written to disk."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to write report {path}: {reason}")
