"""Thin wrapper around subprocess for the external tools the pipelines drive."""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

logger = logging.getLogger(__name__)

# Exit code reported when the executable could not be started at all.
COMMAND_NOT_FOUND = 127


@dataclass
class CommandResult:
    """Captured outcome of one external command."""

    args: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def command_line(self) -> str:
        return " ".join(self.args)

    @property
    def output(self) -> str:
        """Combined trimmed output, stderr first when the command failed."""
        parts = [self.stdout.strip(), self.stderr.strip()]
        if not self.ok:
            parts.reverse()
        return "\n".join(part for part in parts if part)


class CommandRunner:
    """Runs external commands and captures their output.

    A missing executable is reported as a failed CommandResult with
    ``COMMAND_NOT_FOUND`` rather than raised.
    """

    def __init__(self, timeout: Optional[float] = None):
        self._timeout = timeout

    def run(self, args: Sequence[str], cwd: Optional[Path] = None) -> CommandResult:
        args = tuple(str(arg) for arg in args)
        logger.debug("Running: %s", " ".join(args))
        try:
            completed = subprocess.run(
                args,
                cwd=cwd,
                capture_output=True,
                text=True,
                timeout=self._timeout,
            )
        except (FileNotFoundError, PermissionError) as e:
            logger.debug("Could not start %s: %s", args[0], e)
            return CommandResult(args=args, returncode=COMMAND_NOT_FOUND, stderr=str(e))
        except subprocess.TimeoutExpired:
            return CommandResult(args=args, returncode=-1, stderr=f"timed out after {self._timeout}s")

        return CommandResult(
            args=args,
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
