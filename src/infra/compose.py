"""ComposeStack wraps the compose CLI for one project directory."""

from pathlib import Path
from typing import Optional, Sequence

from .commands import CommandResult, CommandRunner


class ComposeStack:
    """Compose commands bound to a command prefix, file, and directory.

    Example:
        stack = ComposeStack(CommandRunner(), ("docker", "compose"))
        stack.up()
        print(stack.running_services())
    """

    def __init__(
        self,
        runner: CommandRunner,
        command: Sequence[str] = ("docker-compose",),
        compose_file: Optional[str] = None,
        project_dir: Optional[Path] = None,
    ):
        self._runner = runner
        self._command = tuple(command)
        self._compose_file = compose_file
        self._project_dir = project_dir

    def _run(self, *args: str) -> CommandResult:
        prefix = list(self._command)
        if self._compose_file:
            prefix += ["-f", self._compose_file]
        return self._runner.run(prefix + list(args), cwd=self._project_dir)

    def version(self) -> CommandResult:
        return self._runner.run(list(self._command) + ["--version"], cwd=self._project_dir)

    def down(self) -> CommandResult:
        return self._run("down")

    def build(self, service: str, no_cache: bool = True) -> CommandResult:
        args = ["build"]
        if no_cache:
            args.append("--no-cache")
        return self._run(*args, service)

    def up(self) -> CommandResult:
        return self._run("up", "-d")

    def running_services(self) -> list[str]:
        """Names of running services; empty when the query fails."""
        result = self._run("ps", "--services", "--filter", "status=running")
        if not result.ok:
            return []
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    def exec(self, service: str, *command: str) -> CommandResult:
        return self._run("exec", "-T", service, *command)
