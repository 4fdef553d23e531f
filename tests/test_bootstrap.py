"""Unit tests for ComposeStack and the environment bootstrappers."""

from pathlib import Path

import pytest

from src.config import Target
from src.infra import (
    CommandFailedError,
    ComposeStack,
    ItineraryBootstrapper,
    ServiceNotReadyError,
    WebBootstrapper,
)

from tests.pipeline_test_helpers import FakeRunner, NoSleep, fail, make_config, ok

PS_RUNNING = ("docker-compose", "ps", "--services", "--filter", "status=running")


def _itinerary(runner, ready=True, **overrides):
    config = make_config(**overrides)
    stack = ComposeStack(runner, config.compose_command)
    sleep = NoSleep()
    return ItineraryBootstrapper(config, stack, wait_ready=lambda: ready, sleep=sleep), sleep


class TestComposeStack:
    def test_compose_file_precedes_subcommand(self):
        runner = FakeRunner()
        stack = ComposeStack(runner, ("docker", "compose"), "docker-compose.dev.yml", Path("/web"))

        stack.up()

        assert runner.calls == [
            (("docker", "compose", "-f", "docker-compose.dev.yml", "up", "-d"), Path("/web"))
        ]

    def test_running_services_skips_blank_lines(self):
        runner = FakeRunner({PS_RUNNING: ok("postgres\nredis\n\n  itinerary-service  \n")})
        stack = ComposeStack(runner)
        assert stack.running_services() == ["postgres", "redis", "itinerary-service"]

    def test_running_services_empty_on_failure(self):
        runner = FakeRunner({PS_RUNNING: fail()})
        assert ComposeStack(runner).running_services() == []

    def test_exec_disables_tty(self):
        runner = FakeRunner()
        ComposeStack(runner).exec("postgres", "psql", "-l")
        assert runner.commands == [("docker-compose", "exec", "-T", "postgres", "psql", "-l")]


class TestItineraryBootstrapper:
    def test_build_image_stops_then_builds_without_cache(self):
        runner = FakeRunner()
        bootstrapper, _ = _itinerary(runner)

        assert bootstrapper.build_image() is True
        assert runner.commands == [
            ("docker-compose", "down"),
            ("docker-compose", "build", "--no-cache", "itinerary-service"),
        ]

    def test_failed_down_is_ignored(self):
        runner = FakeRunner({("docker-compose", "down"): fail()})
        bootstrapper, _ = _itinerary(runner)
        assert bootstrapper.build_image() is True

    def test_failed_build_raises(self):
        build = ("docker-compose", "build", "--no-cache", "itinerary-service")
        runner = FakeRunner({build: fail(stderr="no space left")})
        bootstrapper, _ = _itinerary(runner)

        with pytest.raises(CommandFailedError) as exc_info:
            bootstrapper.build_image()

        assert exc_info.value.returncode == 1
        assert "no space left" in str(exc_info.value)

    def test_initialize_database_waits_and_counts_services(self):
        runner = FakeRunner({PS_RUNNING: ok("a\nb\n\nc\n")})
        bootstrapper, sleep = _itinerary(runner)

        assert bootstrapper.initialize_database() is True
        assert ("docker-compose", "up", "-d") in runner.commands
        assert sleep.calls == [60.0]

    def test_initialize_database_with_too_few_services(self):
        runner = FakeRunner({PS_RUNNING: ok("postgres\n")})
        bootstrapper, _ = _itinerary(runner)

        with pytest.raises(ServiceNotReadyError):
            bootstrapper.initialize_database()

    def test_failed_up_raises(self):
        runner = FakeRunner({("docker-compose", "up", "-d"): fail()})
        bootstrapper, sleep = _itinerary(runner)

        with pytest.raises(CommandFailedError):
            bootstrapper.initialize_database()
        assert sleep.calls == []

    def test_load_test_data_runs_psql(self):
        runner = FakeRunner()
        bootstrapper, _ = _itinerary(runner, fixture_sql_path="/seed.sql")

        assert bootstrapper.load_test_data() is True
        assert runner.commands == [
            (
                "docker-compose",
                "exec",
                "-T",
                "postgres",
                "psql",
                "-U",
                "itinerary",
                "-d",
                "itinerary",
                "-f",
                "/seed.sql",
            )
        ]

    def test_failed_load_is_only_a_warning(self):
        psql = (
            "docker-compose", "exec", "-T", "postgres", "psql",
            "-U", "itinerary", "-d", "itinerary", "-f", "/seed.sql",
        )
        runner = FakeRunner({psql: fail(stderr="relation exists")})
        bootstrapper, _ = _itinerary(runner, fixture_sql_path="/seed.sql")
        assert bootstrapper.load_test_data() is True

    def test_load_test_data_requires_ready_service(self):
        runner = FakeRunner()
        bootstrapper, _ = _itinerary(runner, ready=False)

        with pytest.raises(ServiceNotReadyError):
            bootstrapper.load_test_data()
        assert runner.commands == []


class TestWebBootstrapper:
    def _web(self, runner, **overrides):
        config = make_config(Target.WEB, web_project_path=Path("/web"), **overrides)
        stack = ComposeStack(runner, config.compose_command, config.compose_file, Path("/web"))
        sleep = NoSleep()
        return WebBootstrapper(config, runner, stack, sleep=sleep), sleep

    def test_build_angular_app_runs_in_project(self):
        runner = FakeRunner()
        bootstrapper, _ = self._web(runner)

        assert bootstrapper.build_angular_app() is True
        assert runner.calls == [
            (("npm", "install"), Path("/web")),
            (("ng", "build", "--configuration", "production"), Path("/web")),
        ]

    def test_failed_npm_install_stops_build(self):
        runner = FakeRunner({("npm", "install"): fail()})
        bootstrapper, _ = self._web(runner)

        with pytest.raises(CommandFailedError):
            bootstrapper.build_angular_app()
        assert ("ng", "build", "--configuration", "production") not in runner.commands

    def test_start_mock_services_uses_dev_compose_file(self):
        ps = (
            "docker-compose",
            "-f",
            "docker-compose.dev.yml",
            "ps",
            "--services",
            "--filter",
            "status=running",
        )
        runner = FakeRunner({ps: ok("mock-api\nnginx\n")})
        bootstrapper, sleep = self._web(runner)

        assert bootstrapper.start_mock_services() is True
        assert ("docker-compose", "-f", "docker-compose.dev.yml", "up", "-d") in runner.commands
        assert sleep.calls == [30.0]

    def test_start_mock_services_with_one_service(self):
        runner = FakeRunner()
        bootstrapper, _ = self._web(runner)

        with pytest.raises(ServiceNotReadyError):
            bootstrapper.start_mock_services()
