"""Pipeline configuration built from CLI overrides, environment, and defaults."""

import os
import shlex
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Optional

# Predefined fixture identifiers loaded by the itinerary service dump.
DEFAULT_ITINERARY_ID = "50b5b757-afef-5771-af1e-ce2e3291b956"
DEFAULT_MEDIA_ID = "40a4a646-9ede-4660-9f0d-bd1d2190a901"

# Identifiers left over from earlier fixture generations; they are always
# rewritten to the predefined ones before a request is sent.
LEGACY_ITINERARY_ALIASES = (
    "83a3b4ca-8d0c-4faf-ab02-caf3287f28cf",
    "c0fc6c3d-38fe-4f37-8c6a-4cd4badf65d3",
)
LEGACY_MEDIA_ALIASES = ("123e4567-e89b-12d3-a456-426614174000",)


class ConfigError(ValueError):
    """Raised when an environment value cannot be parsed."""

    def __init__(self, name: str, value: str, reason: str):
        self.name = name
        self.value = value
        super().__init__(f"Invalid value for {name}={value!r}: {reason}")


class Target(Enum):
    """Which locally-deployed service a pipeline run exercises."""

    ITINERARY = "itinerary"
    WEB = "web"


@dataclass(frozen=True)
class TargetDefaults:
    base_url: str
    base_url_env: str
    report_prefix: str
    startup_wait_seconds: float
    min_running_services: int
    compose_file: Optional[str]


TARGET_DEFAULTS = {
    Target.ITINERARY: TargetDefaults(
        base_url="http://localhost:8080",
        base_url_env="ITINERARY_BASE_URL",
        report_prefix="MusafirGO_Pipeline_Report",
        startup_wait_seconds=60.0,
        min_running_services=3,
        compose_file=None,
    ),
    Target.WEB: TargetDefaults(
        base_url="http://localhost:3000",
        base_url_env="WEB_BASE_URL",
        report_prefix="MusafirGO_Web_Pipeline_Report",
        startup_wait_seconds=30.0,
        min_running_services=2,
        compose_file="docker-compose.dev.yml",
    ),
}


@dataclass(frozen=True)
class IdentifierSet:
    """Fixed identifiers substituted into endpoint paths.

    Attributes:
        itinerary_id: Replaces the ``{id}`` placeholder.
        media_id: Replaces the ``{mediaId}`` placeholder.
        aliases: Stale identifier -> replacement, applied after placeholders.
    """

    itinerary_id: str = DEFAULT_ITINERARY_ID
    media_id: str = DEFAULT_MEDIA_ID
    aliases: dict[str, str] = field(default_factory=dict)

    @classmethod
    def with_legacy_aliases(
        cls, itinerary_id: str = DEFAULT_ITINERARY_ID, media_id: str = DEFAULT_MEDIA_ID
    ) -> "IdentifierSet":
        aliases = {alias: itinerary_id for alias in LEGACY_ITINERARY_ALIASES}
        aliases.update({alias: media_id for alias in LEGACY_MEDIA_ALIASES})
        return cls(itinerary_id=itinerary_id, media_id=media_id, aliases=aliases)

    def resolve(self, path: str) -> str:
        """Substitute placeholders and aliases in an endpoint path."""
        resolved = path.replace("{id}", self.itinerary_id)
        resolved = resolved.replace("{mediaId}", self.media_id)
        for alias, replacement in self.aliases.items():
            resolved = resolved.replace(alias, replacement)
        return resolved


@dataclass(frozen=True)
class PipelineConfig:
    target: Target
    base_url: str
    report_prefix: str
    skip_init: bool = False
    skip_data_load: bool = False
    skip_tests: bool = False
    open_report: bool = True
    compose_command: tuple[str, ...] = ("docker-compose",)
    compose_file: Optional[str] = None
    compose_project_dir: Path = Path(".")
    build_service: str = "itinerary-service"
    fixture_sql_path: str = "/docker-entrypoint-initdb.d/01-dump-data.sql"
    fixture_db_service: str = "postgres"
    fixture_db_user: str = "itinerary"
    fixture_db_name: str = "itinerary"
    test_image_path: Path = Path("test-image.png")
    identifiers: IdentifierSet = field(default_factory=IdentifierSet.with_legacy_aliases)
    report_dir: Path = Path(".")
    startup_wait_seconds: float = 60.0
    min_running_services: int = 3
    readiness_attempts: int = 30
    readiness_interval_seconds: float = 2.0
    http_timeout_seconds: float = 10.0
    frontend_url: str = "http://localhost:4200"
    web_project_path: Path = Path(".")

    def with_overrides(self, **changes) -> "PipelineConfig":
        return replace(self, **changes)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError as e:
        raise ConfigError(name, raw, "expected a number") from e
    if value < 0:
        raise ConfigError(name, raw, "must not be negative")
    return value


def _env_path(name: str, default: str) -> Path:
    return Path(os.getenv(name) or default)


def load_config(
    target: Target = Target.ITINERARY,
    base_url: Optional[str] = None,
    skip_init: bool = False,
    skip_data_load: bool = False,
    skip_tests: bool = False,
    open_report: bool = True,
    report_dir: Optional[Path] = None,
) -> PipelineConfig:
    """Build the configuration for one pipeline run.

    Explicit arguments win over environment variables, which win over
    the per-target defaults.

    Raises:
        ConfigError: If a numeric environment value is malformed.
    """
    defaults = TARGET_DEFAULTS[target]
    effective_base_url = base_url or os.getenv(defaults.base_url_env) or defaults.base_url

    compose_command = tuple(shlex.split(os.getenv("COMPOSE_COMMAND", "docker-compose")))
    if not compose_command:
        compose_command = ("docker-compose",)

    identifiers = IdentifierSet.with_legacy_aliases(
        itinerary_id=os.getenv("PREDEFINED_ITINERARY_ID", DEFAULT_ITINERARY_ID),
        media_id=os.getenv("PREDEFINED_MEDIA_ID", DEFAULT_MEDIA_ID),
    )

    web_project_path = _env_path("WEB_PROJECT_PATH", ".")
    if target is Target.WEB:
        compose_project_dir = web_project_path
    else:
        compose_project_dir = _env_path("COMPOSE_PROJECT_DIR", ".")

    return PipelineConfig(
        target=target,
        base_url=effective_base_url.rstrip("/"),
        report_prefix=defaults.report_prefix,
        skip_init=skip_init,
        skip_data_load=skip_data_load,
        skip_tests=skip_tests,
        open_report=open_report,
        compose_command=compose_command,
        compose_file=defaults.compose_file,
        compose_project_dir=compose_project_dir,
        fixture_sql_path=os.getenv(
            "FIXTURE_SQL_PATH", "/docker-entrypoint-initdb.d/01-dump-data.sql"
        ),
        fixture_db_service=os.getenv("FIXTURE_DB_SERVICE", "postgres"),
        fixture_db_user=os.getenv("FIXTURE_DB_USER", "itinerary"),
        fixture_db_name=os.getenv("FIXTURE_DB_NAME", "itinerary"),
        test_image_path=_env_path("TEST_IMAGE_PATH", "test-image.png"),
        identifiers=identifiers,
        report_dir=report_dir or _env_path("REPORT_DIR", "."),
        startup_wait_seconds=_env_float("STARTUP_WAIT_SECONDS", defaults.startup_wait_seconds),
        min_running_services=defaults.min_running_services,
        http_timeout_seconds=_env_float("HTTP_TIMEOUT_SECONDS", 10.0),
        frontend_url=os.getenv("WEB_FRONTEND_URL", "http://localhost:4200"),
        web_project_path=web_project_path,
    )
