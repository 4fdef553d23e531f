"""Centralized logging configuration for the pipelines."""

import json
import logging
import os
import sys
from datetime import datetime, timezone

# Level used for positive outcomes ("Docker: OK", "Step X completed").
SUCCESS = 25
logging.addLevelName(SUCCESS, "SUCCESS")

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class JSONFormatter(logging.Formatter):
    """JSON log formatter for log aggregator compatibility.

    Produces one JSON object per line (NDJSON) with fields:
    timestamp, level, logger, message, and optionally exception.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[0] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry)


def configure_logging(level_override: str | None = None) -> None:
    """Configure logging based on environment variables.

    Args:
        level_override: If set, takes precedence over LOG_LEVEL env var.

    Environment variables:
        LOG_LEVEL: Logging level (DEBUG, INFO, SUCCESS, WARNING, ERROR).
            Defaults to INFO.
        LOG_FORMAT: Output format. "json" for JSON lines,
            anything else for human-readable. Defaults to "text".
    """
    level_name = (level_override or os.getenv("LOG_LEVEL", "INFO")).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO

    log_format = os.getenv("LOG_FORMAT", "text").lower()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    if log_format == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT, datefmt=DATE_FORMAT))

    root_logger.addHandler(handler)

    # Quiet down noisy third-party libraries
    for name in ("httpx", "httpcore", "urllib3"):
        logging.getLogger(name).setLevel(logging.WARNING)
