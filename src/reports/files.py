"""Report file naming, cleanup, and browser launch."""

import logging
import webbrowser
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from .exceptions import ReportWriteError

logger = logging.getLogger(__name__)

REPORT_SUFFIXES = (".html", ".xlsx", ".csv")
TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


def report_path(report_dir: Path, prefix: str, suffix: str, now: Optional[datetime] = None) -> Path:
    """Build ``<dir>/<prefix>_<YYYYmmdd_HHMMSS><suffix>``."""
    stamp = (now or datetime.now()).strftime(TIMESTAMP_FORMAT)
    return Path(report_dir) / f"{prefix}_{stamp}{suffix}"


def write_text(path: Path, content: str) -> Path:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ReportWriteError(str(path), str(e)) from e
    return path


def matching_reports(report_dir: Path, prefix: str, suffixes=REPORT_SUFFIXES) -> list[Path]:
    report_dir = Path(report_dir)
    if not report_dir.is_dir():
        return []
    found: list[Path] = []
    for suffix in suffixes:
        found.extend(report_dir.glob(f"{prefix}_*{suffix}"))
    return sorted(found)


def cleanup_old_reports(report_dir: Path, prefix: str) -> int:
    """Delete earlier report files for ``prefix``.

    Running it twice in a row deletes nothing the second time.

    Returns:
        Number of files removed.
    """
    removed = 0
    for path in matching_reports(report_dir, prefix):
        try:
            path.unlink()
        except FileNotFoundError:
            continue
        except OSError as e:
            logger.warning("Could not remove %s: %s", path.name, e)
            continue
        logger.info("Removed old report: %s", path.name)
        removed += 1

    if removed == 0:
        logger.info("No old reports to clean up")
    return removed


def latest_report(report_dir: Path, prefix: str, suffix: str = ".html") -> Optional[Path]:
    """Most recent report for ``prefix``; timestamps sort lexically."""
    reports = matching_reports(report_dir, prefix, suffixes=(suffix,))
    return reports[-1] if reports else None


def open_in_browser(
    path: Path,
    opener: Callable[..., bool] = webbrowser.open,
) -> bool:
    """Open a report in the default browser.

    A browser that cannot be launched is logged, never raised.
    """
    url = Path(path).resolve().as_uri()
    try:
        opened = opener(url, new=2)
    except webbrowser.Error as e:
        logger.warning("Could not open browser for %s: %s", path, e)
        return False
    if not opened:
        logger.warning("No browser available to open %s", path)
        return False
    logger.info("Opened report in browser: %s", path)
    return True
