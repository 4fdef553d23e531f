"""CLI entry point for the MusafirGO local pipelines."""

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from dotenv import load_dotenv

from src.config import ConfigError, Target, load_config
from src.logging_config import configure_logging
from src.orchestrator import ItineraryPipeline, WebPipeline

PIPELINES = {
    Target.ITINERARY: ItineraryPipeline,
    Target.WEB: WebPipeline,
}


def build_parser(target: Optional[Target] = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Build, seed, smoke-test, and benchmark a local MusafirGO service"
    )
    parser.add_argument(
        "base_url",
        nargs="?",
        default=None,
        help="Base URL of the service under test (defaults per target)",
    )
    if target is None:
        parser.add_argument(
            "--target",
            choices=[t.value for t in Target],
            default=Target.ITINERARY.value,
            help="Which service to run the pipeline against (default: itinerary)",
        )
    parser.add_argument(
        "--skip-init",
        action="store_true",
        help="Skip starting the compose stack",
    )
    parser.add_argument(
        "--skip-data-load",
        action="store_true",
        help="Skip loading test fixtures (itinerary only)",
    )
    parser.add_argument(
        "--skip-tests",
        action="store_true",
        help="Skip the endpoint test table",
    )
    parser.add_argument(
        "--no-open",
        action="store_true",
        help="Do not open the HTML report in a browser",
    )
    parser.add_argument(
        "--report-dir",
        type=Path,
        default=None,
        help="Directory for generated reports (overrides REPORT_DIR env var)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR"],
        default=None,
        help="Set logging level (overrides LOG_LEVEL env var)",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None, target: Optional[Target] = None) -> int:
    load_dotenv()

    args = build_parser(target).parse_args(argv)
    configure_logging(level_override=args.log_level)
    selected = target or Target(args.target)

    try:
        config = load_config(
            selected,
            base_url=args.base_url,
            skip_init=args.skip_init,
            skip_data_load=args.skip_data_load,
            skip_tests=args.skip_tests,
            open_report=not args.no_open,
            report_dir=args.report_dir,
        )
    except ConfigError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    result = PIPELINES[selected](config).run()

    # Print summary
    print("\n--- Pipeline Summary ---")
    for step in result.steps.values():
        status = "SKIPPED" if step.skipped else ("OK" if step.success else "FAILED")
        print(f"  {step.name}: {status} ({step.duration_seconds}s)")
        if step.error:
            print(f"    error: {step.error}")

    overall = "SUCCESS" if result.success else "FAILURE"
    print(f"\nResult: {overall} ({result.total_duration_seconds}s)")

    return 0 if result.success else 1


def itinerary_main() -> int:
    return main(target=Target.ITINERARY)


def web_main() -> int:
    return main(target=Target.WEB)


if __name__ == "__main__":
    sys.exit(main())
