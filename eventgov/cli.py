"""
Event catalog and schema registry tooling.

Prints catalog and registry summaries, validates registry
fixtures, and diffs observed event types against the catalog.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import structlog

from .framework.config import EmitterConfig
from .framework.metrics_store import MetricsStore, format_summary
from .schemas.catalog import default_catalog
from .schemas.coverage import CoverageAnalyzer
from .schemas.registry import default_registry
from .utils.logging import configure_logging


logger = structlog.get_logger()


def _dump(data: Dict[str, Any]) -> None:
    print(json.dumps(data, indent=2))


def run_summary(config: EmitterConfig) -> int:
    """Print catalog, registry and emission summaries."""
    catalog = default_catalog()
    registry = default_registry()

    _dump(catalog.to_summary())
    _dump(registry.summary())

    snapshot = MetricsStore().get_emission_metrics(catalog.list_types(), config.mode)
    print(format_summary(snapshot))
    return 0


def run_fixtures(fixtures_dir: Optional[str]) -> int:
    """Validate registry fixtures; non-zero exit on any failure."""
    report = default_registry().validate_fixtures(fixtures_dir)
    _dump(report.to_dict())
    return 0 if report.ok else 1


def run_observed(observed_file: str, max_unknown: Optional[int]) -> int:
    """Diff an observation log against the catalog."""
    analyzer = CoverageAnalyzer(default_catalog())
    with open(observed_file, "r", encoding="utf-8") as f:
        observed = analyzer.observed_from_lines(f)

    report = analyzer.diff_observed_events(observed)
    _dump(report.to_dict())

    if analyzer.exceeds(report, max_unknown):
        logger.error(
            "Unknown event types exceed threshold",
            unknown_count=report.unknown_count,
            max_unknown=max_unknown
        )
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Event catalog and schema registry tooling")
    parser.add_argument("--summary", action="store_true", help="Print catalog, registry and emission summaries")
    parser.add_argument(
        "--fixtures",
        nargs="?",
        const="",
        default=None,
        metavar="DIR",
        help="Validate registry fixtures (default: bundled fixtures directory)"
    )
    parser.add_argument("--observed", metavar="FILE", help="Diff observed event types (one per line) against the catalog")
    parser.add_argument("--max-unknown", type=int, default=None, help="Fail when observed unknown types exceed this count")
    parser.add_argument(
        "--log-format",
        choices=["json", "console"],
        default=None,
        help="Log output format (default: EVENTGOV_LOG_FORMAT)"
    )
    parser.add_argument("--verbose", action="store_true", help="Debug logging (default level: EVENTGOV_LOG_LEVEL)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    config = EmitterConfig.from_env()
    configure_logging(
        "validate-schemas",
        config.observability,
        log_level="debug" if args.verbose else None,
        format_type=args.log_format
    )

    if not (args.summary or args.fixtures is not None or args.observed):
        parser.print_help()
        return 0

    exit_code = 0

    if args.summary:
        exit_code |= run_summary(config)

    if args.fixtures is not None:
        exit_code |= run_fixtures(args.fixtures or None)

    if args.observed:
        if not Path(args.observed).is_file():
            logger.error("Observation file not found", observed_file=args.observed)
            return 2
        exit_code |= run_observed(args.observed, args.max_unknown)

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
