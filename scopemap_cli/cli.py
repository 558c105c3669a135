"""
scopemap CLI - Main entry point.

Runs a classification pass over a YAML host document and renders the
report.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from scopemap_host.config import ScopemapConfig
from scopemap_host.document import InMemoryDocument
from scopemap_zone.analytics.counter import Report
from scopemap_zone.errors import DegenerateTransformError
from scopemap_zone.logging import LogEvent, create_logger
from scopemap_zone.pipeline import ClassifierBuilder

EXIT_OK = 0
EXIT_CANCELLED = 1
EXIT_FAILED = 2


def load_config(config_path: Optional[str]) -> ScopemapConfig:
    """Load the YAML config, or the defaults when no path is given."""
    if config_path is None:
        return ScopemapConfig()
    return ScopemapConfig.from_yaml(Path(config_path))


def format_report(report: Report, config: ScopemapConfig) -> str:
    """Render a report as the plain-text summary."""
    host = config.host
    lines = [
        f"Phase '{host.phase_name}': {report.total} elements",
        "",
        f"Written to '{host.target_parameter}':",
    ]
    lines += [f"  {c.display_name}: {t.written}" for c, t in report.tallies.items()]
    lines += ["", f"Unwritten (outside any {host.zone_category}):"]
    lines += [f"  {c.display_name}: {t.unwritten}" for c, t in report.tallies.items()]
    return "\n".join(lines)


def run_classify(args: argparse.Namespace) -> int:
    config = load_config(args.config)
    level = args.log_level or config.logging.level
    logger = create_logger(config.logging.component, level=getattr(logging, level))
    logger.debug(
        event=LogEvent.CONFIG_LOADED,
        message="Configuration loaded",
        metadata={'config': args.config, 'phase': config.host.phase_name},
    )

    document = InMemoryDocument.from_yaml(Path(args.document), config=config.host, logger=logger)

    elements = document.provide_elements()
    if not elements:
        print(f"No elements found in phase '{config.host.phase_name}'.")
        return EXIT_CANCELLED

    zones = document.provide_zones()
    if not zones:
        print(f"No {config.host.zone_category} found. Nothing to map {config.host.target_parameter}s from.")
        return EXIT_CANCELLED

    classifier = (
        ClassifierBuilder()
        .with_writer(document)
        .with_logger(logger)
        .build()
    )

    try:
        if args.dry_run:
            planned = classifier.plan(elements, classifier.build_index(zones))
            for result in planned:
                print(f"{result.element_id}\t{result.label or '-'}")
            return EXIT_OK

        with document.transaction(config.host.transaction_name):
            report = classifier.run(elements, zones)
    except DegenerateTransformError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILED

    if args.json:
        print(json.dumps(report.to_dict(), indent=2, default=str))
    else:
        print(format_report(report, config))
    return EXIT_OK


def run_zones(args: argparse.Namespace) -> int:
    config = load_config(args.config)
    logger = create_logger(config.logging.component, level=config.logging.level_value)
    document = InMemoryDocument.from_yaml(Path(args.document), config=config.host, logger=logger)

    for position, zone in enumerate(document.provide_zones(), start=1):
        print(f"{position}. {zone.label}")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scopemap",
        description="scopemap - Label elements by the scope box that contains them",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Classify and write labels, print summary
  scopemap classify document.yaml --config config/scopemap.yaml

  # Machine-readable report
  scopemap classify document.yaml --json

  # Show which label each element would get, without writing
  scopemap classify document.yaml --dry-run

  # List zones in priority order
  scopemap zones document.yaml
"""
    )

    parser.add_argument(
        "--config",
        default=None,
        help="Path to scopemap config YAML (default: built-in defaults)"
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    classify = subparsers.add_parser('classify', help='Classify elements and write labels')
    classify.add_argument('document', help='Path to document YAML')
    classify.add_argument('--json', action='store_true', help='Print the report as JSON')
    classify.add_argument('--dry-run', action='store_true', help='Print labels without writing')
    classify.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        default=None,
        help='Override the configured log level'
    )

    zones = subparsers.add_parser('zones', help='List zones in priority order')
    zones.add_argument('document', help='Path to document YAML')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_CANCELLED

    try:
        if args.command == 'classify':
            return run_classify(args)
        elif args.command == 'zones':
            return run_zones(args)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILED

    return EXIT_CANCELLED


if __name__ == '__main__':
    sys.exit(main())
