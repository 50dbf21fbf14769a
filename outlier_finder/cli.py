"""Command-line interface for outlier-finder."""

import argparse
import json
import logging
import sys

from outlier_finder import __version__


def _sheet(value: str) -> str | int:
    return int(value) if value.isdigit() else value


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="outlier-finder",
        description="Detect outliers in small numeric tables with seven statistical methods",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    subparsers = parser.add_subparsers(dest="command")

    analyze = subparsers.add_parser("analyze", help="Analyze a spreadsheet or CSV file")
    analyze.add_argument("path", help="Input file (.xlsx, .xls or .csv)")
    analyze.add_argument(
        "--sheet",
        type=_sheet,
        default=0,
        help="Worksheet name or position (default: 0)",
    )
    analyze.add_argument(
        "--json",
        action="store_true",
        help="Print the report as JSON",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command != "analyze":
        parser.print_help()
        return 0

    from outlier_finder.config import get_settings
    from outlier_finder.core.engine import format_report, report_to_dict, run_all_analyses
    from outlier_finder.exceptions import DatasetParseError
    from outlier_finder.ingest import load_dataset

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        dataset = load_dataset(args.path, sheet_name=args.sheet)
    except DatasetParseError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    report = run_all_analyses(dataset, thresholds=settings.thresholds())

    if args.json:
        print(json.dumps(report_to_dict(report), indent=2))
    else:
        print(f"Dataset: {dataset.dimensions}D, {len(dataset)} points")
        print()
        print(format_report(report, dataset.headers))

    return 0


if __name__ == "__main__":
    sys.exit(main())
