"""Entry point for the HTML test report generator.

Reads a JSON or YAML results file and writes one HTML page per tested
class, linking any attachment files found in the configured resource
directories.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from testreport.config import ReportConfig
from testreport.reporting.html_report import HtmlTestReport
from testreport.reporting.resources import DirectoryTestResultResource
from testreport.results.loader import ResultsFormatError, load_results


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Generate per-class HTML test report pages"
    )
    parser.add_argument(
        "--results",
        required=True,
        type=Path,
        help="Path to the JSON or YAML results file",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Report directory (default: output_dir from the config file)",
    )
    parser.add_argument(
        "--config-file",
        type=Path,
        default=None,
        help="Path to the report JSON config file",
    )
    parser.add_argument(
        "--resource-dir",
        type=Path,
        action="append",
        default=[],
        help="Directory searched for test attachments (repeatable)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    config = ReportConfig(args.config_file)

    try:
        all_results, provider = load_results(args.results)
    except FileNotFoundError:
        print(f"Error: Results file not found: {args.results}", file=sys.stderr)
        return 1
    except ResultsFormatError as e:
        print(f"Error: Invalid results file: {e}", file=sys.stderr)
        return 1

    resources = config.resources()
    resources.extend(
        DirectoryTestResultResource(d, config.resource_pattern)
        for d in args.resource_dir
    )

    output_dir = args.output if args.output is not None else config.output_dir
    report = HtmlTestReport(provider, output_dir, resources)
    try:
        pages = report.generate(all_results)
    except OSError as e:
        print(f"Error writing report: {e}", file=sys.stderr)
        return 1

    print(
        f"Report: {len(pages)} classes, {all_results.test_count} tests, "
        f"{all_results.failure_count} failed -> {report.classes_dir}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
