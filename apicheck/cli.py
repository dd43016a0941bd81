# apicheck/cli.py
"""
Command line entry point.

Usage:
    apicheck tests/users.yaml tests/orders.json
    apicheck suite.yaml --hostname http://localhost:8080 --report-dir reports
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from apicheck.api_types import TestCase, TestDefinitionError
from apicheck.config import get_settings
from apicheck.loader import load_tests
from apicheck.reporter import Reporter, format_text, summarize
from apicheck.runner import APITestRunner

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_BAD_DEFINITION = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="apicheck", description="Run declarative HTTP API tests")
    parser.add_argument("paths", nargs="+", help="test definition files (.json, .yaml, .yml)")
    parser.add_argument("--hostname", "-H", type=str, help="default hostname for tests that declare none")
    parser.add_argument("--report-dir", "-r", type=str, help="write JSON/HTML/JUnit reports to this directory")
    parser.add_argument("--run-id", type=str, help="base name for report files")
    parser.add_argument("--log-level", type=str, help="logging level (default from APICHECK_LOG_LEVEL)")
    parser.add_argument("--quiet", "-q", action="store_true", help="do not print the text report")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()

    logging.basicConfig(
        level=(args.log_level or settings.log_level).upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    tests: List[TestCase] = []
    try:
        for path in args.paths:
            tests.extend(load_tests(path, hostname=args.hostname))
    except TestDefinitionError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_BAD_DEFINITION

    with APITestRunner(settings) as runner:
        results = runner.run_tests(tests)

    if not args.quiet:
        print(format_text(results))

    if args.report_dir:
        paths = Reporter(args.report_dir).create_reports(results, run_id=args.run_id)
        for kind, path in paths.items():
            logger.info(f"{kind} report: {path}")

    return EXIT_OK if summarize(results)["overall_passed"] else EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
