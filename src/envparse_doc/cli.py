"""Command-line entry point for envparse-doc."""

import argparse
import logging
import sys
from typing import Optional, Sequence

from .config import ScanConfig
from .parser import LANGUAGE_EXTENSIONS
from .render import OUTPUTS
from .tools.render_env_docs import build_report
from .tools.scan_sources import ScanPathError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_PATH_ERROR = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="envparse-doc",
        description="Document environment variables read through EnvParse accessors.",
    )
    parser.add_argument("-p", "--path", required=True, help="path to javascript file(s)")
    parser.add_argument(
        "-o",
        "--output",
        choices=OUTPUTS,
        default="md",
        help="output format (default: md)",
    )
    parser.add_argument(
        "-s",
        "--sort",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="output variables in alphabetical order (default: on)",
    )
    parser.add_argument(
        "-d",
        "--dependency",
        action="store_true",
        help="also document installed packages that use the EnvParse library",
    )
    parser.add_argument("--store", help="package store to walk with --dependency (default: node_modules)")
    parser.add_argument(
        "-e",
        "--ext",
        action="append",
        dest="extensions",
        choices=sorted(LANGUAGE_EXTENSIONS),
        metavar="EXT",
        help="source extension to scan in folders, repeatable (default: .js)",
    )
    parser.add_argument("--namespace", help="accessor namespace (default: EnvParse)")
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug diagnostics")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run a scan and print the report to stdout."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    config = ScanConfig(sort=args.sort)
    if args.store:
        config.store = args.store
    if args.extensions:
        config.extensions = args.extensions
    if args.namespace:
        config.namespace = args.namespace

    try:
        report = build_report(args.path, args.output, args.dependency, config)
    except ScanPathError as e:
        logger.error("%s", e)
        return EXIT_PATH_ERROR

    if report:
        print(report)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
