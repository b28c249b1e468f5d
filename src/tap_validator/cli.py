"""Check every definition in the given taps, or in all installed taps if none
is given. Optionally syntax-check every source file of the library and verify
the alias symlinks of each tap."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import ConfigError, load_settings
from .core import run_validation
from .issues import OracleUnavailableError, ScanError, UnknownTapError
from .models.options import ValidationOptions
from .report import to_report
from .summary import render_diagnostics, render_summary

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_FATAL = 2


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="tap-validator", description=__doc__)
    parser.add_argument("taps", nargs="*", metavar="TAP", help="Taps to check (owner/repo)")
    parser.add_argument(
        "--aliases", action="store_true", help="Verify any alias symlinks in each tap."
    )
    parser.add_argument(
        "--syntax", action="store_true", help="Syntax-check all source files under the library."
    )
    parser.add_argument("--config", type=Path, default=None, help="Path to a settings file")
    parser.add_argument(
        "--library-path", type=Path, default=None, help="Root scanned by --syntax"
    )
    parser.add_argument("--taps-root", type=Path, default=None, help="Directory of installed taps")
    parser.add_argument("--jobs", type=int, default=None, help="Number of worker threads")
    output = parser.add_mutually_exclusive_group()
    output.add_argument("--json", action="store_true", help="Print the JSON report to stdout")
    output.add_argument("--summary", action="store_true", help="Print a Markdown summary")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress")
    parser.add_argument("-d", "--debug", action="store_true", help="Log debugging detail")
    args = parser.parse_args(argv)
    if args.jobs is not None and args.jobs < 1:
        parser.error("--jobs must be at least 1")
    return args


def _setup_logging(args: argparse.Namespace) -> None:
    if args.debug:
        level = logging.DEBUG
    elif args.verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    _setup_logging(args)

    options = ValidationOptions.from_names(
        args.taps, check_syntax=args.syntax, check_aliases=args.aliases
    )
    try:
        settings = load_settings(args.config).with_overrides(
            library_path=args.library_path, taps_root=args.taps_root, jobs=args.jobs
        )
        result = run_validation(options, settings=settings)
    except ConfigError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_FATAL
    except (UnknownTapError, ScanError, OracleUnavailableError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_FATAL

    for line in render_diagnostics(result):
        print(line, file=sys.stderr)

    if args.json:
        print(json.dumps(to_report(result), indent=2))
    elif args.summary:
        print(render_summary(result), end="")

    return EXIT_FAILED if result.any_failed else EXIT_OK


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
