"""Command-line interface for working with version ranges.

Usage:
  areq show EXPR...
  areq contains EXPR VALUE...
  areq check [--config path_or_url] --installed installed.json [--warn-only]
  areq repl

Exit codes: 0 on success, 1 on invalid input or configuration, 10 when a
value is outside its range (``contains``) or a requirement fails (``check``).
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from collections.abc import Callable
from pathlib import Path
from typing import TextIO

from . import __version__
from .config import ConfigError, load_settings
from .core import check_versions
from .domains import (
    DEFAULT_DOMAIN_ID,
    DomainHandler,
    UnknownDomainError,
    get_domain,
    get_known_domain_ids,
)
from .parsers.expression import RangeSyntaxError
from .ranges import Ranges

logger = logging.getLogger(__name__)

DOMAIN_ENV_VAR = "AREQ_DOMAIN"
WARN_ONLY_ENV_VAR = "AREQ_WARN_ONLY"
PROMPT = ">> "

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_FAILURES = 10

_TRUTHY = {"1", "true", "yes", "y"}


# ---- Diagnostics output --------------------------------------------------------------


def format_syntax_error(error: RangeSyntaxError) -> str:
    """Render every diagnostic under the offending expression with a caret marker."""
    lines = [f"Invalid ranges: `{error.text}`"]
    for diagnostic in error.diagnostics:
        width = max(diagnostic.end - diagnostic.start, 1)
        lines.append(f"  {error.text}")
        lines.append(f"  {' ' * diagnostic.start}{'^' * width} {diagnostic.message}")
        cause = diagnostic.cause
        while cause is not None:
            lines.append(f"    caused by: {cause}")
            cause = cause.__cause__
    return "\n".join(lines)


def _parse(expression: str, domain: DomainHandler) -> Ranges:
    return Ranges.parse(expression, domain.value_type)


# ---- Commands ------------------------------------------------------------------------


def _cmd_show(args: argparse.Namespace, domain: DomainHandler) -> int:
    status = EXIT_OK
    for expression in args.expressions:
        try:
            print(_parse(expression, domain))
        except RangeSyntaxError as exc:
            print(format_syntax_error(exc), file=sys.stderr)
            status = EXIT_ERROR
    return status


def _cmd_contains(args: argparse.Namespace, domain: DomainHandler) -> int:
    try:
        ranges = _parse(args.expression, domain)
    except RangeSyntaxError as exc:
        print(format_syntax_error(exc), file=sys.stderr)
        return EXIT_ERROR

    values = []
    for text in args.values:
        try:
            values.append((text, domain.parse_value(text)))
        except (ValueError, OverflowError) as exc:
            print(f"ERROR: Invalid {domain.display_name.lower()} '{text}': {exc}", file=sys.stderr)
            return EXIT_ERROR

    all_contained = True
    for text, value in values:
        contained = value in ranges
        all_contained = all_contained and contained
        print(f"{text}: {'yes' if contained else 'no'}")
    return EXIT_OK if all_contained else EXIT_FAILURES


def _load_installed(path: Path) -> dict[str, str]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in data.items()
    ):
        raise ValueError(f"{path} must hold a JSON object mapping package names to versions")
    return data


def _cmd_check(args: argparse.Namespace, domain: DomainHandler) -> int:
    try:
        settings = load_settings(args.config)
        installed = _load_installed(args.installed)
    except ConfigError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_ERROR
    except FileNotFoundError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_ERROR
    except json.JSONDecodeError as exc:
        print(f"ERROR: Failed to read JSON: {exc}", file=sys.stderr)
        return EXIT_ERROR
    except ValueError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_ERROR

    report = check_versions(settings, installed)
    print(json.dumps(report, indent=2))

    # Default behavior: fail on failures unless env override set or --warn-only
    if report["hasFailures"] and not args.warn_only:
        warn_env = os.getenv(WARN_ONLY_ENV_VAR, "").strip().lower()
        if warn_env in _TRUTHY:
            return EXIT_OK
        return EXIT_FAILURES

    return EXIT_OK


def run_repl(domain: DomainHandler, stdin: TextIO, stdout: TextIO) -> int:
    """Read expressions line by line and print their canonical form until EOF."""
    while True:
        stdout.write(PROMPT)
        stdout.flush()
        line = stdin.readline()
        if not line:
            stdout.write("\n")
            return EXIT_OK

        expression = line.strip()
        if not expression:
            continue
        try:
            ranges = _parse(expression, domain)
        except RangeSyntaxError as exc:
            stdout.write("Invalid ranges\n")
            for diagnostic in exc.diagnostics:
                stdout.write(f"  {diagnostic}\n")
            continue
        stdout.write(f"Ranges: {ranges}\n")


def _cmd_repl(args: argparse.Namespace, domain: DomainHandler) -> int:
    return run_repl(domain, sys.stdin, sys.stdout)


# ---- Entry point ---------------------------------------------------------------------


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="areq", description="Evaluate and combine version range expressions."
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--domain",
        default=os.environ.get(DOMAIN_ENV_VAR, DEFAULT_DOMAIN_ID),
        help=f"Value domain: {', '.join(get_known_domain_ids())} (default: %(default)s)",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log warnings")

    subparsers = parser.add_subparsers(dest="command", required=True)

    show = subparsers.add_parser("show", help="Print the canonical form of expressions")
    show.add_argument("expressions", nargs="+", metavar="EXPR")
    show.set_defaults(handler=_cmd_show)

    contains = subparsers.add_parser("contains", help="Test values against an expression")
    contains.add_argument("expression", metavar="EXPR")
    contains.add_argument("values", nargs="+", metavar="VALUE")
    contains.set_defaults(handler=_cmd_contains)

    check = subparsers.add_parser("check", help="Check installed versions against requirements")
    check.add_argument(
        "--config",
        default=None,
        help="Path or URL of the requirements file (default: $AREQ_CONFIG or areq.json)",
    )
    check.add_argument(
        "--installed",
        type=Path,
        required=True,
        help="JSON object mapping package names to installed versions",
    )
    check.add_argument("--warn-only", action="store_true", help="Report failures but exit 0")
    check.set_defaults(handler=_cmd_check)

    repl = subparsers.add_parser("repl", help="Interactively evaluate expressions")
    repl.set_defaults(handler=_cmd_repl)

    return parser.parse_args(argv)


def _configure_logging(args: argparse.Namespace) -> None:
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s - %(levelname)s - %(message)s")


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    _configure_logging(args)

    try:
        domain = get_domain(args.domain)
    except UnknownDomainError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_ERROR

    handler: Callable[[argparse.Namespace, DomainHandler], int] = args.handler
    logger.debug(f"Running '{args.command}' over the {domain.domain_id} domain")
    return handler(args, domain)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
