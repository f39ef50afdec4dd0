"""CLI entry point for ``truthguard lint``."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from truthguard import __version__
from truthguard.analysis.presets import preset_options
from truthguard.analysis.schemas import RuleOptions
from truthguard.config import Settings
from truthguard.constants import Preset, ReportFormat
from truthguard.errors import InvalidOptionsError
from truthguard.logging_config import setup_logging

EXIT_CLEAN = 0
EXIT_FINDINGS = 1
EXIT_USAGE = 2


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"truthguard {__version__}")
        return

    if args.command == "lint":
        sys.exit(_run_lint(args))
    parser.print_help()
    sys.exit(EXIT_USAGE)


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="truthguard",
        description=(
            "Flag arrays, objects, Sets and Maps used as booleans in "
            "JavaScript and TypeScript. They are always truthy."
        ),
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit",
    )

    sub = parser.add_subparsers(dest="command")

    lint = sub.add_parser(
        "lint",
        help="Lint files or directories",
    )
    lint.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="Files or directories to lint",
    )
    lint.add_argument(
        "--preset",
        "-p",
        choices=[p.value for p in Preset],
        default=None,
        help="Rule preset (default: from settings, recommended)",
    )
    lint.add_argument(
        "--fix",
        action="store_true",
        help="Rewrite files in place with the primary fix",
    )
    lint.add_argument(
        "--format",
        "-f",
        choices=[f.value for f in ReportFormat],
        default=ReportFormat.TEXT.value,
        help="Report format (default: text)",
    )
    lint.add_argument(
        "--strict-naming",
        action="store_true",
        help="Also match collection-suggestive name patterns",
    )
    lint.add_argument(
        "--no-check-arrays",
        action="store_true",
        help="Do not report arrays",
    )
    lint.add_argument(
        "--no-check-objects",
        action="store_true",
        help="Do not report plain objects",
    )
    lint.add_argument(
        "--no-check-array-like",
        action="store_true",
        help="Do not report Sets and Maps",
    )
    lint.add_argument(
        "--no-allow-explicit-boolean",
        action="store_true",
        help="Report Boolean(x) and !!x too",
    )
    lint.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )

    return parser


def _resolve_options(
    args: argparse.Namespace, settings: Settings
) -> RuleOptions:
    """Preset options with command-line overrides applied."""
    base = preset_options(args.preset or settings.preset)
    overrides: dict[str, bool] = {}
    if args.strict_naming:
        overrides["strict_naming"] = True
    if args.no_check_arrays:
        overrides["check_arrays"] = False
    if args.no_check_objects:
        overrides["check_objects"] = False
    if args.no_check_array_like:
        overrides["check_array_like"] = False
    if args.no_allow_explicit_boolean:
        overrides["allow_explicit_boolean"] = False
    return base.merged(**overrides) if overrides else base


def _run_lint(args: argparse.Namespace) -> int:
    """Execute the lint command and return the exit code."""
    from truthguard.export import export_report
    from truthguard.services.lint_service import lint_paths

    settings = Settings()
    setup_logging("DEBUG" if args.verbose else settings.log_level)

    missing = [p for p in args.paths if not p.exists()]
    if missing:
        for path in missing:
            print(f"Error: {path} does not exist", file=sys.stderr)
        return EXIT_USAGE

    try:
        options = _resolve_options(args, settings)
    except InvalidOptionsError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_USAGE

    report = lint_paths(args.paths, options, settings, fix=args.fix)
    sys.stdout.write(export_report(report, args.format))
    return EXIT_FINDINGS if report.finding_count else EXIT_CLEAN


if __name__ == "__main__":
    main()
