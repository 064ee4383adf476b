"""Command-line interface for siteaudit."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Iterable, Optional

from .audit import AuditResult, run_audit
from .config import resolve_config
from .discovery import InvalidPatternError
from .report import render_json, render_text, write_reports

EXIT_OK = 0
EXIT_FINDINGS = 1
EXIT_FATAL = 2


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected an integer, got '{value}'") from exc
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="siteaudit",
        description="Audit a built static site for SEO and link hygiene problems",
    )
    parser.add_argument(
        "--version",
        action="version",
        version="siteaudit 0.1.0",
        help="Show the siteaudit version and exit.",
    )
    parser.add_argument(
        "dist",
        nargs="?",
        type=Path,
        default=Path("dist"),
        help="Path to the built site directory (default: dist).",
    )
    parser.add_argument(
        "--site",
        help="Base URL of the deployed site, e.g. https://example.com",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to a YAML config file (default: siteaudit.yaml if found).",
    )
    parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format for findings.",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat warnings as errors when computing the exit code.",
    )
    parser.add_argument(
        "--max-errors",
        type=_positive_int,
        help="Skip the remaining check suites once this many errors were found.",
    )
    parser.add_argument(
        "--include",
        action="append",
        default=[],
        metavar="GLOB",
        help="Only audit HTML files matching this glob (repeatable).",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="GLOB",
        help="Skip HTML files matching this glob (repeatable).",
    )
    parser.add_argument(
        "--no-sitemap-check",
        action="store_true",
        help="Disable every sitemap rule.",
    )
    parser.add_argument(
        "--jobs",
        type=_positive_int,
        help="Number of worker threads for per-page work.",
    )
    parser.add_argument(
        "--report-dir",
        type=Path,
        help="Also write site_audit.json and site_audit.md into this directory.",
    )
    return parser


def exit_code_for(result: AuditResult, *, strict: bool = False) -> int:
    summary = result.summary
    if summary.errors or (strict and summary.warnings):
        return EXIT_FINDINGS
    return EXIT_OK


def main(argv: Optional[Iterable[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    try:
        config = resolve_config(
            args.dist,
            args.config,
            site=args.site,
            no_sitemap_check=args.no_sitemap_check,
            workers=args.jobs,
        )
        result = run_audit(
            args.dist,
            config,
            include=args.include,
            exclude=args.exclude,
            max_errors=args.max_errors,
        )
    except SystemExit as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_FATAL
    except (NotADirectoryError, InvalidPatternError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_FATAL

    if args.format == "json":
        sys.stdout.write(render_json(result))
    else:
        sys.stdout.write(render_text(result))

    if args.report_dir is not None:
        json_path, md_path = write_reports(result, args.report_dir, args.dist)
        print(f"Wrote {json_path} and {md_path}", file=sys.stderr)

    return exit_code_for(result, strict=args.strict)


if __name__ == "__main__":
    raise SystemExit(main())


__all__ = ["build_parser", "exit_code_for", "main"]
