"""Audit orchestration: build the route index, then run check suites in order."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional, Sequence

from . import (
    checks_canonical,
    checks_hreflang,
    checks_links,
    checks_robots,
    checks_routes,
    checks_sitemap,
)
from .discovery import discover_html_files, extract_pages
from .findings import Finding, Summary, count_errors
from .io_utils import warn
from .models import AuditConfig
from .routing import RouteIndex

CheckSuite = Callable[[RouteIndex, AuditConfig], list[Finding]]

CHECK_SUITES: list[tuple[str, CheckSuite]] = [
    ("canonical", checks_canonical.check_all),
    ("links", checks_links.check_all),
    ("sitemap", checks_sitemap.check_all),
    ("robots-txt", checks_robots.check_all),
    ("hreflang", checks_hreflang.check_all),
    ("routes", checks_routes.check_all),
]


@dataclass
class AuditResult:
    findings: list[Finding] = field(default_factory=list)
    files_checked: int = 0
    suites_run: list[str] = field(default_factory=list)
    suites_skipped: list[str] = field(default_factory=list)

    @property
    def summary(self) -> Summary:
        return Summary.from_findings(self.findings, files_checked=self.files_checked)

    def sorted_findings(self) -> list[Finding]:
        return sorted(self.findings, key=Finding.sort_key)


def build_index(
    dist_path: Path,
    config: AuditConfig,
    *,
    include: Sequence[str] = (),
    exclude: Sequence[str] = (),
) -> RouteIndex:
    """Discover and extract every page, then reduce them into a RouteIndex.

    Raises ``NotADirectoryError`` for a bad dist path and
    ``InvalidPatternError`` for a bad glob, before any file is read.
    """

    if not dist_path.is_dir():
        raise NotADirectoryError(f"dist path '{dist_path}' does not exist or is not a directory")
    dist_path = dist_path.resolve()
    files = discover_html_files(dist_path, include, exclude)
    pages = extract_pages(
        files,
        config.url_normalization,
        config.site.base_url,
        workers=config.workers,
    )
    return RouteIndex.build(pages, dist_path, config.site.base_url)


def run_checks(
    index: RouteIndex,
    config: AuditConfig,
    *,
    max_errors: Optional[int] = None,
    suites: Sequence[tuple[str, CheckSuite]] = tuple(CHECK_SUITES),
) -> AuditResult:
    """Run each suite against the finished index.

    The error budget is only checked between suites; once ``max_errors`` is
    reached the remaining suites are skipped.
    """

    result = AuditResult(files_checked=len(index.pages))
    error_count = 0
    for name, suite in suites:
        if max_errors is not None and error_count >= max_errors:
            result.suites_skipped.append(name)
            continue
        new_findings = suite(index, config)
        error_count += count_errors(new_findings)
        result.findings.extend(new_findings)
        result.suites_run.append(name)

    if result.suites_skipped:
        warn(
            f"[audit] error budget of {max_errors} reached; skipped "
            f"{', '.join(result.suites_skipped)}"
        )
    return result


def run_audit(
    dist_path: Path,
    config: AuditConfig,
    *,
    include: Sequence[str] = (),
    exclude: Sequence[str] = (),
    max_errors: Optional[int] = None,
) -> AuditResult:
    index = build_index(dist_path, config, include=include, exclude=exclude)
    return run_checks(index, config, max_errors=max_errors)


__all__ = ["AuditResult", "CHECK_SUITES", "build_index", "run_audit", "run_checks"]
