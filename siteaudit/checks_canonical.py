"""Canonical link and robots meta checks."""

from __future__ import annotations

from typing import Optional
from urllib.parse import urljoin

from .discovery import CANONICAL_SELECTOR, Page
from .findings import Finding, Level
from .links import absolute_parts, origin_string, resolve_href, same_origin
from .models import AuditConfig
from .normalize import normalize_path, normalize_url
from .parallel import flat_map_pages
from .routing import RouteIndex


def _canonical_selector(href: str) -> str:
    return f"link[rel='canonical'][href='{href}']"


def _check_canonical(page: Page, index: RouteIndex, config: AuditConfig) -> list[Finding]:
    canonical_cfg = config.canonical
    policy = config.url_normalization
    findings: list[Finding] = []

    canonicals = page.parse().select(CANONICAL_SELECTOR)
    if not canonicals:
        return [
            Finding(
                level=Level.ERROR,
                rule_id="canonical/missing",
                file=page.rel_path,
                selector="head",
                message="Missing canonical tag",
                help='Add <link rel="canonical" href="..."> to <head>',
            )
        ]

    if len(canonicals) > 1:
        findings.append(
            Finding(
                level=Level.ERROR,
                rule_id="canonical/multiple",
                file=page.rel_path,
                selector="link[rel='canonical']",
                message=f"Found {len(canonicals)} canonical tags (expected exactly 1)",
                help="Remove duplicate canonical tags, keep only one",
            )
        )

    href = (canonicals[0].attr("href") or "").strip()
    if not href:
        findings.append(
            Finding(
                level=Level.ERROR,
                rule_id="canonical/empty",
                file=page.rel_path,
                selector="link[rel='canonical']",
                message="Canonical tag has empty href",
                help="Set the href to the canonical URL of this page",
            )
        )
        return findings

    parts = absolute_parts(href)
    if canonical_cfg.absolute and parts is None:
        findings.append(
            Finding(
                level=Level.ERROR,
                rule_id="canonical/not-absolute",
                file=page.rel_path,
                selector=_canonical_selector(href),
                message="Canonical URL is not absolute",
                help="Use a full URL including protocol and domain",
            )
        )
        return findings

    cross_origin = bool(index.base_url) and same_origin(href, index.base_url) is False
    if canonical_cfg.same_origin and cross_origin:
        base_parts = absolute_parts(index.base_url)
        findings.append(
            Finding(
                level=Level.ERROR,
                rule_id="canonical/cross-origin",
                file=page.rel_path,
                selector=_canonical_selector(href),
                message=(
                    f"Canonical URL points to different origin '{origin_string(parts)}' "
                    f"(expected '{origin_string(base_parts)}')"
                ),
                help="Canonical should point to the same origin as the site base URL",
            )
        )

    if canonical_cfg.self_reference and page.absolute_url:
        expected = normalize_url(page.absolute_url, policy)
        try:
            actual: Optional[str] = normalize_url(urljoin(page.absolute_url, href), policy)
        except ValueError:
            # Unparsable canonical; nothing to compare against.
            actual = None
        if actual is not None and actual != expected:
            findings.append(
                Finding(
                    level=Level.WARNING,
                    rule_id="canonical/not-self",
                    file=page.rel_path,
                    selector=_canonical_selector(href),
                    message=f"Canonical URL '{href}' does not match page URL '{page.absolute_url}'",
                    help="If this page should self-canonicalize, update the canonical href",
                )
            )

    if cross_origin:
        return findings
    target_path = (parts.path or "/") if parts else resolve_href(href, page.route, index.base_url)
    if target_path is None:
        return findings
    target_route = normalize_path(target_path, policy)
    if not index.route_exists(target_route):
        findings.append(
            Finding(
                level=Level.WARNING,
                rule_id="canonical/target-missing",
                file=page.rel_path,
                selector=_canonical_selector(href),
                message=f"Canonical URL '{href}' target route '{target_route}' not found in dist",
                help="Ensure the canonical URL points to an existing page",
            )
        )
    return findings


def _check_robots(page: Page, config: AuditConfig) -> list[Finding]:
    robots_cfg = config.robots_meta
    if not page.noindex:
        return []
    if robots_cfg.fail_if_noindex:
        level = Level.ERROR
    elif not robots_cfg.allow_noindex:
        level = Level.WARNING
    else:
        return []
    return [
        Finding(
            level=level,
            rule_id="robots/noindex",
            file=page.rel_path,
            selector="meta[name='robots']",
            message="Page has noindex directive",
            help="Remove noindex if this page should be indexed",
        )
    ]


def _robots_enabled(config: AuditConfig) -> bool:
    return config.robots_meta.fail_if_noindex or not config.robots_meta.allow_noindex


def check_all(index: RouteIndex, config: AuditConfig) -> list[Finding]:
    run_canonical = config.canonical.require
    run_robots = _robots_enabled(config)
    if not (run_canonical or run_robots):
        return []

    def _check_page(page: Page) -> list[Finding]:
        findings: list[Finding] = []
        if run_canonical:
            findings.extend(_check_canonical(page, index, config))
        if run_robots:
            findings.extend(_check_robots(page, config))
        return findings

    return flat_map_pages(_check_page, index.pages, workers=config.workers)


__all__ = ["check_all"]
