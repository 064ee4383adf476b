"""Hreflang alternate checks, including the cross-page reciprocity pass."""

from __future__ import annotations

from .discovery import Page
from .findings import Finding, Level
from .models import AuditConfig
from .parallel import map_pages
from .routing import RouteIndex

HREFLANG_SELECTOR = "link[rel~=alternate][hreflang][href]"
X_DEFAULT = "x-default"

HreflangPairs = tuple[tuple[str, str], ...]


def collect_pairs(page: Page) -> HreflangPairs:
    """Return ``(lang, href)`` for every alternate link on ``page``."""

    pairs: list[tuple[str, str]] = []
    for element in page.parse().select(HREFLANG_SELECTOR):
        lang = (element.attr("hreflang") or "").strip()
        href = (element.attr("href") or "").strip()
        if lang and href:
            pairs.append((lang, href))
    return tuple(pairs)


def _page_findings(page: Page, pairs: HreflangPairs, config: AuditConfig) -> list[Finding]:
    hreflang_cfg = config.hreflang
    findings: list[Finding] = []

    if hreflang_cfg.require_x_default and not any(
        lang.lower() == X_DEFAULT for lang, _ in pairs
    ):
        findings.append(
            Finding(
                level=Level.WARNING,
                rule_id="hreflang/no-x-default",
                file=page.rel_path,
                selector="link[rel='alternate'][hreflang]",
                message="Hreflang tags present but no x-default",
                help='Add <link rel="alternate" hreflang="x-default" href="...">',
            )
        )

    if (
        hreflang_cfg.require_self_reference
        and page.absolute_url
        and not any(href == page.absolute_url for _, href in pairs)
    ):
        findings.append(
            Finding(
                level=Level.WARNING,
                rule_id="hreflang/no-self-reference",
                file=page.rel_path,
                selector="link[rel='alternate'][hreflang]",
                message="Hreflang tags don't include a self-reference",
                help="Include the current page URL in hreflang annotations",
            )
        )
    return findings


def _reciprocal_findings(
    index: RouteIndex, pairs_by_page: dict[str, HreflangPairs]
) -> list[Finding]:
    findings: list[Finding] = []
    for page in index.pages:
        pairs = pairs_by_page.get(page.rel_path)
        if not pairs or not page.absolute_url:
            continue
        for lang, href in pairs:
            if lang.lower() == X_DEFAULT:
                continue
            target = index.page_for_url(href)
            if target is None or target.rel_path == page.rel_path:
                continue
            target_pairs = pairs_by_page.get(target.rel_path, ())
            if any(back == page.absolute_url for _, back in target_pairs):
                continue
            findings.append(
                Finding(
                    level=Level.WARNING,
                    rule_id="hreflang/no-reciprocal",
                    file=page.rel_path,
                    selector=f"link[hreflang='{lang}'][href='{href}']",
                    message=f"Hreflang target '{href}' (lang='{lang}') doesn't link back",
                    help="Add reciprocal hreflang link on the target page",
                )
            )
    return findings


def check_all(index: RouteIndex, config: AuditConfig) -> list[Finding]:
    if not config.hreflang.check_hreflang:
        return []

    collected = map_pages(
        lambda page: (page, collect_pairs(page)), index.pages, workers=config.workers
    )

    findings: list[Finding] = []
    pairs_by_page: dict[str, HreflangPairs] = {}
    for page, pairs in collected:
        if not pairs:
            continue
        pairs_by_page[page.rel_path] = pairs
        findings.extend(_page_findings(page, pairs, config))

    if config.hreflang.require_reciprocal:
        findings.extend(_reciprocal_findings(index, pairs_by_page))
    return findings


__all__ = ["check_all", "collect_pairs"]
