"""Internal link graph checks: broken links, fragments and orphan pages."""

from __future__ import annotations

from typing import Optional
from urllib.parse import unquote

from .discovery import Page
from .document import Document, attr_values
from .findings import Finding, Level, link_selector
from .links import (
    LinkKind,
    classify,
    has_query_params,
    is_internal,
    is_skipped_scheme,
    resolve_href,
    split_fragment,
)
from .models import AuditConfig
from .normalize import normalize_path
from .parallel import flat_map_pages, map_pages
from .routing import RouteIndex

ROOT_ROUTE = "/"


def _anchor_hrefs(document: Document) -> list[str]:
    return [href.strip() for href in attr_values(document.select("a[href]"), "href")]


def _has_id(ids: set[str], fragment: str) -> bool:
    return fragment in ids or unquote(fragment) in ids


def _check_page_links(page: Page, index: RouteIndex, config: AuditConfig) -> list[Finding]:
    links_cfg = config.links
    policy = config.url_normalization
    findings: list[Finding] = []
    document = page.parse()
    page_ids = document.ids() if links_cfg.check_fragments else set()
    # Target documents parsed for fragment lookups, reused within this page.
    target_ids: dict[str, set[str]] = {}

    def _ids_for(target: Page) -> set[str]:
        if target.rel_path == page.rel_path:
            return page_ids
        if target.rel_path not in target_ids:
            target_ids[target.rel_path] = target.parse().ids()
        return target_ids[target.rel_path]

    for href in _anchor_hrefs(document):
        if not href or is_skipped_scheme(href):
            continue
        if not is_internal(href, index.base_url):
            continue

        if classify(href) == LinkKind.FRAGMENT:
            fragment = href[1:]
            if links_cfg.check_fragments and fragment and not _has_id(page_ids, fragment):
                findings.append(
                    Finding(
                        level=Level.WARNING,
                        rule_id="links/broken-fragment",
                        file=page.rel_path,
                        selector=link_selector(href),
                        message=f"Fragment target '{fragment}' not found on this page",
                        help="Add an element with the matching id, or fix the fragment",
                    )
                )
            continue

        if links_cfg.forbid_query_params_internal and has_query_params(href):
            findings.append(
                Finding(
                    level=Level.ERROR,
                    rule_id="links/query-params",
                    file=page.rel_path,
                    selector=link_selector(href),
                    message=f"Internal link contains query parameters: '{href}'",
                    help="Remove query parameters from internal links to avoid duplicate content signals",
                )
            )

        if links_cfg.check_mixed_content and href.lower().startswith("http://"):
            findings.append(
                Finding(
                    level=Level.WARNING,
                    rule_id="links/mixed-content",
                    file=page.rel_path,
                    selector=link_selector(href),
                    message=f"Internal link uses HTTP instead of HTTPS: '{href}'",
                    help="Use HTTPS for all internal links",
                )
            )

        resolved = resolve_href(href, page.route, index.base_url)
        if resolved is None:
            continue
        normalized = normalize_path(resolved, policy)

        if not index.route_exists(normalized) and not index.file_exists(resolved):
            findings.append(
                Finding(
                    level=Level.ERROR if links_cfg.fail_on_broken else Level.WARNING,
                    rule_id="links/broken",
                    file=page.rel_path,
                    selector=link_selector(href),
                    message=f"Broken internal link '{href}' -> '{normalized}' (not found in dist)",
                    help="Fix the href to point to an existing page",
                )
            )
            continue

        if links_cfg.check_fragments:
            fragment = split_fragment(href)
            target: Optional[Page] = index.page_for_route(normalized)
            if fragment and target is not None and not _has_id(_ids_for(target), fragment):
                findings.append(
                    Finding(
                        level=Level.WARNING,
                        rule_id="links/broken-fragment",
                        file=page.rel_path,
                        selector=link_selector(href),
                        message=f"Fragment '{fragment}' not found on target page '{normalized}'",
                        help="Fix the fragment or add the target id",
                    )
                )

    return findings


def check_internal_links(index: RouteIndex, config: AuditConfig) -> list[Finding]:
    return flat_map_pages(
        lambda page: _check_page_links(page, index, config),
        index.pages,
        workers=config.workers,
    )


def linked_routes(page: Page, index: RouteIndex, config: AuditConfig) -> set[str]:
    """Normalized internal routes ``page`` links to, excluding itself."""

    routes: set[str] = set()
    for href in _anchor_hrefs(page.parse()):
        if not href or is_skipped_scheme(href) or classify(href) == LinkKind.FRAGMENT:
            continue
        if not is_internal(href, index.base_url):
            continue
        resolved = resolve_href(href, page.route, index.base_url)
        if resolved is not None:
            routes.add(normalize_path(resolved, config.url_normalization))
    routes.discard(page.route)
    return routes


def check_orphan_pages(index: RouteIndex, config: AuditConfig) -> list[Finding]:
    """Flag pages no other page links to.

    Every page's outbound routes are collected on the pool first; the union is
    only computed once all of them are back.
    """

    partials = map_pages(
        lambda page: linked_routes(page, index, config),
        index.pages,
        workers=config.workers,
    )
    linked: set[str] = {ROOT_ROUTE}
    for routes in partials:
        linked |= routes

    return [
        Finding(
            level=Level.WARNING,
            rule_id="links/orphan-page",
            file=page.rel_path,
            selector="",
            message=f"Orphan page '{page.route}' is not linked from any other page",
            help="Add internal links to this page or remove it if unneeded",
        )
        for page in index.pages
        if page.route not in linked
    ]


def check_all(index: RouteIndex, config: AuditConfig) -> list[Finding]:
    findings: list[Finding] = []
    if config.links.check_internal:
        findings.extend(check_internal_links(index, config))
    if config.links.detect_orphan_pages:
        findings.extend(check_orphan_pages(index, config))
    return findings


__all__ = ["check_all", "check_internal_links", "check_orphan_pages", "linked_routes"]
