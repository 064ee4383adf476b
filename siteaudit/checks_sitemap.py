"""sitemap.xml presence and canonical consistency checks."""

from __future__ import annotations

from .findings import Finding, Level
from .links import absolute_parts
from .models import AuditConfig
from .normalize import normalize_path, normalize_url
from .routing import RouteIndex
from .sitemap import SITEMAP_FILENAME


def _loc_selector(url: str) -> str:
    return f"<loc>{url}</loc>"


def _missing(index: RouteIndex) -> Finding:
    if index.sitemap_present:
        message = f"{SITEMAP_FILENAME} has no usable <loc> entries (empty or malformed)"
    else:
        message = f"{SITEMAP_FILENAME} not found in dist directory"
    return Finding(
        level=Level.ERROR,
        rule_id="sitemap/missing",
        file=SITEMAP_FILENAME,
        selector="",
        message=message,
        help="Generate a valid sitemap.xml as part of the site build",
    )


def _canonical_missing(index: RouteIndex, config: AuditConfig) -> list[Finding]:
    policy = config.url_normalization
    listed = {normalize_url(url, policy) for url in index.sitemap_urls}
    findings: list[Finding] = []
    for page in index.pages:
        if page.noindex or not page.canonical:
            continue
        if normalize_url(page.canonical, policy) in listed:
            continue
        findings.append(
            Finding(
                level=Level.WARNING,
                rule_id="sitemap/canonical-missing",
                file=page.rel_path,
                selector=f"link[rel='canonical'][href='{page.canonical}']",
                message=f"Canonical URL '{page.canonical}' is not listed in {SITEMAP_FILENAME}",
                help="Add this URL to your sitemap or check the canonical",
            )
        )
    return findings


def _entry_findings(index: RouteIndex, config: AuditConfig) -> list[Finding]:
    sitemap_cfg = config.sitemap
    findings: list[Finding] = []
    for url in sorted(index.sitemap_urls):
        parts = absolute_parts(url)
        if parts is None:
            continue
        route = normalize_path(parts.path or "/", config.url_normalization)
        page = index.page_for_route(route)

        if page is None:
            if sitemap_cfg.entries_must_exist_in_dist:
                findings.append(
                    Finding(
                        level=Level.WARNING,
                        rule_id="sitemap/entry-not-in-dist",
                        file=SITEMAP_FILENAME,
                        selector=_loc_selector(url),
                        message=f"Sitemap entry '{url}' (route '{route}') not found in dist",
                        help="Remove stale entries from sitemap or add the missing page",
                    )
                )
            continue

        if (
            sitemap_cfg.forbid_noncanonical_in_sitemap
            and page.canonical
            and page.canonical.strip() != url
        ):
            findings.append(
                Finding(
                    level=Level.WARNING,
                    rule_id="sitemap/non-canonical-entry",
                    file=SITEMAP_FILENAME,
                    selector=_loc_selector(url),
                    message=f"Sitemap contains '{url}' but page canonical is '{page.canonical}'",
                    help="Use the canonical URL in the sitemap",
                )
            )
    return findings


def check_all(index: RouteIndex, config: AuditConfig) -> list[Finding]:
    sitemap_cfg = config.sitemap
    if not index.sitemap_urls:
        return [_missing(index)] if sitemap_cfg.require else []

    findings: list[Finding] = []
    if sitemap_cfg.canonical_must_be_in_sitemap:
        findings.extend(_canonical_missing(index, config))
    if sitemap_cfg.entries_must_exist_in_dist or sitemap_cfg.forbid_noncanonical_in_sitemap:
        findings.extend(_entry_findings(index, config))
    return findings


__all__ = ["check_all"]
