"""robots.txt presence checks."""

from __future__ import annotations

from .findings import Finding, Level
from .io_utils import warn
from .models import AuditConfig
from .routing import RouteIndex

ROBOTS_FILENAME = "robots.txt"


def has_sitemap_directive(text: str) -> bool:
    return any(line.strip().lower().startswith("sitemap:") for line in text.splitlines())


def check_all(index: RouteIndex, config: AuditConfig) -> list[Finding]:
    robots_cfg = config.robots_txt
    if not (robots_cfg.require or robots_cfg.require_sitemap_link):
        return []

    robots_path = index.dist_path / ROBOTS_FILENAME
    if not robots_path.is_file():
        if not robots_cfg.require:
            return []
        return [
            Finding(
                level=Level.WARNING,
                rule_id="robots-txt/missing",
                file=ROBOTS_FILENAME,
                selector="",
                message=f"{ROBOTS_FILENAME} not found in dist directory",
                help="Add a robots.txt file to the published root",
            )
        ]

    if not robots_cfg.require_sitemap_link:
        return []
    try:
        text = robots_path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        warn(f"[robots] could not read {robots_path}: {exc}")
        return []
    if has_sitemap_directive(text):
        return []
    return [
        Finding(
            level=Level.WARNING,
            rule_id="robots-txt/no-sitemap",
            file=ROBOTS_FILENAME,
            selector="",
            message=f"{ROBOTS_FILENAME} does not contain a Sitemap directive",
            help="Add 'Sitemap: https://example.com/sitemap.xml' to robots.txt",
        )
    ]


__all__ = ["check_all", "has_sitemap_directive"]
