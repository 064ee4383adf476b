"""Streaming ``<loc>`` extraction from sitemap.xml."""

from __future__ import annotations

from pathlib import Path
from xml.etree import ElementTree

from .io_utils import warn

SITEMAP_FILENAME = "sitemap.xml"


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def parse_sitemap(path: Path) -> frozenset[str]:
    """Return every ``<loc>`` value in ``path``.

    Namespaces are ignored, so both plain and sitemap-protocol documents work.
    A missing or malformed file yields an empty set; callers decide whether
    that is worth reporting.
    """

    if not path.is_file():
        return frozenset()

    urls: set[str] = set()
    try:
        for _event, elem in ElementTree.iterparse(path, events=("end",)):
            if _local_name(elem.tag) == "loc" and elem.text:
                loc = elem.text.strip()
                if loc:
                    urls.add(loc)
            if _local_name(elem.tag) in ("url", "sitemap"):
                elem.clear()
    except (ElementTree.ParseError, OSError) as exc:
        warn(f"[sitemap] could not parse {path}: {exc}")
        return frozenset()
    return frozenset(urls)


__all__ = ["SITEMAP_FILENAME", "parse_sitemap"]
