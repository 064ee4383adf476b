"""Route normalization shared by discovery, link resolution and checks."""

from __future__ import annotations

from typing import Optional
from urllib.parse import urljoin, urlsplit, urlunsplit

from .models import IndexHtml, TrailingSlash, UrlNormalizationConfig

INDEX_FILES = ("index.html", "index.htm")
HTML_SUFFIXES = (".html", ".htm")


def collapse_dots(path: str) -> str:
    """Collapse ``.`` and ``..`` segments without touching the filesystem.

    ``..`` never climbs above the root: ``/../a`` collapses to ``/a``.
    """

    segments: list[str] = []
    for segment in path.split("/"):
        if segment == ".":
            continue
        if segment == "..":
            if segments:
                segments.pop()
            continue
        segments.append(segment)
    result = "/".join(segments)
    if path.startswith("/") and not result.startswith("/"):
        result = "/" + result
    return result


def _strip_index(path: str) -> str:
    for name in INDEX_FILES:
        if path.endswith("/" + name):
            return path[: -len(name)]
        if path == name:
            return "/"
    return path


def normalize_path(path: str, policy: UrlNormalizationConfig) -> str:
    """Normalize a URL path into a route according to ``policy``.

    Dot segments are collapsed first, then index files are stripped when the
    policy forbids them, then the trailing-slash rule is applied to anything
    but the root. The result is stable under repeated normalization.
    """

    route = collapse_dots(path) or "/"

    if policy.index_html == IndexHtml.FORBID:
        route = _strip_index(route)

    if route != "/":
        if policy.trailing_slash == TrailingSlash.ALWAYS:
            if not route.endswith("/"):
                route += "/"
        elif policy.trailing_slash == TrailingSlash.NEVER:
            route = route.rstrip("/") or "/"
            # Dropping the slash can expose another index suffix.
            while policy.index_html == IndexHtml.FORBID:
                stripped = _strip_index(route)
                if stripped == route:
                    break
                route = stripped.rstrip("/") or "/"

    return route


def file_to_route(rel_path: str, policy: UrlNormalizationConfig) -> str:
    """Convert a dist-relative file path into its route.

    ``about/index.html`` becomes ``/about/`` and ``blog/post.html`` becomes
    ``/blog/post/`` under the default policy. Matching is case-sensitive,
    like discovery and :func:`normalize_path`.
    """

    route = "/" + rel_path.replace("\\", "/").lstrip("/")
    for name in INDEX_FILES:
        if route.endswith("/" + name):
            route = route[: -len(name)]
            break
    else:
        for suffix in HTML_SUFFIXES:
            if route.endswith(suffix):
                route = route[: -len(suffix)]
                break
    return normalize_path(route or "/", policy)


def to_absolute(route: str, base_url: str) -> Optional[str]:
    """Join ``route`` onto ``base_url``; None if the base is not absolute."""

    try:
        base = urlsplit(base_url)
    except ValueError:
        return None
    if not base.scheme or not base.netloc:
        return None
    return urljoin(base_url, route)


def normalize_url(url: str, policy: UrlNormalizationConfig) -> str:
    """Return ``url`` with its path normalized; non-absolute input is unchanged."""

    try:
        parts = urlsplit(url.strip())
    except ValueError:
        return url
    if not parts.scheme or not parts.netloc:
        return url
    path = normalize_path(parts.path or "/", policy)
    return urlunsplit(
        (parts.scheme.lower(), parts.netloc.lower(), path, parts.query, parts.fragment)
    )


__all__ = [
    "collapse_dots",
    "file_to_route",
    "normalize_path",
    "normalize_url",
    "to_absolute",
]
