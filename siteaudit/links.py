"""Href classification and resolution against page routes."""

from __future__ import annotations

from enum import Enum
from typing import Optional
from urllib.parse import SplitResult, urlsplit

from .normalize import collapse_dots

SKIPPED_SCHEMES = ("mailto:", "tel:", "javascript:")
DEFAULT_PORTS = {"http": 80, "https": 443}


class LinkKind(str, Enum):
    FRAGMENT = "fragment"
    PROTOCOL_RELATIVE = "protocol-relative"
    ABSOLUTE = "absolute"
    RELATIVE = "relative"


def classify(href: str) -> LinkKind:
    """Classify an href by its leading characters."""

    if href.startswith("#"):
        return LinkKind.FRAGMENT
    if href.startswith("//"):
        return LinkKind.PROTOCOL_RELATIVE
    if "://" in href:
        return LinkKind.ABSOLUTE
    return LinkKind.RELATIVE


def is_skipped_scheme(href: str) -> bool:
    return href.strip().lower().startswith(SKIPPED_SCHEMES)


def strip_fragment_and_query(href: str) -> str:
    return href.split("#", 1)[0].split("?", 1)[0]


def split_fragment(href: str) -> Optional[str]:
    """Return the fragment after ``#`` (possibly empty), or None without one."""

    if "#" not in href:
        return None
    return href.split("#", 1)[1]


def has_query_params(href: str) -> bool:
    return "?" in href.split("#", 1)[0]


def _split_base(base_url: Optional[str]) -> Optional[SplitResult]:
    if not base_url:
        return None
    try:
        base = urlsplit(base_url)
    except ValueError:
        return None
    if not base.scheme or not base.netloc:
        return None
    return base


def _origin(parts: SplitResult) -> tuple[str, Optional[str], Optional[int]]:
    scheme = parts.scheme.lower()
    return scheme, parts.hostname, parts.port or DEFAULT_PORTS.get(scheme)


def absolute_parts(url: str) -> Optional[SplitResult]:
    """Split ``url`` if it is absolute (scheme and host), else None."""

    try:
        parts = urlsplit(url.strip())
        _ = parts.port  # raises ValueError on a bad port
    except ValueError:
        return None
    if not parts.scheme or not parts.netloc:
        return None
    return parts


def origin_string(parts: SplitResult) -> str:
    scheme, host, port = _origin(parts)
    if port is None or port == DEFAULT_PORTS.get(scheme):
        return f"{scheme}://{host}"
    return f"{scheme}://{host}:{port}"


def same_origin(url: str, base_url: str) -> Optional[bool]:
    """Compare origins; None if either side is not an absolute URL."""

    target = absolute_parts(url)
    base = absolute_parts(base_url)
    if target is None or base is None:
        return None
    return _origin(target) == _origin(base)


def is_internal(href: str, base_url: Optional[str]) -> bool:
    """Return True if ``href`` stays on the audited site.

    Relative and fragment hrefs are always internal. Absolute and
    protocol-relative hrefs must share the base URL's host; scheme and port
    are not compared. Without a base URL neither can be internal.
    """

    href = href.strip()
    kind = classify(href)
    if kind in (LinkKind.FRAGMENT, LinkKind.RELATIVE):
        return True

    base = _split_base(base_url)
    if base is None:
        return False
    try:
        if kind == LinkKind.PROTOCOL_RELATIVE:
            target = urlsplit(f"{base.scheme}:{href}")
            return target.hostname is not None and target.hostname == base.hostname
        target = urlsplit(href)
        if not target.scheme or not target.netloc:
            return False
        return target.hostname is not None and target.hostname == base.hostname
    except ValueError:
        # Malformed netloc or port.
        return False


def resolve_href(href: str, page_route: str, base_url: Optional[str] = None) -> Optional[str]:
    """Resolve ``href`` found on ``page_route`` into a site path.

    The result still needs :func:`normalize.normalize_path`. None means the
    href could not be parsed and should be skipped, never reported.
    """

    clean = strip_fragment_and_query(href.strip())
    if not clean:
        return page_route

    kind = classify(clean)
    try:
        if kind == LinkKind.ABSOLUTE:
            parsed = urlsplit(clean)
            if not parsed.scheme or not parsed.netloc:
                return None
            return parsed.path or "/"
        if kind == LinkKind.PROTOCOL_RELATIVE:
            base = _split_base(base_url)
            scheme = base.scheme if base else "https"
            parsed = urlsplit(f"{scheme}:{clean}")
            if not parsed.netloc:
                return None
            return parsed.path or "/"
    except ValueError:
        return None

    if clean.startswith("/"):
        return collapse_dots(clean)

    if page_route.endswith("/"):
        page_dir = page_route
    else:
        cut = page_route.rfind("/")
        page_dir = page_route[: cut + 1] if cut >= 0 else "/"
    return collapse_dots(page_dir + clean)


__all__ = [
    "LinkKind",
    "absolute_parts",
    "classify",
    "has_query_params",
    "is_internal",
    "is_skipped_scheme",
    "origin_string",
    "resolve_href",
    "same_origin",
    "split_fragment",
    "strip_fragment_and_query",
]
