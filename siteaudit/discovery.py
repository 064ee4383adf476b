"""HTML file discovery and per-page metadata extraction."""

from __future__ import annotations

import fnmatch
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Pattern, Sequence

from .document import Document, parse_document
from .io_utils import read_page_text, warn
from .models import UrlNormalizationConfig
from .normalize import HTML_SUFFIXES, file_to_route, to_absolute
from .parallel import map_pages

CANONICAL_SELECTOR = "link[rel~=canonical]"
ROBOTS_SELECTOR = "meta[name=robots i]"


class InvalidPatternError(ValueError):
    """Raised when an include/exclude glob cannot be compiled."""


@dataclass(frozen=True)
class Page:
    """One discovered HTML file and the metadata pulled from it."""

    rel_path: str
    abs_path: Path
    route: str
    absolute_url: Optional[str] = None
    canonical: Optional[str] = None
    noindex: bool = False
    content: str = field(default="", repr=False)

    def parse(self) -> Document:
        """Parse the retained HTML again; each caller gets its own document."""

        return parse_document(self.content)


def _glob_syntax_error(pattern: str) -> Optional[str]:
    """Return why ``pattern`` is malformed, or None.

    ``fnmatch`` quietly treats an unclosed ``[`` as a literal and drops
    reversed ranges, so those are rejected here before translation.
    """

    if not pattern:
        return "empty pattern"
    i = 0
    while i < len(pattern):
        char = pattern[i]
        if char == "[":
            end = i + 1
            if end < len(pattern) and pattern[end] in "!^":
                end += 1
            if end < len(pattern) and pattern[end] == "]":
                end += 1
            end = pattern.find("]", end)
            if end < 0:
                return "unclosed character class"
            body = pattern[i + 1 : end].lstrip("!^")
            for match in re.finditer(r"(.)-(.)", body):
                if match.group(1) > match.group(2):
                    return f"invalid range '{match.group(0)}'"
            i = end + 1
            continue
        i += 1
    return None


def compile_patterns(patterns: Iterable[str]) -> list[Pattern[str]]:
    compiled: list[Pattern[str]] = []
    for pattern in patterns:
        problem = _glob_syntax_error(pattern)
        if problem:
            raise InvalidPatternError(f"Invalid glob pattern '{pattern}': {problem}")
        try:
            compiled.append(re.compile(fnmatch.translate(pattern)))
        except re.error as exc:
            raise InvalidPatternError(f"Invalid glob pattern '{pattern}': {exc}") from exc
    return compiled


def _matches(rel_path: str, patterns: Sequence[Pattern[str]]) -> bool:
    return any(pattern.match(rel_path) for pattern in patterns)


def discover_html_files(
    dist_path: Path,
    include: Sequence[str] = (),
    exclude: Sequence[str] = (),
) -> list[tuple[str, Path]]:
    """Return ``(rel_path, abs_path)`` for every HTML file under ``dist_path``.

    Symlinked directories are not followed. ``include`` narrows the set first,
    then ``exclude`` removes from it; both match the POSIX path relative to
    the dist root. The list is sorted by relative path.
    """

    include_patterns = compile_patterns(include)
    exclude_patterns = compile_patterns(exclude)

    found: list[tuple[str, Path]] = []
    for dirpath, _dirnames, filenames in os.walk(dist_path, followlinks=False):
        directory = Path(dirpath)
        for name in filenames:
            if not name.endswith(HTML_SUFFIXES):
                continue
            abs_path = directory / name
            if not abs_path.is_file():
                continue
            rel_path = abs_path.relative_to(dist_path).as_posix()
            if include_patterns and not _matches(rel_path, include_patterns):
                continue
            if exclude_patterns and _matches(rel_path, exclude_patterns):
                continue
            found.append((rel_path, abs_path))
    found.sort(key=lambda entry: entry[0])
    return found


def _extract_canonical(document: Document) -> Optional[str]:
    for element in document.select(CANONICAL_SELECTOR):
        return element.attr("href")
    return None


def _has_noindex(document: Document) -> bool:
    return any(
        "noindex" in (element.attr("content") or "").lower()
        for element in document.select(ROBOTS_SELECTOR)
    )


def extract_page(
    rel_path: str,
    abs_path: Path,
    policy: UrlNormalizationConfig,
    base_url: Optional[str] = None,
) -> Optional[Page]:
    """Read and parse one file; None if it cannot be read."""

    try:
        content = read_page_text(abs_path)
    except (OSError, UnicodeDecodeError) as exc:
        warn(f"[discovery] could not read '{rel_path}': {exc}")
        return None

    document = parse_document(content)
    canonical = _extract_canonical(document)
    noindex = _has_noindex(document)
    del document

    route = file_to_route(rel_path, policy)
    absolute_url = to_absolute(route, base_url) if base_url else None
    return Page(
        rel_path=rel_path,
        abs_path=abs_path,
        route=route,
        absolute_url=absolute_url,
        canonical=canonical,
        noindex=noindex,
        content=content,
    )


def extract_pages(
    files: Sequence[tuple[str, Path]],
    policy: UrlNormalizationConfig,
    base_url: Optional[str] = None,
    *,
    workers: Optional[int] = None,
) -> list[Page]:
    """Extract every file in parallel, dropping unreadable ones, in input order."""

    results = map_pages(
        lambda entry: extract_page(entry[0], entry[1], policy, base_url),
        files,
        workers=workers,
    )
    return [page for page in results if page is not None]


__all__ = [
    "InvalidPatternError",
    "Page",
    "compile_patterns",
    "discover_html_files",
    "extract_page",
    "extract_pages",
]
