"""Whole-site route index built once per run and shared read-only."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping, Optional
from urllib.parse import unquote

from .discovery import Page
from .io_utils import warn
from .sitemap import SITEMAP_FILENAME, parse_sitemap


@dataclass(frozen=True)
class RouteCollision:
    """A page whose route was already owned by an earlier page."""

    route: str
    kept: str
    dropped: str


@dataclass(frozen=True)
class RouteIndex:
    """Single source of truth for pages, routes and sitemap entries.

    When two files normalize to the same route the first one in discovery
    order owns it. Every page stays in ``pages`` so it is still audited on its
    own; the collision is kept in ``collisions``.
    """

    pages: tuple[Page, ...]
    routes: Mapping[str, Page]
    dist_path: Path
    base_url: Optional[str] = None
    sitemap_urls: frozenset[str] = frozenset()
    sitemap_present: bool = False
    collisions: tuple[RouteCollision, ...] = ()
    _by_url: Mapping[str, Page] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def build(
        cls,
        pages: Iterable[Page],
        dist_path: Path,
        base_url: Optional[str] = None,
    ) -> "RouteIndex":
        ordered = tuple(pages)
        routes: dict[str, Page] = {}
        by_url: dict[str, Page] = {}
        collisions: list[RouteCollision] = []
        for page in ordered:
            owner = routes.get(page.route)
            if owner is not None:
                warn(
                    f"[routes] '{page.rel_path}' normalizes to '{page.route}', "
                    f"already owned by '{owner.rel_path}'; keeping the first"
                )
                collisions.append(RouteCollision(page.route, owner.rel_path, page.rel_path))
                continue
            routes[page.route] = page
            if page.absolute_url:
                by_url[page.absolute_url] = page

        sitemap_path = dist_path / SITEMAP_FILENAME
        sitemap_present = sitemap_path.is_file()
        sitemap_urls = parse_sitemap(sitemap_path) if sitemap_present else frozenset()

        return cls(
            pages=ordered,
            routes=MappingProxyType(routes),
            dist_path=dist_path,
            base_url=base_url,
            sitemap_urls=sitemap_urls,
            sitemap_present=sitemap_present,
            collisions=tuple(collisions),
            _by_url=MappingProxyType(by_url),
        )

    def route_exists(self, route: str) -> bool:
        return route in self.routes

    def page_for_route(self, route: str) -> Optional[Page]:
        return self.routes.get(route)

    def page_for_url(self, absolute_url: str) -> Optional[Page]:
        return self._by_url.get(absolute_url)

    def file_exists(self, rel_path: str) -> bool:
        """Check the dist tree directly, for assets that are not routes."""

        rel_path = rel_path.lstrip("/")
        if not rel_path:
            return False
        for candidate in (rel_path, unquote(rel_path)):
            if ".." in Path(candidate).parts:
                continue
            if (self.dist_path / candidate).exists():
                return True
        return False


__all__ = ["RouteCollision", "RouteIndex"]
