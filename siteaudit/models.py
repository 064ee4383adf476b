"""Pydantic models for audit configuration."""

from enum import Enum
from typing import Optional
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TrailingSlash(str, Enum):
    """How routes treat a trailing slash."""

    ALWAYS = "always"
    NEVER = "never"
    IGNORE = "ignore"


class IndexHtml(str, Enum):
    """Whether ``index.html`` suffixes are part of a route."""

    FORBID = "forbid"
    ALLOW = "allow"


class _Section(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class SiteConfig(_Section):
    """Site-wide settings."""

    base_url: Optional[str] = Field(
        None,
        description="Public base URL (e.g., https://example.com) used for absolute URLs.",
    )

    @field_validator("base_url")
    @classmethod
    def _check_base_url(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        if not value:
            return None
        try:
            parts = urlsplit(value)
            _ = parts.port
        except ValueError as exc:
            raise ValueError(f"base_url '{value}' is not a valid URL: {exc}") from exc
        if parts.scheme.lower() not in ("http", "https") or not parts.hostname:
            raise ValueError(
                f"base_url '{value}' must be an absolute http(s) URL such as https://example.com"
            )
        return value


class UrlNormalizationConfig(_Section):
    """Normalization policy applied to every route and resolved href."""

    trailing_slash: TrailingSlash = Field(
        TrailingSlash.ALWAYS, description="Append, strip, or leave trailing slashes."
    )
    index_html: IndexHtml = Field(
        IndexHtml.FORBID,
        description="Strip index.html/index.htm suffixes (forbid) or keep them literal (allow).",
    )
    report_collisions: bool = Field(
        True, description="Report files that normalize to an already indexed route."
    )


class CanonicalConfig(_Section):
    """Canonical link requirements."""

    require: bool = Field(True, description="Run canonical checks on every page.")
    absolute: bool = Field(True, description="Canonical href must be an absolute URL.")
    same_origin: bool = Field(
        True, description="Canonical origin must match the configured base URL."
    )
    self_reference: bool = Field(
        False, description="Canonical must point at the page's own URL."
    )


class RobotsMetaConfig(_Section):
    """Robots meta directive policy."""

    allow_noindex: bool = Field(True, description="Tolerate noindex pages silently.")
    fail_if_noindex: bool = Field(False, description="Report noindex pages as errors.")


class LinksConfig(_Section):
    """Internal link graph checks."""

    check_internal: bool = Field(True, description="Resolve every internal link.")
    fail_on_broken: bool = Field(
        True, description="Report broken links as errors instead of warnings."
    )
    forbid_query_params_internal: bool = Field(
        True, description="Flag internal links carrying query parameters."
    )
    check_fragments: bool = Field(
        False, description="Verify #fragment targets on the same and target pages."
    )
    detect_orphan_pages: bool = Field(
        False, description="Flag pages that no other page links to."
    )
    check_mixed_content: bool = Field(
        True, description="Flag internal links that use http://."
    )


class SitemapConfig(_Section):
    """sitemap.xml consistency checks."""

    require: bool = Field(False, description="Report a missing or empty sitemap.xml.")
    canonical_must_be_in_sitemap: bool = Field(
        True, description="Every indexable page's canonical must be listed."
    )
    forbid_noncanonical_in_sitemap: bool = Field(
        False, description="Listed URLs must equal the target page's canonical."
    )
    entries_must_exist_in_dist: bool = Field(
        True, description="Every listed URL must map to a discovered route."
    )


class HreflangConfig(_Section):
    """Language alternate annotations."""

    check_hreflang: bool = Field(False, description="Run hreflang checks.")
    require_x_default: bool = Field(False, description="Require an x-default entry.")
    require_self_reference: bool = Field(
        False, description="Require an entry pointing at the page itself."
    )
    require_reciprocal: bool = Field(
        False, description="Require alternates to link back to the source page."
    )


class RobotsTxtConfig(_Section):
    """robots.txt presence checks."""

    require: bool = Field(False, description="Report a missing robots.txt.")
    require_sitemap_link: bool = Field(
        False, description="robots.txt must contain a Sitemap: directive."
    )


class AuditConfig(_Section):
    """Top-level audit configuration, validated once and shared read-only."""

    site: SiteConfig = Field(default_factory=SiteConfig)
    url_normalization: UrlNormalizationConfig = Field(
        default_factory=UrlNormalizationConfig
    )
    canonical: CanonicalConfig = Field(default_factory=CanonicalConfig)
    robots_meta: RobotsMetaConfig = Field(default_factory=RobotsMetaConfig)
    links: LinksConfig = Field(default_factory=LinksConfig)
    sitemap: SitemapConfig = Field(default_factory=SitemapConfig)
    hreflang: HreflangConfig = Field(default_factory=HreflangConfig)
    robots_txt: RobotsTxtConfig = Field(default_factory=RobotsTxtConfig)
    workers: Optional[int] = Field(
        None, ge=1, description="Worker threads for per-page passes (default: executor default)."
    )


__all__ = [
    "AuditConfig",
    "CanonicalConfig",
    "HreflangConfig",
    "IndexHtml",
    "LinksConfig",
    "RobotsMetaConfig",
    "RobotsTxtConfig",
    "SiteConfig",
    "SitemapConfig",
    "TrailingSlash",
    "UrlNormalizationConfig",
]
