"""Loading and overriding the audit configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from .io_utils import warn
from .models import AuditConfig, SiteConfig

CONFIG_FILENAMES = ("siteaudit.yaml", ".siteaudit.yaml")


def load_config(path: Path) -> AuditConfig:
    """Validate a YAML config file; exits with a readable message if invalid."""

    try:
        data: Any = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except OSError as exc:
        raise SystemExit(f"Could not read config {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise SystemExit(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise SystemExit(f"{path} must contain a mapping of config sections.")
    try:
        return AuditConfig.model_validate(data)
    except ValidationError as exc:
        raise SystemExit(f"Invalid config in {path}: {exc}") from exc


def discover_config(dist_path: Path, cwd: Optional[Path] = None) -> Optional[AuditConfig]:
    """Look for a config file in the working directory, then next to dist.

    A discovered file that does not validate is reported and skipped.
    """

    search_dirs = [cwd or Path.cwd(), dist_path.resolve().parent]
    for directory in search_dirs:
        for name in CONFIG_FILENAMES:
            candidate = directory / name
            if not candidate.is_file():
                continue
            try:
                return load_config(candidate)
            except SystemExit as exc:
                warn(f"[config] found '{candidate}' but failed to load it: {exc}")
    return None


def apply_overrides(
    config: AuditConfig,
    *,
    site: Optional[str] = None,
    no_sitemap_check: bool = False,
    workers: Optional[int] = None,
) -> AuditConfig:
    """Return a new config with command-line overrides applied.

    ``model_copy`` skips validation, so the base URL is validated here.
    """

    updates: dict[str, Any] = {}
    if site:
        try:
            updates["site"] = SiteConfig.model_validate({"base_url": site})
        except ValidationError as exc:
            raise SystemExit(f"Invalid --site value: {exc}") from exc
    if no_sitemap_check:
        updates["sitemap"] = config.sitemap.model_copy(
            update={
                "require": False,
                "canonical_must_be_in_sitemap": False,
                "forbid_noncanonical_in_sitemap": False,
                "entries_must_exist_in_dist": False,
            }
        )
    if workers is not None:
        updates["workers"] = workers
    if not updates:
        return config
    return config.model_copy(update=updates)


def resolve_config(
    dist_path: Path,
    config_path: Optional[Path] = None,
    **overrides: Any,
) -> AuditConfig:
    """Explicit file, else auto-discovery, else defaults; then overrides."""

    if config_path is not None:
        config = load_config(config_path)
    else:
        config = discover_config(dist_path) or AuditConfig()
    return apply_overrides(config, **overrides)


__all__ = ["CONFIG_FILENAMES", "apply_overrides", "discover_config", "load_config", "resolve_config"]
