from pathlib import Path

from siteaudit import checks_hreflang
from siteaudit.audit import build_index
from siteaudit.models import AuditConfig

BASE = "https://example.com"


def _alternate(lang: str, href: str) -> str:
    return f'<link rel="alternate" hreflang="{lang}" href="{href}">'


def _run(dist: Path, hreflang: dict):
    config = AuditConfig.model_validate(
        {"site": {"base_url": BASE}, "hreflang": {"check_hreflang": True, **hreflang}}
    )
    return checks_hreflang.check_all(build_index(dist, config), config)


def test_missing_back_link_reported_once_on_source(dist: Path, write_page):
    write_page(
        "en/index.html",
        head=_alternate("en", f"{BASE}/en/") + _alternate("fr", f"{BASE}/fr/"),
    )
    write_page("fr/index.html")

    findings = _run(dist, {"require_reciprocal": True})
    assert [(f.rule_id, f.file) for f in findings] == [("hreflang/no-reciprocal", "en/index.html")]


def test_reciprocal_pairs_are_clean(dist: Path, write_page):
    pairs = _alternate("en", f"{BASE}/en/") + _alternate("fr", f"{BASE}/fr/")
    write_page("en/index.html", head=pairs + _alternate("x-default", f"{BASE}/en/"))
    write_page("fr/index.html", head=pairs)

    assert _run(dist, {"require_reciprocal": True}) == []


def test_targets_outside_dist_are_ignored(dist: Path, write_page):
    write_page("en/index.html", head=_alternate("de", "https://example.de/"))

    assert _run(dist, {"require_reciprocal": True}) == []


def test_x_default_and_self_reference(dist: Path, write_page):
    write_page("en/index.html", head=_alternate("fr", f"{BASE}/fr/"))
    write_page("fr/index.html", head=_alternate("X-Default", f"{BASE}/fr/"))
    write_page("plain/index.html")

    findings = _run(dist, {"require_x_default": True, "require_self_reference": True})
    assert sorted((f.file, f.rule_id) for f in findings) == [
        ("en/index.html", "hreflang/no-self-reference"),
        ("en/index.html", "hreflang/no-x-default"),
    ]


def test_disabled_by_default(dist: Path, write_page):
    write_page("en/index.html", head=_alternate("fr", f"{BASE}/fr/"))
    config = AuditConfig.model_validate({"site": {"base_url": BASE}})

    assert checks_hreflang.check_all(build_index(dist, config), config) == []
