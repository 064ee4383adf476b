from pathlib import Path

from siteaudit import checks_links
from siteaudit.audit import build_index
from siteaudit.findings import Level
from siteaudit.models import AuditConfig


def _run(dist: Path, settings: dict):
    config = AuditConfig.model_validate(settings)
    return checks_links.check_all(build_index(dist, config), config)


def test_reports_exactly_one_broken_link(dist: Path, write_page):
    write_page(
        "index.html",
        body=(
            '<a href="/about/">About</a>'
            '<a href="/missing/">Missing</a>'
            '<a href="mailto:hi@example.com">Mail</a>'
            '<a href="tel:+123">Call</a>'
            '<a href="javascript:void(0)">JS</a>'
            '<a href="https://other.example.org/">External</a>'
            '<a href="">Empty</a>'
        ),
    )
    write_page("about/index.html", body='<a href="../">Home</a>')

    findings = _run(dist, {})
    assert [(f.rule_id, f.file, f.selector) for f in findings] == [
        ("links/broken", "index.html", "a[href='/missing/']")
    ]
    assert findings[0].level == Level.ERROR


def test_broken_links_downgrade_to_warnings(dist: Path, write_page):
    write_page("index.html", body='<a href="/missing/">Missing</a>')

    findings = _run(dist, {"links": {"fail_on_broken": False}})
    assert [(f.rule_id, f.level) for f in findings] == [("links/broken", Level.WARNING)]


def test_relative_links_and_assets_resolve(dist: Path, write_page):
    write_page("blog/posts/index.html", body='<a href="../contact">Contact</a>')
    write_page("blog/contact.html")
    (dist / "styles").mkdir()
    (dist / "styles" / "site.css").write_text("", encoding="utf-8")
    write_page("index.html", body='<a href="/styles/site.css">css</a><a href="blog/posts/">Posts</a>')

    assert _run(dist, {}) == []


def test_query_params_flagged_but_not_broken(dist: Path, write_page):
    write_page("index.html", body='<a href="/about/?ref=nav">About</a>')
    write_page("about/index.html")

    findings = _run(dist, {})
    assert [f.rule_id for f in findings] == ["links/query-params"]

    assert _run(dist, {"links": {"forbid_query_params_internal": False}}) == []


def test_mixed_content_on_internal_links(dist: Path, write_page):
    write_page("index.html", body='<a href="http://example.com/about/">About</a>')
    write_page("about/index.html")

    findings = _run(dist, {"site": {"base_url": "http://example.com"}})
    assert [f.rule_id for f in findings] == ["links/mixed-content"]


def test_http_link_on_https_site_is_mixed_content(dist: Path, write_page):
    write_page(
        "index.html",
        body='<a href="http://example.com/about/">About</a><a href="http://other.example.org/">x</a>',
    )
    write_page("about/index.html")

    findings = _run(dist, {"site": {"base_url": "https://example.com"}})
    assert [(f.rule_id, f.selector) for f in findings] == [
        ("links/mixed-content", "a[href='http://example.com/about/']")
    ]

    settings = {"site": {"base_url": "https://example.com"}, "links": {"check_mixed_content": False}}
    assert _run(dist, settings) == []


def test_fragments_on_same_and_target_pages(dist: Path, write_page):
    write_page(
        "index.html",
        body=(
            '<h2 id="intro">Intro</h2>'
            '<a href="#intro">ok</a>'
            '<a href="#nope">bad</a>'
            '<a href="#">top</a>'
            '<a href="/about/#team">ok</a>'
            '<a href="/about/#missing">bad</a>'
        ),
    )
    write_page("about/index.html", body='<section id="team"></section>')

    findings = _run(dist, {"links": {"check_fragments": True}})
    assert sorted(f.selector for f in findings) == [
        "a[href='#nope']",
        "a[href='/about/#missing']",
    ]
    assert {f.rule_id for f in findings} == {"links/broken-fragment"}

    assert _run(dist, {}) == []


def test_orphan_pages_exempt_root_and_ignore_self_links(dist: Path, write_page):
    write_page("index.html", body='<a href="/a/">A</a>')
    write_page("a/index.html", body='<a href="/a/">self</a>')
    write_page("b/index.html", body='<a href="/b/">self</a><a href="/a/">A</a>')

    findings = _run(dist, {"links": {"check_internal": False, "detect_orphan_pages": True}})
    assert [(f.rule_id, f.file) for f in findings] == [("links/orphan-page", "b/index.html")]
