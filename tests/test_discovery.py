from pathlib import Path

import pytest

from siteaudit.discovery import (
    InvalidPatternError,
    compile_patterns,
    discover_html_files,
    extract_page,
    extract_pages,
)
from siteaudit.models import UrlNormalizationConfig

POLICY = UrlNormalizationConfig()


def test_discovers_html_and_htm_sorted(dist: Path, write_page):
    write_page("index.html")
    write_page("blog/b.htm")
    write_page("blog/a.html")
    write_page("LEGACY.HTML")
    (dist / "styles.css").write_text("body {}", encoding="utf-8")

    found = [rel for rel, _ in discover_html_files(dist)]
    assert found == ["blog/a.html", "blog/b.htm", "index.html"]


def test_include_then_exclude(dist: Path, write_page):
    write_page("index.html")
    write_page("blog/post.html")
    write_page("blog/drafts/wip.html")

    found = [rel for rel, _ in discover_html_files(dist, ["blog/*"], ["*drafts*"])]
    assert found == ["blog/post.html"]


def test_symlinked_directories_are_not_followed(tmp_path: Path, dist: Path, write_page):
    write_page("index.html")
    write_page("blog/post.html")
    outside = tmp_path / "outside"
    outside.mkdir()
    (outside / "leak.html").write_text("<html></html>", encoding="utf-8")
    try:
        (dist / "blog" / "loop").symlink_to(dist, target_is_directory=True)
        (dist / "shared").symlink_to(outside, target_is_directory=True)
    except OSError:
        pytest.skip("symlinks not supported on this filesystem")

    found = [rel for rel, _ in discover_html_files(dist)]
    assert found == ["blog/post.html", "index.html"]


@pytest.mark.parametrize("pattern", ["[z-a]*.html", "blog/[abc", ""])
def test_invalid_patterns_raise(pattern: str):
    with pytest.raises(InvalidPatternError):
        compile_patterns([pattern])


def test_invalid_pattern_fails_before_walking(tmp_path: Path):
    with pytest.raises(InvalidPatternError):
        discover_html_files(tmp_path / "does-not-matter", ["[abc"])


def test_extracts_canonical_noindex_and_absolute_url(dist: Path, write_page):
    path = write_page(
        "about/index.html",
        head=(
            '<link rel="canonical" href="https://example.com/about/">'
            '<link rel="canonical" href="https://example.com/second/">'
            '<meta name="ROBOTS" content="NoIndex, follow">'
        ),
    )

    page = extract_page("about/index.html", path, POLICY, "https://example.com")
    assert page is not None
    assert page.route == "/about/"
    assert page.absolute_url == "https://example.com/about/"
    assert page.canonical == "https://example.com/about/"
    assert page.noindex is True


def test_page_without_base_url_has_no_absolute_url(dist: Path, write_page):
    path = write_page("index.html", head='<meta name="robots" content="index, follow">')

    page = extract_page("index.html", path, POLICY)
    assert page is not None
    assert page.absolute_url is None
    assert page.canonical is None
    assert page.noindex is False


def test_unreadable_file_is_skipped(dist: Path, write_page, capsys):
    write_page("good.html")
    (dist / "bad.html").write_bytes(b"<html>\xff\xfe\xfa</html>")

    pages = extract_pages(discover_html_files(dist), POLICY, workers=2)
    assert [page.rel_path for page in pages] == ["good.html"]
    assert "bad.html" in capsys.readouterr().err
