from pathlib import Path

from siteaudit.sitemap import parse_sitemap

NAMESPACED = """<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
  <url><loc>https://example.com/</loc><lastmod>2024-01-01</lastmod></url>
  <url><loc>
    https://example.com/about/
  </loc></url>
  <url><loc></loc></url>
</urlset>
"""


def test_parses_namespaced_sitemap(tmp_path: Path):
    path = tmp_path / "sitemap.xml"
    path.write_text(NAMESPACED, encoding="utf-8")

    assert parse_sitemap(path) == frozenset(
        {"https://example.com/", "https://example.com/about/"}
    )


def test_parses_plain_sitemap(tmp_path: Path):
    path = tmp_path / "sitemap.xml"
    path.write_text("<urlset><url><loc>https://example.com/a/</loc></url></urlset>", encoding="utf-8")

    assert parse_sitemap(path) == frozenset({"https://example.com/a/"})


def test_malformed_sitemap_is_empty(tmp_path: Path, capsys):
    path = tmp_path / "sitemap.xml"
    path.write_text("<urlset><url><loc>https://example.com/", encoding="utf-8")

    assert parse_sitemap(path) == frozenset()
    assert "[sitemap]" in capsys.readouterr().err


def test_missing_sitemap_is_empty(tmp_path: Path):
    assert parse_sitemap(tmp_path / "sitemap.xml") == frozenset()
