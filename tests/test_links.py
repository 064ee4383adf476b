from siteaudit.links import (
    LinkKind,
    classify,
    has_query_params,
    is_internal,
    is_skipped_scheme,
    resolve_href,
    same_origin,
    split_fragment,
)

BASE = "https://example.com"


def test_classify():
    assert classify("#top") == LinkKind.FRAGMENT
    assert classify("//cdn.example.com/x.js") == LinkKind.PROTOCOL_RELATIVE
    assert classify("https://example.com/") == LinkKind.ABSOLUTE
    assert classify("../about/") == LinkKind.RELATIVE


def test_relative_and_fragment_links_are_internal_without_base():
    assert is_internal("/about/", None)
    assert is_internal("#section", None)
    assert not is_internal("https://example.com/about/", None)


def test_absolute_links_compare_host():
    assert is_internal("https://example.com/about/", BASE)
    assert is_internal("https://EXAMPLE.com:443/about/", BASE)
    assert is_internal("https://example.com:8080/about/", BASE)
    assert is_internal("http://example.com/about/", BASE)
    assert not is_internal("https://www.example.com/", BASE)
    assert not is_internal("https://other.com/", BASE)
    assert not is_internal("https://[broken/", BASE)


def test_protocol_relative_links_compare_host():
    assert is_internal("//example.com/about/", BASE)
    assert not is_internal("//cdn.example.net/x.js", BASE)


def test_resolve_href_relative_to_page_directory():
    assert resolve_href("../contact", "/blog/posts/") == "/blog/contact"
    assert resolve_href("post-2/", "/blog/") == "/blog/post-2/"
    assert resolve_href("sibling", "/blog/post") == "/blog/sibling"


def test_resolve_href_edge_forms():
    assert resolve_href("#section", "/blog/") == "/blog/"
    assert resolve_href("?page=2", "/blog/") == "/blog/"
    assert resolve_href("/a/../b/", "/x/") == "/b/"
    assert resolve_href("https://example.com/a/b?x=1#y", "/") == "/a/b"
    assert resolve_href("https://example.com", "/x/") == "/"
    assert resolve_href("//example.com/assets/app.js", "/", BASE) == "/assets/app.js"
    assert resolve_href("http://[bad/", "/") is None


def test_query_and_fragment_helpers():
    assert has_query_params("/search?q=1")
    assert not has_query_params("/page#frag?notquery")
    assert split_fragment("/a/#team") == "team"
    assert split_fragment("/a/") is None
    assert is_skipped_scheme("MAILTO:someone@example.com")
    assert is_skipped_scheme("javascript:void(0)")
    assert not is_skipped_scheme("/contact/")


def test_same_origin():
    assert same_origin("https://example.com/a", BASE) is True
    assert same_origin("https://other.com/a", BASE) is False
    assert same_origin("/a", BASE) is None
