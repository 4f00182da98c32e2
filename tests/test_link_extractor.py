# File: tests/test_link_extractor.py
from crawl_check.crawler.link_extractor import extract_links, internal_links

PAGE = "http://localhost:8080/about/"


def test_resolves_relative_and_keeps_order():
    html = '<a href="/skills/">S</a><a href="team/">T</a><a href=" ../contact/ ">C</a>'
    assert extract_links(html, PAGE) == [
        "http://localhost:8080/skills/",
        "http://localhost:8080/about/team/",
        "http://localhost:8080/contact/",
    ]


def test_base_href_wins_over_page_url():
    html = '<head><base href="http://localhost:8080/blog/"></head><a href="post-1/">P</a>'
    assert extract_links(html, PAGE) == ["http://localhost:8080/blog/post-1/"]


def test_bare_hash_keeps_fragment_marker():
    assert extract_links('<a href="#">top</a>', PAGE) == ["http://localhost:8080/about/#"]


def test_anchors_without_href_are_ignored():
    assert extract_links('<a name="x">x</a><a>y</a>', PAGE) == []


def test_internal_links_filters():
    html = (
        '<a href="/portfolio/">P</a>'
        '<a href="#">top</a>'
        '<a href="https://github.com/kei">gh</a>'
        '<a href="/wp-login.php">login</a>'
        '<a href="mailto:a@b.c">mail</a>'
    )
    assert internal_links(html, PAGE, "http://localhost:8080") == ["http://localhost:8080/portfolio/"]
