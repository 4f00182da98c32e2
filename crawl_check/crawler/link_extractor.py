# crawl_check/crawler/link_extractor.py
"""
Link extraction from a rendered page's DOM snapshot.
"""
from __future__ import annotations

from typing import List
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from bs4.element import Tag

from crawl_check.crawler.url_filter import DEFAULT_EXCLUDE, is_internal_url


def _document_base(soup: BeautifulSoup, page_url: str) -> str:
    base = soup.find("base", href=True)
    if isinstance(base, Tag):
        href = base.get("href")
        if isinstance(href, str) and href.strip():
            return urljoin(page_url, href.strip())
    return page_url


def extract_links(html: str, page_url: str) -> List[str]:
    """
    Return every ``<a href>`` in *html* as an absolute URL, in document order.

    Hrefs resolve the way the browser resolves ``a.href``: against
    ``<base href>`` when present, else against *page_url*.
    """
    soup = BeautifulSoup(html, "html.parser")
    base_url = _document_base(soup, page_url)
    links: List[str] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str):
            continue
        raw = href_val.strip()
        try:
            absolute = urljoin(base_url, raw)
        except ValueError:
            continue
        # a.href keeps an empty fragment, urljoin drops it
        if raw.endswith("#") and not absolute.endswith("#"):
            absolute += "#"
        links.append(absolute)
    return links


def internal_links(html: str, page_url: str, origin: str, exclude: str = DEFAULT_EXCLUDE) -> List[str]:
    """Same as :func:`extract_links`, keeping only URLs the crawl may follow."""
    return [u for u in extract_links(html, page_url) if is_internal_url(u, origin, exclude)]
