# crawl_check/crawler/url_filter.py
"""
Decides which URLs may enter the crawl frontier.

A URL is *internal* when it shares scheme, host and port with the configured
origin, carries no ``#`` fragment, is not a ``mailto:``/``tel:`` link and does
not point at the WordPress admin, login or logout screens.
"""
from __future__ import annotations

import re
from functools import lru_cache
from typing import Optional
from urllib.parse import urljoin, urlsplit

__all__ = ("DEFAULT_EXCLUDE", "is_internal_url", "origin_of")

DEFAULT_EXCLUDE = r"wp-admin|wp-login|logout"

_DEFAULT_PORTS = {"http": 80, "https": 443}
_CONTACT_SCHEME_RE = re.compile(r"^\s*(mailto|tel):", re.IGNORECASE)


@lru_cache(maxsize=32)
def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern, re.IGNORECASE)


def _origin_tuple(url: str) -> Optional[tuple[str, str, int]]:
    """(scheme, host, port) with the default port filled in; None for non-http(s)."""
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    if scheme not in _DEFAULT_PORTS or not parts.hostname:
        return None
    # .port raises ValueError on garbage like "host:abc"
    port = parts.port or _DEFAULT_PORTS[scheme]
    return scheme, parts.hostname.lower(), port


def origin_of(url: str) -> str:
    """Return ``scheme://host[:port]`` for *url*, omitting default ports.

    Raises :class:`ValueError` when *url* is not an absolute http(s) URL.
    """
    parsed = _origin_tuple(url)
    if parsed is None:
        raise ValueError(f"not an absolute http(s) URL: {url!r}")
    scheme, host, port = parsed
    if ":" in host:
        host = f"[{host}]"
    if port == _DEFAULT_PORTS[scheme]:
        return f"{scheme}://{host}"
    return f"{scheme}://{host}:{port}"


def is_internal_url(url: str, origin: str, exclude: str = DEFAULT_EXCLUDE) -> bool:
    """Return True if *url* may be crawled for *origin*.

    Relative URLs are resolved against *origin* first. Malformed input is
    rejected instead of raising.
    """
    if not url or _CONTACT_SCHEME_RE.match(url):
        return False
    # any fragment, including a bare "#", is an in-page jump;
    # urljoin drops an empty fragment, so look before resolving
    if "#" in url:
        return False
    raw = url.strip()
    try:
        parts = urlsplit(raw)
        # urljoin treats "http://" as relative and returns the base
        if parts.scheme and not parts.hostname:
            return False
        absolute = urljoin(origin.rstrip("/") + "/", raw)
        target = _origin_tuple(absolute)
        base = _origin_tuple(origin)
    except ValueError:
        return False
    if target is None or base is None or target != base:
        return False
    if exclude and _compile(exclude).search(absolute):
        return False
    return True
