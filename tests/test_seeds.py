# File: tests/test_seeds.py
from __future__ import annotations

import pytest
from aiohttp import ClientSession, ClientTimeout, web

from crawl_check.config import CrawlConfig
from crawl_check.crawler.seeds import collect_seeds, fetch_sitemap_urls, seed_paths
from crawl_check.parser.sitemap_parser import parse_sitemap
from fakes import serve_app

SITEMAP = """<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
  <url><loc>{base}/</loc></url>
  <url><loc> {base}/blog/hello-world/ </loc></url>
  <url><loc>{base}/wp-login.php</loc></url>
  <url><loc>https://cdn.example.com/elsewhere/</loc></url>
</urlset>
"""


def test_parse_sitemap_namespaced():
    xml = SITEMAP.format(base="http://x.test")
    assert parse_sitemap(xml) == [
        "http://x.test/",
        "http://x.test/blog/hello-world/",
        "http://x.test/wp-login.php",
        "https://cdn.example.com/elsewhere/",
    ]


def test_parse_sitemap_index_and_plain():
    xml = b"<sitemapindex><sitemap><loc>http://x.test/post-sitemap.xml</loc></sitemap></sitemapindex>"
    assert parse_sitemap(xml) == ["http://x.test/post-sitemap.xml"]


@pytest.mark.parametrize("content", ["", "   ", "not xml at all", b"\x00\x01"])
def test_parse_sitemap_garbage(content):
    assert parse_sitemap(content) == []


def test_seed_paths_resolve_against_origin():
    cfg = CrawlConfig(base_url="http://localhost:8080/sub/", start_paths=["/", "/about/", "/wp-admin/"])
    assert seed_paths(cfg) == ["http://localhost:8080/", "http://localhost:8080/about/"]


def _config(base: str, **kw) -> CrawlConfig:
    return CrawlConfig(base_url=base, start_paths=["/", "/contact/"], probe_timeout=2.0, **kw)


@pytest.mark.asyncio()
async def test_sitemap_urls_are_filtered(free_port):
    app = web.Application()

    async def sitemap(request):
        base = f"http://127.0.0.1:{free_port}"
        return web.Response(text=SITEMAP.format(base=base), content_type="application/xml")

    app.router.add_get("/sitemap.xml", sitemap)

    async for base in serve_app(app, free_port):
        async with ClientSession(timeout=ClientTimeout(total=2)) as session:
            urls = await fetch_sitemap_urls(session, _config(base))
            seeds = await collect_seeds(session, _config(base))

    assert urls == [f"{base}/", f"{base}/blog/hello-world/"]
    # sitemap first, fixed paths after, duplicates dropped
    assert seeds == [f"{base}/", f"{base}/blog/hello-world/", f"{base}/contact/"]


@pytest.mark.asyncio()
async def test_missing_sitemap_keeps_fixed_paths(free_port):
    app = web.Application()

    async for base in serve_app(app, free_port):
        async with ClientSession() as session:
            seeds = await collect_seeds(session, _config(base))

    assert seeds == [f"{base}/", f"{base}/contact/"]


@pytest.mark.asyncio()
async def test_unreachable_sitemap_is_swallowed(free_port):
    base = f"http://127.0.0.1:{free_port}"
    async with ClientSession() as session:
        assert await fetch_sitemap_urls(session, _config(base)) == []
        assert await collect_seeds(session, _config(base)) == [f"{base}/", f"{base}/contact/"]


@pytest.mark.asyncio()
async def test_sitemap_can_be_disabled(free_port):
    app = web.Application()
    hits = {"n": 0}

    async def sitemap(request):
        hits["n"] += 1
        return web.Response(text="<urlset/>", content_type="application/xml")

    app.router.add_get("/sitemap.xml", sitemap)

    async for base in serve_app(app, free_port):
        async with ClientSession() as session:
            seeds = await collect_seeds(session, _config(base, use_sitemap=False))

    assert hits["n"] == 0
    assert seeds == [f"{base}/", f"{base}/contact/"]
