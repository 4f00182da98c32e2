# File: tests/test_engine.py
from __future__ import annotations

import pytest
from aiohttp import web

from crawl_check.config import CrawlConfig
from crawl_check.engine import fatal_report, run_check
from crawl_check.errors import OriginUnreachable
from crawl_check.logsource import LogOutput, LogSource, NullLogSource
from fakes import FakeBrowser, FakeRoute, links, serve_app


class RecordingSource(LogSource):
    def __init__(self, lines):
        self.lines = lines
        self.windows = []

    def read(self, since, until):
        self.windows.append((since, until))
        return LogOutput(lines=list(self.lines))


def _site_app(port: int) -> web.Application:
    app = web.Application()
    base = f"http://127.0.0.1:{port}"

    async def root(_):
        return web.Response(text="home", content_type="text/html")

    async def sitemap(_):
        xml = f"<urlset><url><loc>{base}/blog/</loc></url></urlset>"
        return web.Response(text=xml, content_type="application/xml")

    app.router.add_get("/", root)
    app.router.add_get("/sitemap.xml", sitemap)
    return app


def _config(base: str, **kw) -> CrawlConfig:
    return CrawlConfig(
        base_url=base,
        start_paths=["/", "/contact/"],
        settle_delay=0,
        probe_timeout=2.0,
        **kw,
    )


@pytest.mark.asyncio()
async def test_full_run_all_green(free_port):
    async for base in serve_app(_site_app(free_port), free_port):
        browser = FakeBrowser({
            f"{base}/blog/": FakeRoute(html=links("/")),
            f"{base}/": FakeRoute(html=links("/contact/")),
            f"{base}/contact/": FakeRoute(),
        })
        source = RecordingSource(["GET / 200", "GET /contact/ 200"])
        report = await run_check(_config(base), browser=browser, log_source=source)

    # sitemap URL first, then the fixed paths
    assert browser.opened == [f"{base}/blog/", f"{base}/", f"{base}/contact/"]
    s = report.summary
    assert (s.pages_visited, s.pages_passed, s.pages_failed) == (3, 3, 0)
    assert s.log_error_count == 0
    assert s.base_url == base
    assert s.started_at <= s.finished_at
    assert report.exit_code == 0

    [(since, until)] = source.windows
    assert since == s.started_at
    assert since <= until <= s.finished_at


@pytest.mark.asyncio()
async def test_log_errors_fail_the_run(free_port):
    async for base in serve_app(_site_app(free_port), free_port):
        browser = FakeBrowser({f"{base}/": FakeRoute(), f"{base}/contact/": FakeRoute()})
        source = RecordingSource(["[error] PHP Fatal error: boom", "fine"])
        report = await run_check(_config(base, use_sitemap=False), browser=browser, log_source=source)

    assert report.summary.pages_failed == 0
    assert report.log_error_lines == ["[error] PHP Fatal error: boom"]
    assert report.summary.log_error_count == 1
    assert report.exit_code == 1


@pytest.mark.asyncio()
async def test_failing_page_fails_the_run(free_port):
    async for base in serve_app(_site_app(free_port), free_port):
        browser = FakeBrowser({
            f"{base}/": FakeRoute(),
            f"{base}/contact/": FakeRoute(failed_requests=[(f"{base}/broken.png", "net::ERR_FAILED")]),
        })
        report = await run_check(_config(base, use_sitemap=False), browser=browser, log_source=NullLogSource())

    data = report.to_dict()
    assert data["summary"]["pagesFailed"] == 1
    contact = next(r for r in data["results"] if r["url"].endswith("/contact/"))
    assert contact["ok"] is False
    assert contact["requestFailures"][0]["url"].endswith("/broken.png")
    assert report.exit_code == 1


@pytest.mark.asyncio()
async def test_http_error_on_origin_is_not_fatal(free_port):
    app = web.Application()  # every path 404s
    async for base in serve_app(app, free_port):
        browser = FakeBrowser({})
        report = await run_check(_config(base, use_sitemap=False), browser=browser, log_source=NullLogSource())

    assert report.summary.fatal_error is None
    assert report.summary.pages_visited == 2
    assert report.summary.pages_failed == 2


@pytest.mark.asyncio()
async def test_unreachable_origin_raises_before_browser(free_port):
    browser = FakeBrowser({})
    with pytest.raises(OriginUnreachable):
        await run_check(_config(f"http://127.0.0.1:{free_port}"), browser=browser, log_source=NullLogSource())
    assert browser.opened == []


def test_fatal_report_shape():
    cfg = CrawlConfig(base_url="http://localhost:8080")
    report = fatal_report(cfg, OriginUnreachable("http://localhost:8080", "Connection refused"), "2024-01-01T00:00:00.000Z")
    data = report.to_dict()

    assert data["results"] == []
    assert data["logErrorLines"] == []
    s = data["summary"]
    assert s["baseUrl"] == "http://localhost:8080"
    assert (s["pagesVisited"], s["pagesPassed"], s["pagesFailed"]) == (0, 0, 0)
    assert s["logErrorCount"] is None
    assert s["startedAt"] == "2024-01-01T00:00:00.000Z"
    assert "Connection refused" in s["fatalError"]
    assert report.exit_code == 1
