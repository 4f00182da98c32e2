# crawl_check/crawler/crawler.py
"""
Browser-driven crawl loop: a FIFO frontier of same-origin URLs, one tab per
page, bounded by ``max_pages``.
"""
from __future__ import annotations

import asyncio
import time
from collections import deque
from contextlib import AsyncExitStack
from typing import Any, Deque, Iterable, List, Optional, Set

from playwright.async_api import Error as PlaywrightError

from crawl_check.config import CrawlConfig
from crawl_check.crawler.browser import launch_browser
from crawl_check.crawler.link_extractor import internal_links
from crawl_check.crawler.models import PageProbe, PageResult
from crawl_check.crawler.url_filter import is_internal_url
from crawl_check.logger import logger

__all__ = ("SmokeCrawler",)


class SmokeCrawler:
    """Sequential breadth-first crawl that loads each page in a real browser tab.

    Every page gets a fresh tab. Console errors, uncaught exceptions and
    failed requests are collected while it loads and during the settle delay.
    Navigation failures are recorded on the page instead of aborting the run.
    """

    def __init__(self, config: CrawlConfig, browser: Any = None) -> None:
        self.config = config
        self.origin = config.origin
        self.visited: Set[str] = set()
        self._browser = browser
        self._stack: Optional[AsyncExitStack] = None

    async def __aenter__(self) -> SmokeCrawler:
        if self._browser is None:
            self._stack = AsyncExitStack()
            try:
                self._browser = await self._stack.enter_async_context(launch_browser(self.config))
            except BaseException:
                await self._stack.aclose()
                self._stack = None
                raise
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._stack is not None:
            stack, self._stack = self._stack, None
            self._browser = None
            await stack.aclose()

    async def crawl(self, seeds: Iterable[str]) -> List[PageResult]:
        if self._browser is None:
            raise RuntimeError("Browser not started; use 'async with SmokeCrawler(...)'")
        logger.info("Crawl start: %s (max %d pages)", self.origin, self.config.max_pages)
        start = time.monotonic()
        queue: Deque[str] = deque(seeds)
        results: List[PageResult] = []

        while queue and len(self.visited) < self.config.max_pages:
            url = queue.popleft()
            if not url or url in self.visited:
                continue
            if not is_internal_url(url, self.origin, self.config.exclude_pattern):
                logger.debug("Skip %s", url)
                continue
            self.visited.add(url)

            result = await self._visit(url)
            results.append(result)
            for link in result.discovered_links:
                if link not in self.visited:
                    queue.append(link)

            if result.ok:
                logger.info("[%d] OK   %s", len(results), url)
            else:
                logger.warning(
                    "[%d] FAIL %s (status=%s, console=%d, exceptions=%d, requests=%d)",
                    len(results), url, result.status, len(result.console_errors),
                    len(result.page_errors), len(result.request_failures),
                )

        duration = time.monotonic() - start
        logger.info("Crawl finished: %d pages in %.2f s", len(results), duration)
        if queue and len(self.visited) >= self.config.max_pages:
            logger.info("Page limit %d reached, %d URLs left in queue", self.config.max_pages, len(queue))
        return results

    async def _visit(self, url: str) -> PageResult:
        page = await self._browser.new_page()
        probe = PageProbe(url)
        page.on("console", probe.on_console)
        page.on("pageerror", probe.on_page_error)
        page.on("requestfailed", probe.on_request_failed)
        try:
            response = None
            try:
                response = await page.goto(
                    url,
                    wait_until="domcontentloaded",
                    timeout=self.config.page_timeout * 1000,
                )
                # late scripts still get a chance to fail
                if self.config.settle_delay:
                    await asyncio.sleep(self.config.settle_delay)
            except PlaywrightError as e:
                probe.page_errors.append(f"navigation-error: {e.message}")

            status = response.status if response is not None else None
            links = await self._links(page)
            return probe.freeze(status, links)
        finally:
            await page.close()

    async def _links(self, page: Any) -> List[str]:
        try:
            html = await page.content()
        except PlaywrightError as e:
            logger.debug("No DOM for %s: %s", page.url, e.message)
            return []
        # about:blank after a failed navigation
        base = page.url if str(page.url).startswith(("http://", "https://")) else self.origin
        return internal_links(html, base, self.origin, self.config.exclude_pattern)
