# crawl_check/crawler/seeds.py
"""
Initial frontier: URLs listed in ``/sitemap.xml`` plus the fixed seed paths.

The sitemap lookup is best-effort. Whatever goes wrong there (HTTP error,
refused connection, timeout, broken XML) just leaves the fixed paths.
"""
from __future__ import annotations

import asyncio
from typing import List
from urllib.parse import urljoin

from aiohttp import ClientError, ClientSession

from crawl_check.config import CrawlConfig
from crawl_check.crawler.url_filter import is_internal_url
from crawl_check.logger import logger
from crawl_check.parser.sitemap_parser import parse_sitemap
from crawl_check.utils import remove_duplicates

__all__ = ("fetch_sitemap_urls", "seed_paths", "collect_seeds")


async def fetch_sitemap_urls(session: ClientSession, config: CrawlConfig) -> List[str]:
    """Return internal ``<loc>`` URLs from the origin's sitemap, or ``[]``."""
    origin = config.origin
    sitemap_url = urljoin(origin + "/", config.sitemap_path)
    try:
        async with session.get(sitemap_url) as resp:
            if resp.status != 200:
                logger.debug("sitemap %s -> HTTP %s", sitemap_url, resp.status)
                return []
            body = await resp.read()
    except (ClientError, asyncio.TimeoutError) as exc:
        logger.debug("sitemap %s unavailable: %s", sitemap_url, exc)
        return []

    locs = parse_sitemap(body)
    urls = [u for u in locs if is_internal_url(u, origin, config.exclude_pattern)]
    logger.info("sitemap: %d URLs (%d internal)", len(locs), len(urls))
    return urls


def seed_paths(config: CrawlConfig) -> List[str]:
    """Fixed seed paths as absolute URLs under the origin."""
    origin = config.origin
    urls = [urljoin(origin + "/", p) for p in config.start_paths]
    return [u for u in urls if is_internal_url(u, origin, config.exclude_pattern)]


async def collect_seeds(session: ClientSession, config: CrawlConfig) -> List[str]:
    """Sitemap URLs first, then the fixed paths; de-duplicated, order kept."""
    found: List[str] = []
    if config.use_sitemap:
        found.extend(await fetch_sitemap_urls(session, config))
    found.extend(seed_paths(config))
    return remove_duplicates(found)
