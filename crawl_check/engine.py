# File: crawl_check/engine.py
"""crawl_check.engine: Оркестрация прогона: проверка origin, seeds, обход, логи, сводка."""

from __future__ import annotations

import asyncio
from typing import Any, Optional

from aiohttp import ClientError, ClientSession, ClientTimeout

from crawl_check.aggregator import CrawlReport, RunSummary, aggregate_results
from crawl_check.config import CrawlConfig
from crawl_check.crawler.crawler import SmokeCrawler
from crawl_check.crawler.seeds import collect_seeds
from crawl_check.errors import OriginUnreachable
from crawl_check.logger import logger
from crawl_check.logsource import LogSource, build_log_source, scan_errors
from crawl_check.utils import iso_timestamp, utc_now

__all__ = ["run_check", "probe_origin", "fatal_report"]


async def probe_origin(session: ClientSession, url: str) -> int:
    """Один GET на base URL. Любой HTTP-ответ годится; нет ответа -> OriginUnreachable."""
    try:
        async with session.get(url, allow_redirects=True) as resp:
            logger.debug("Origin %s -> HTTP %s", url, resp.status)
            return resp.status
    except (ClientError, asyncio.TimeoutError) as exc:
        raise OriginUnreachable(url, str(exc) or type(exc).__name__) from exc


async def run_check(
    config: CrawlConfig,
    *,
    browser: Any = None,
    log_source: Optional[LogSource] = None,
) -> CrawlReport:
    """Запускает полный прогон и возвращает CrawlReport.

    ``browser`` и ``log_source`` подменяются в тестах; по умолчанию
    запускается Chromium и источник логов берётся из конфига.
    """
    started_at = iso_timestamp(utc_now())
    base_url = config.base_url_str
    logger.info("Starting check of %s", base_url)

    timeout = ClientTimeout(total=config.probe_timeout)
    async with ClientSession(timeout=timeout) as session:
        await probe_origin(session, base_url)
        seeds = await collect_seeds(session, config)
    logger.info("Seeds: %d URLs", len(seeds))

    async with SmokeCrawler(config, browser=browser) as crawler:
        results = await crawler.crawl(seeds)
    crawl_finished = iso_timestamp(utc_now())

    source = log_source if log_source is not None else build_log_source(config)
    log_errors = await asyncio.to_thread(scan_errors, source, started_at, crawl_finished, config.error_marker)

    return aggregate_results(
        base_url=base_url,
        results=results,
        log_error_lines=log_errors,
        started_at=started_at,
        finished_at=iso_timestamp(utc_now()),
    )


def fatal_report(config: CrawlConfig, exc: BaseException, started_at: Optional[str] = None) -> CrawlReport:
    """Отчёт-заглушка для прогона, прерванного ошибкой верхнего уровня."""
    now = iso_timestamp(utc_now())
    summary = RunSummary(
        base_url=config.base_url_str,
        pages_visited=0,
        pages_passed=0,
        pages_failed=0,
        log_error_count=None,
        started_at=started_at or now,
        finished_at=now,
        fatal_error=str(exc) or type(exc).__name__,
    )
    return CrawlReport(summary=summary)
