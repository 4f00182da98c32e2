# File: tests/conftest.py
from __future__ import annotations

import socket

import pytest

from crawl_check.config import CrawlConfig
from fakes import ORIGIN


@pytest.fixture()
def crawl_config(tmp_path) -> CrawlConfig:
    """Config for crawl-loop tests: no settle delay, no sitemap, no logs."""
    return CrawlConfig(
        base_url=ORIGIN,
        max_pages=50,
        settle_delay=0,
        use_sitemap=False,
        log_source="none",
        report_dir=tmp_path / "reports",
    )


@pytest.fixture()
def free_port() -> int:
    """A local TCP port nothing listens on (at the time of the call)."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]
