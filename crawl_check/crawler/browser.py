# crawl_check/crawler/browser.py
"""
Headless Chromium launch via Playwright.

The executable comes from ``browser_executable`` (config or the
``BROWSER_EXECUTABLE_PATH`` variable). Without one, well-known system Chrome
and Chromium locations are probed, and Playwright's bundled Chromium is the
last resort.
"""
from __future__ import annotations

import os
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable, Dict, List, Optional, Tuple

from playwright.async_api import Browser, async_playwright

from crawl_check.config import CrawlConfig
from crawl_check.logger import logger

__all__ = ("KNOWN_EXECUTABLES", "find_browser_executable", "launch_options", "launch_browser")

KNOWN_EXECUTABLES: Dict[str, Tuple[str, ...]] = {
    "darwin": (
        "/Applications/Google Chrome.app/Contents/MacOS/Google Chrome",
        "/Applications/Chromium.app/Contents/MacOS/Chromium",
    ),
    "linux": (
        "/usr/bin/google-chrome",
        "/usr/bin/chromium",
        "/usr/bin/chromium-browser",
    ),
}

# stabilises Chromium inside containers; breaks it on macOS
_LINUX_ONLY_ARGS: Tuple[str, ...] = ("--single-process", "--no-zygote")


def _platform_key(platform: str) -> str:
    return "linux" if platform.startswith("linux") else platform


def find_browser_executable(
    platform: str = sys.platform,
    exists: Callable[[str], bool] = os.path.exists,
) -> Optional[str]:
    """First existing system browser for *platform*, or None."""
    for candidate in KNOWN_EXECUTABLES.get(_platform_key(platform), ()):
        if exists(candidate):
            return candidate
    return None


def launch_options(
    config: CrawlConfig,
    platform: str = sys.platform,
    exists: Callable[[str], bool] = os.path.exists,
) -> Dict[str, Any]:
    """Keyword arguments for ``chromium.launch``."""
    args: List[str] = list(config.browser_args)
    if _platform_key(platform) == "linux":
        args.extend(a for a in _LINUX_ONLY_ARGS if a not in args)

    opts: Dict[str, Any] = {"headless": config.headless, "args": args}
    if config.browser_executable is not None:
        opts["executable_path"] = str(config.browser_executable)
    else:
        detected = find_browser_executable(platform, exists)
        if detected:
            opts["executable_path"] = detected
    return opts


@asynccontextmanager
async def launch_browser(config: CrawlConfig) -> AsyncIterator[Browser]:
    """Start Playwright and Chromium; both are shut down on every exit path."""
    opts = launch_options(config)
    logger.debug("Launching Chromium: %s", opts)
    async with async_playwright() as pw:
        browser = await pw.chromium.launch(**opts)
        try:
            yield browser
        finally:
            await browser.close()
