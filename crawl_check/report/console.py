# File: crawl_check/report/console.py
"""crawl_check.report.console: Человекочитаемая сводка прогона."""

from __future__ import annotations

from typing import List

from crawl_check.aggregator import CrawlReport


def summary_lines(report: CrawlReport) -> List[str]:
    """Строки сводки для вывода в stdout."""
    s = report.summary
    lines = [
        "=== Crawl Summary ===",
        f"Base URL: {s.base_url}",
        f"Visited: {s.pages_visited}, Passed: {s.pages_passed}, Failed: {s.pages_failed}",
    ]
    if s.fatal_error is not None:
        lines.append(f"[FATAL] {s.fatal_error}")
    elif report.log_error_lines:
        lines.append(f"[WARN] Log [error] lines detected: {len(report.log_error_lines)}")
    else:
        lines.append("Log [error]: none")
    for page in report.failed_pages:
        lines.append(f"  FAIL {page.url} (status={page.status})")
    return lines
