# File: crawl_check/aggregator.py
"""crawl_check.aggregator: Сводка прогона и итоговый отчёт."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from crawl_check.crawler.models import PageResult


@dataclass(slots=True)
class RunSummary:
    """Итоги прогона: счётчики страниц, ошибки логов, временное окно."""

    base_url: str
    pages_visited: int
    pages_passed: int
    pages_failed: int
    log_error_count: Optional[int]
    started_at: str
    finished_at: str
    fatal_error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "baseUrl": self.base_url,
            "pagesVisited": self.pages_visited,
            "pagesPassed": self.pages_passed,
            "pagesFailed": self.pages_failed,
            "logErrorCount": self.log_error_count,
            "startedAt": self.started_at,
            "finishedAt": self.finished_at,
        }
        if self.fatal_error is not None:
            data["fatalError"] = self.fatal_error
        return data


@dataclass(slots=True)
class CrawlReport:
    """Полный отчёт: сводка, результаты по страницам и строки ошибок из логов."""

    summary: RunSummary
    results: List[PageResult] = field(default_factory=list)
    log_error_lines: List[str] = field(default_factory=list)

    @property
    def failed_pages(self) -> List[PageResult]:
        return [r for r in self.results if not r.ok]

    @property
    def exit_code(self) -> int:
        """0, если все страницы прошли и логи чистые, иначе 1."""
        s = self.summary
        if s.fatal_error is not None or s.pages_failed > 0 or self.log_error_lines:
            return 1
        return 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "summary": self.summary.to_dict(),
            "results": [r.to_dict() for r in self.results],
            "logErrorLines": list(self.log_error_lines),
        }


def aggregate_results(
    base_url: str,
    results: Sequence[PageResult],
    log_error_lines: Sequence[str],
    started_at: str,
    finished_at: str,
) -> CrawlReport:
    """Собирает CrawlReport из результатов обхода и проверки логов."""
    passed = sum(1 for r in results if r.ok)
    summary = RunSummary(
        base_url=base_url,
        pages_visited=len(results),
        pages_passed=passed,
        pages_failed=len(results) - passed,
        log_error_count=len(log_error_lines),
        started_at=started_at,
        finished_at=finished_at,
    )
    return CrawlReport(summary=summary, results=list(results), log_error_lines=list(log_error_lines))


__all__ = ["RunSummary", "CrawlReport", "aggregate_results"]
