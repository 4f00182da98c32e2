# crawl_check/crawler/models.py
"""
Data models for the CrawlCheck crawl loop.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True, slots=True)
class RequestFailure:
    """A network request the page issued that never completed."""

    url: str
    failure: str

    def to_dict(self) -> Dict[str, str]:
        return {"url": self.url, "failure": self.failure}


@dataclass(frozen=True, slots=True)
class PageResult:
    """Outcome of loading one page. Built once, never mutated."""

    url: str
    status: Optional[int]
    console_errors: Tuple[str, ...] = ()
    page_errors: Tuple[str, ...] = ()
    request_failures: Tuple[RequestFailure, ...] = ()
    discovered_links: Tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return (
            self.status == 200
            and not self.console_errors
            and not self.page_errors
            and not self.request_failures
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "status": self.status,
            "consoleErrors": list(self.console_errors),
            "pageErrors": list(self.page_errors),
            "requestFailures": [f.to_dict() for f in self.request_failures],
            "ok": self.ok,
            "discoveredLinks": list(self.discovered_links),
        }


@dataclass(slots=True)
class PageProbe:
    """Mutable collector wired to the browser tab's events while it loads."""

    url: str
    console_errors: List[str] = field(default_factory=list)
    page_errors: List[str] = field(default_factory=list)
    request_failures: List[RequestFailure] = field(default_factory=list)

    def on_console(self, message: Any) -> None:
        if message.type == "error":
            self.console_errors.append(str(message.text))

    def on_page_error(self, error: Any) -> None:
        self.page_errors.append(str(getattr(error, "message", None) or error))

    def on_request_failed(self, request: Any) -> None:
        self.request_failures.append(RequestFailure(url=request.url, failure=request.failure or "unknown"))

    def freeze(self, status: Optional[int], links: List[str]) -> PageResult:
        return PageResult(
            url=self.url,
            status=status,
            console_errors=tuple(self.console_errors),
            page_errors=tuple(self.page_errors),
            request_failures=tuple(self.request_failures),
            discovered_links=tuple(links),
        )
