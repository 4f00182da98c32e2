"""Exceptions raised by CrawlCheck."""
from __future__ import annotations


class CrawlCheckError(Exception):
    """Base class for errors that abort a whole run."""


class ConfigError(CrawlCheckError, ValueError):
    """An environment override could not be applied to the configuration."""


class OriginUnreachable(CrawlCheckError):
    """The base URL did not answer at all (DNS, refused connection, timeout)."""

    def __init__(self, origin: str, reason: str) -> None:
        super().__init__(f"origin {origin} is unreachable: {reason}")
        self.origin = origin
        self.reason = reason


__all__ = ["CrawlCheckError", "ConfigError", "OriginUnreachable"]
