# File: crawl_check/utils.py
"""crawl_check.utils: Мелкие вспомогательные функции для времени и списков URL."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Collection, List, Sequence

from crawl_check.logger import logger

__all__: Sequence[str] = (
    "utc_now",
    "iso_timestamp",
    "remove_duplicates",
)


def utc_now() -> datetime:
    """Текущее время в UTC (aware)."""
    return datetime.now(timezone.utc)


def iso_timestamp(moment: datetime) -> str:
    """ISO-8601 с миллисекундами и суффиксом Z, например 2024-05-01T10:20:30.123Z."""
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def remove_duplicates(urls: Collection[str]) -> List[str]:
    """Удаляет дубликаты из списка URL, сохраняя порядок."""
    unique = list(dict.fromkeys(urls))
    removed = len(urls) - len(unique)
    if removed:
        logger.debug("Removed %d duplicate URLs", removed)
    return unique
