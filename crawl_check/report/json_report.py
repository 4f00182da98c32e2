# crawl_check/report/json_report.py

"""
Генерация JSON-отчёта для проекта CrawlCheck.

Сериализация объекта CrawlReport в файл с меткой времени в имени.
"""
from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Optional

from crawl_check.aggregator import CrawlReport
from crawl_check.utils import utc_now

REPORT_PREFIX = "result_"


def default_report_path(report_dir: Path | str, now: Optional[datetime] = None) -> Path:
    """
    Путь вида <report_dir>/result_YYYYMMDDHHMM.json (время UTC).

    Каталог создаётся при необходимости.
    """
    stamp = (now or utc_now()).strftime("%Y%m%d%H%M")
    out_dir = Path(report_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    return out_dir / f"{REPORT_PREFIX}{stamp}.json"


def render_json(report: CrawlReport, output_path: Path | str) -> Path:
    """
    Сохраняет отчёт report в формате JSON по указанному пути.

    :param report: объект CrawlReport с данными прогона
    :param output_path: путь к JSON-файлу
    :return: Path сохранённого файла

    Пример:
    ```python
    from crawl_check.report.json_report import render_json, default_report_path
    report_path = render_json(report, default_report_path('tests/e2e'))
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(report.to_dict(), f, ensure_ascii=False, indent=2)

    return output
