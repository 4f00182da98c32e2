# File: crawl_check/report/html_report.py
"""crawl_check.report.html_report: Генерация HTML-отчёта с помощью Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Union

from jinja2 import Environment, PackageLoader, select_autoescape

from crawl_check.aggregator import CrawlReport

TEMPLATE_NAME = "report.html.j2"


def _environment() -> Environment:
    return Environment(
        loader=PackageLoader("crawl_check", "templates"),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )


def render_html(report: CrawlReport, output_path: Union[Path, str]) -> Path:
    """Рендерит HTML-отчёт из шаблона пакета и сохраняет его по указанному пути.

    Args:
        report: объект CrawlReport.
        output_path: путь к итоговому HTML-файлу.

    Returns:
        Path до сохранённого HTML-файла.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    template = _environment().get_template(TEMPLATE_NAME)
    context: dict[str, Any] = {
        "summary": report.summary,
        "results": report.results,
        "log_error_lines": report.log_error_lines,
    }
    output_path.write_text(template.render(**context), encoding="utf-8")
    return output_path
