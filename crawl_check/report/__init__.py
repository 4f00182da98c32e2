# File: crawl_check/report/__init__.py
"""crawl_check.report: Запись отчётов (JSON, HTML) и текстовая сводка для консоли."""

from __future__ import annotations

from crawl_check.report.console import summary_lines
from crawl_check.report.html_report import render_html
from crawl_check.report.json_report import default_report_path, render_json

__all__ = ["render_json", "render_html", "default_report_path", "summary_lines"]
