# File: code_scout/report/__init__.py
"""code_scout.report: Рендеринг отчётов аудита (текст, JSON и HTML) для CLI и тестов."""

from __future__ import annotations

from code_scout.report.html_report import DEFAULT_TEMPLATE_DIR, render_html
from code_scout.report.json_report import dumps, render_json, report_to_dict
from code_scout.report.text_report import PROJECT_WIDE_NOTE, render_text

__all__ = [
    "DEFAULT_TEMPLATE_DIR",
    "PROJECT_WIDE_NOTE",
    "dumps",
    "render_html",
    "render_json",
    "render_text",
    "report_to_dict",
]
