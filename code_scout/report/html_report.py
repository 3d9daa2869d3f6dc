# File: code_scout/report/html_report.py
"""code_scout.report.html_report: Генерация HTML-отчёта с помощью Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from code_scout.models import AuditReport
from code_scout.report.text_report import PROJECT_WIDE_NOTE, empty_code_message

DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


def render_html(
    report: AuditReport,
    template_dir: Union[Path, str, None],
    output_path: Union[Path, str],
) -> Path:
    """Рендерит HTML-отчёт из шаблона и сохраняет его по указанному пути.

    Args:
        report: объект AuditReport.
        template_dir: директория с Jinja2-шаблонами (None — встроенные шаблоны).
        output_path: путь к итоговому HTML-файлу.

    Returns:
        Path до сохранённого HTML-файла.

    Пример:
    ```python
    from code_scout.report.html_report import render_html
    html_path = render_html(report, None, 'reports/report.html')
    ```
    """
    template_dir = Path(template_dir) if template_dir is not None else DEFAULT_TEMPLATE_DIR
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )
    template = env.get_template("report.html.j2")

    context: dict[str, Any] = {
        "report": report,
        "regions": [
            {
                "name": region.region.value,
                "raw": region.raw or empty_code_message(region.region),
                "entries": region.entries,
            }
            for region in report.regions
        ],
        "summary": report.summary(),
        "note": PROJECT_WIDE_NOTE,
    }

    html_content = template.render(**context)
    output_path.write_text(html_content, encoding="utf-8")

    return output_path
