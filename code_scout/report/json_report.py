# code_scout/report/json_report.py

"""
Генерация JSON-отчёта для проекта CodeScout.

Сериализация объекта AuditReport в словарь и в файл.
"""
import json
from pathlib import Path
from typing import Any, Optional

from code_scout.models import AuditReport, ClassifiedEntry, RegionAudit


def _entry_to_dict(entry: ClassifiedEntry) -> dict[str, Any]:
    ref = entry.reference
    return {
        "kind": ref.kind.value if ref else None,
        "locator": ref.locator if ref else None,
        "index": ref.index if ref else None,
        "preview": ref.preview if ref else None,
        "category": entry.category.value,
        "origin": entry.origin,
        "rationale": entry.rationale,
    }


def _region_to_dict(region: RegionAudit) -> dict[str, Any]:
    return {
        "raw": region.raw,
        "entries": [_entry_to_dict(e) for e in region.entries],
    }


def report_to_dict(report: AuditReport) -> dict[str, Any]:
    """Plain-dict view of *report*, ready for :func:`json.dumps`."""
    return {
        "page": {"id": report.page_id, "name": report.page_name},
        "status": report.status,
        "summary": report.summary(),
        "head": _region_to_dict(report.head),
        "body": _region_to_dict(report.body),
    }


def dumps(report: AuditReport, *, pretty: bool = False) -> str:
    return json.dumps(report_to_dict(report), ensure_ascii=False, indent=2 if pretty else None)


def render_json(report: AuditReport, output_path: Path | str, *, indent: Optional[int] = 2) -> Path:
    """
    Сохраняет отчёт report в формате JSON по указанному пути.

    :param report: объект AuditReport с результатами аудита
    :param output_path: путь к JSON-файлу
    :return: Path сохранённого файла
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(report_to_dict(report), f, ensure_ascii=False, indent=indent)

    return output
