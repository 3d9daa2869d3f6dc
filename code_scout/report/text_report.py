# File: code_scout/report/text_report.py
"""code_scout.report.text_report: Console rendering of an audit report."""

from __future__ import annotations

from typing import Final

import click

from code_scout.models import AuditReport, ClassifiedEntry, Region, RegionAudit, TrustCategory

PROJECT_WIDE_NOTE: Final[str] = (
    "Note: this audit covers the custom code of the selected page only. "
    "Project-wide custom code (Site Settings > Custom Code) must be reviewed manually."
)

_COLORS: Final[dict[TrustCategory, str]] = {
    TrustCategory.SAFE: "green",
    TrustCategory.UNKNOWN: "red",
    TrustCategory.LOCAL: "yellow",
    TrustCategory.INLINE_REVIEW: "magenta",
    TrustCategory.NO_RESOURCES: "white",
}


def empty_code_message(region: Region) -> str:
    return f"No custom code found in <{region.value}> for this page."


def format_entry(entry: ClassifiedEntry, *, color: bool = False) -> str:
    """One list line: ``[category] label - rationale``."""
    if entry.reference is None:
        return entry.rationale
    tag = f"[{entry.category.value}]"
    if color:
        tag = click.style(tag, fg=_COLORS[entry.category], bold=True)
    return f"{tag} {entry.reference.describe()} - {entry.rationale}"


def format_region(region: RegionAudit, *, color: bool = False) -> list[str]:
    lines = [f"== <{region.region.value}> custom code ==", region.raw or empty_code_message(region.region), ""]
    lines.append("Resources:")
    lines.extend(f"  - {format_entry(entry, color=color)}" for entry in region.entries)
    return lines


def render_text(report: AuditReport, *, color: bool = False) -> str:
    """Plain-text report, optionally with ANSI colours for the categories."""
    lines = [f"Page: {report.page_name} ({report.page_id})", report.status, ""]
    for region in report.regions:
        lines.extend(format_region(region, color=color))
        lines.append("")
    summary = ", ".join(f"{name}={count}" for name, count in report.summary().items())
    lines.append(f"Summary: {summary}")
    lines.append(PROJECT_WIDE_NOTE)
    return "\n".join(lines)
