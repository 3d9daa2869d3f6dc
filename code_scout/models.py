# File: code_scout/models.py
"""code_scout.models: Value objects shared by the extractor, classifier and renderers."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Optional


class ResourceKind(StrEnum):
    EXTERNAL_SCRIPT = "external_script"
    EXTERNAL_STYLESHEET = "external_stylesheet"
    INLINE_SCRIPT = "inline_script"


class TrustCategory(StrEnum):
    SAFE = "safe"
    UNKNOWN = "unknown"
    LOCAL = "local"
    INLINE_REVIEW = "inline_review"
    # only ever produced for a fragment without any reference
    NO_RESOURCES = "no_resources"


class Region(StrEnum):
    HEAD = "head"
    BODY = "body"


@dataclass(frozen=True, slots=True)
class ResourceReference:
    """A single external resource or inline script found in a markup fragment.

    For inline scripts ``locator`` is a synthetic label built from ``index``
    and ``preview``; both stay ``None`` for external kinds.
    """

    kind: ResourceKind
    locator: str
    index: Optional[int] = None
    preview: Optional[str] = None

    @property
    def is_external(self) -> bool:
        return self.kind is not ResourceKind.INLINE_SCRIPT

    def describe(self) -> str:
        """Human-readable list label (``Script: …``, ``Stylesheet: …`` or the inline label)."""
        if self.kind is ResourceKind.EXTERNAL_SCRIPT:
            return f"Script: {self.locator}"
        if self.kind is ResourceKind.EXTERNAL_STYLESHEET:
            return f"Stylesheet: {self.locator}"
        return self.locator


@dataclass(frozen=True, slots=True)
class ClassifiedEntry:
    """A reference with its trust verdict. ``reference`` is ``None`` only for the sentinel."""

    reference: Optional[ResourceReference]
    category: TrustCategory
    rationale: str
    origin: Optional[str] = None

    @property
    def is_sentinel(self) -> bool:
        return self.category is TrustCategory.NO_RESOURCES


@dataclass(slots=True)
class RegionAudit:
    """Audit result for the head or body custom code of a page."""

    region: Region
    raw: str
    entries: list[ClassifiedEntry] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return all(entry.is_sentinel for entry in self.entries)

    def categories(self) -> list[TrustCategory]:
        return [entry.category for entry in self.entries]


@dataclass(slots=True)
class AuditReport:
    """Both regions of one page plus the status line shown to the user."""

    page_id: str
    page_name: str
    head: RegionAudit
    body: RegionAudit
    status: str = "Audit complete!"

    @property
    def regions(self) -> tuple[RegionAudit, RegionAudit]:
        return (self.head, self.body)

    def summary(self) -> dict[str, int]:
        """Number of entries per category over both regions, sentinels excluded."""
        counts = Counter(
            entry.category.value
            for region in self.regions
            for entry in region.entries
            if not entry.is_sentinel
        )
        return {category.value: counts.get(category.value, 0)
                for category in TrustCategory if category is not TrustCategory.NO_RESOURCES}


__all__ = [
    "ResourceKind",
    "TrustCategory",
    "Region",
    "ResourceReference",
    "ClassifiedEntry",
    "RegionAudit",
    "AuditReport",
]
