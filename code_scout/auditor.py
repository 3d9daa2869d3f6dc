# File: code_scout/auditor.py
"""code_scout.auditor: Orchestration layer: fetch page data, extract, classify."""

from __future__ import annotations

import asyncio
from collections.abc import Collection
from typing import Optional

from code_scout.classifier import classify_all
from code_scout.config import AuditConfig
from code_scout.exceptions import CodeScoutError, DataUnavailable, FetchFailed
from code_scout.logger import logger
from code_scout.models import AuditReport, Region, RegionAudit
from code_scout.parser.html_parser import extract_resources
from code_scout.source import FilePageSource, HttpPageSource, PageCustomCode, PageSource

__all__ = ["Auditor", "audit_region", "audit_page", "source_from_config"]


def audit_region(region: Region, html: str, trusted_origins: Collection[str]) -> RegionAudit:
    """Extract and classify one fragment; the raw markup is kept verbatim."""
    references = extract_resources(html)
    entries = classify_all(references, trusted_origins)
    logger.debug("%s: %d reference(s)", region.value, len(references))
    return RegionAudit(region=region, raw=html, entries=entries)


def audit_page(page: PageCustomCode, trusted_origins: Collection[str]) -> AuditReport:
    """Audit head and body custom code of *page*."""
    return AuditReport(
        page_id=page.page_id,
        page_name=page.name,
        head=audit_region(Region.HEAD, page.head, trusted_origins),
        body=audit_region(Region.BODY, page.body, trusted_origins),
    )


def source_from_config(config: AuditConfig) -> PageSource:
    """Build the page source named in *config*: an export file wins over a URL."""
    if config.pages_file is not None:
        return FilePageSource(config.pages_file, page_id=config.page_id)
    if config.pages_url is not None:
        return HttpPageSource(
            str(config.pages_url),
            timeout=config.fetch_timeout,
            user_agent=config.user_agent,
            page_id=config.page_id,
        )
    raise DataUnavailable("No page source configured. Pass --pages FILE or --url URL.")


class Auditor:
    """Facade for the CLI and tests: audits the current page of a page source.

    Every :meth:`run` starts from scratch; nothing is cached between runs.
    """

    def __init__(self, config: AuditConfig, source: Optional[PageSource] = None) -> None:
        self.config = config
        self.source = source if source is not None else source_from_config(config)

    async def run(self) -> AuditReport:
        """Fetch the current page and audit it.

        Raises :class:`DataUnavailable` when there is no current page and
        :class:`FetchFailed` when the source could not be read.
        """
        logger.info("Auditing custom code...")
        try:
            page = await self.source.fetch_current_page()
        except CodeScoutError:
            raise
        except Exception as exc:
            logger.error("Page source failed: %s", exc)
            raise FetchFailed(type(self.source).__name__, str(exc)) from exc

        if page is None:
            raise DataUnavailable()

        report = audit_page(page, self.config.trusted_origins)
        logger.info("Audit complete for page %s: %s", page.page_id, report.summary())
        return report

    def run_sync(self) -> AuditReport:
        return asyncio.run(self.run())
