# File: tests/test_auditor.py
import pytest

from code_scout.auditor import Auditor, audit_page, audit_region, source_from_config
from code_scout.config import AuditConfig
from code_scout.exceptions import DataUnavailable, FetchFailed
from code_scout.models import Region, TrustCategory
from code_scout.source import FilePageSource, HttpPageSource, PageCustomCode, StaticPageSource


class NoPageSource:
    async def fetch_current_page(self):
        return None


class ExplodingSource:
    async def fetch_current_page(self):
        raise RuntimeError("SDK rejected the call")


def test_audit_region_keeps_raw_fragment(jquery_fragment, trusted_origins):
    region = audit_region(Region.HEAD, jquery_fragment, trusted_origins)
    assert region.raw == jquery_fragment
    assert region.categories() == [TrustCategory.SAFE, TrustCategory.LOCAL, TrustCategory.INLINE_REVIEW]
    assert not region.is_empty


def test_audit_region_empty_gives_sentinel(trusted_origins):
    region = audit_region(Region.BODY, "", trusted_origins)
    assert region.categories() == [TrustCategory.NO_RESOURCES]
    assert region.is_empty


def test_audit_page_summary(jquery_fragment, trusted_origins):
    page = PageCustomCode("p", "Page", head=jquery_fragment,
                          body='<script src="https://evil.example.com/x.js"></script>')
    report = audit_page(page, trusted_origins)
    assert report.body.entries[0].category is TrustCategory.UNKNOWN
    assert report.summary() == {"safe": 1, "unknown": 1, "local": 1, "inline_review": 1}


def test_source_from_config(pages_file):
    assert isinstance(source_from_config(AuditConfig(pages_file=pages_file)), FilePageSource)
    http = source_from_config(AuditConfig(pages_url="https://host.example/pages", fetch_timeout=3))
    assert isinstance(http, HttpPageSource)
    assert http.timeout == 3
    with pytest.raises(DataUnavailable):
        source_from_config(AuditConfig())


@pytest.mark.asyncio
async def test_run_from_file(pages_file, trusted_origins):
    report = await Auditor(AuditConfig(trusted_origins=trusted_origins, pages_file=pages_file)).run()
    assert report.page_id == "pricing"
    assert report.status == "Audit complete!"
    assert report.head.categories() == [TrustCategory.SAFE, TrustCategory.LOCAL, TrustCategory.INLINE_REVIEW]


@pytest.mark.asyncio
async def test_run_without_current_page(audit_config):
    with pytest.raises(DataUnavailable):
        await Auditor(audit_config, NoPageSource()).run()


@pytest.mark.asyncio
async def test_unexpected_source_error_becomes_fetch_failed(audit_config):
    with pytest.raises(FetchFailed) as exc_info:
        await Auditor(audit_config, ExplodingSource()).run()
    assert "SDK rejected the call" in str(exc_info.value)


@pytest.mark.asyncio
async def test_runs_are_independent(audit_config):
    auditor = Auditor(audit_config, StaticPageSource(body="<script>a()</script>"))
    first = await auditor.run()
    second = await auditor.run()
    assert first == second
    assert first is not second


def test_run_sync(audit_config):
    report = Auditor(audit_config, StaticPageSource()).run_sync()
    assert report.head.is_empty and report.body.is_empty
