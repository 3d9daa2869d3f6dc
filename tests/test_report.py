# File: tests/test_report.py
import json

import pytest

from code_scout.auditor import audit_page
from code_scout.report import PROJECT_WIDE_NOTE, render_html, render_json, render_text, report_to_dict
from code_scout.source import PageCustomCode


@pytest.fixture()
def report(jquery_fragment, trusted_origins):
    page = PageCustomCode("pricing", "Pricing", head=jquery_fragment, body="")
    return audit_page(page, trusted_origins)


def test_report_to_dict(report):
    data = report_to_dict(report)
    assert data["page"] == {"id": "pricing", "name": "Pricing"}
    assert [e["category"] for e in data["head"]["entries"]] == ["safe", "local", "inline_review"]
    assert data["head"]["entries"][2]["preview"] == "alert(1)"
    assert data["body"]["entries"] == [
        {
            "kind": None,
            "locator": None,
            "index": None,
            "preview": None,
            "category": "no_resources",
            "origin": None,
            "rationale": "No external scripts, stylesheets or inline scripts found.",
        }
    ]


def test_render_json_file(tmp_path, report):
    out = render_json(report, tmp_path / "sub" / "report.json")
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["summary"]["safe"] == 1


def test_render_text(report):
    text = render_text(report)
    assert "[safe] Script: https://code.jquery.com/jquery.js" in text
    assert "[local] Stylesheet: /style.css" in text
    assert "[inline_review] Inline Script #1: alert(1)" in text
    assert "No custom code found in <body> for this page." in text
    assert "No external scripts, stylesheets or inline scripts found." in text
    assert PROJECT_WIDE_NOTE in text


def test_render_html_escapes_custom_code(tmp_path, report):
    out = render_html(report, None, tmp_path / "report.html")
    html = out.read_text(encoding="utf-8")
    assert "&lt;script src=" in html
    assert "<script>alert(1)</script>" not in html
    assert 'class="safe"' in html


def test_render_html_custom_template(tmp_path, report):
    (tmp_path / "tpl").mkdir()
    (tmp_path / "tpl" / "report.html.j2").write_text("{{ report.page_name }}|{{ regions|length }}")
    out = render_html(report, tmp_path / "tpl", tmp_path / "r.html")
    assert out.read_text(encoding="utf-8") == "Pricing|2"
