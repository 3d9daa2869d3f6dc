# File: tests/conftest.py
import json
from pathlib import Path
from typing import Any, Dict

import pytest

from code_scout.config import AuditConfig

JQUERY_FRAGMENT = (
    '<script src="https://code.jquery.com/jquery.js"></script>'
    '<link rel="stylesheet" href="/style.css">'
    "<script>alert(1)</script>"
)


@pytest.fixture()
def jquery_fragment() -> str:
    """CDN script, relative stylesheet and one inline script."""
    return JQUERY_FRAGMENT


@pytest.fixture()
def trusted_origins() -> frozenset:
    return frozenset({"code.jquery.com", "ajax.googleapis.com"})


@pytest.fixture()
def audit_config(trusted_origins) -> AuditConfig:
    return AuditConfig(trusted_origins=trusted_origins)


@pytest.fixture()
def pages_payload() -> Dict[str, Any]:
    """
    Host page listing with two pages, the second one selected.
    """
    return {
        "pages": [
            {"id": "home", "name": "Home", "selected": False,
             "customCode": {"head": "", "body": "<script>console.log('home')</script>"}},
            {"id": "pricing", "name": "Pricing", "selected": True,
             "customCode": {"head": JQUERY_FRAGMENT,
                            "body": '<script src="https://evil.example.com/x.js"></script>'}},
        ]
    }


@pytest.fixture()
def pages_file(tmp_path, pages_payload) -> Path:
    path = tmp_path / "pages.json"
    path.write_text(json.dumps(pages_payload), encoding="utf-8")
    return path
