# File: tests/test_classifier.py
"""Тесты классификации ресурсов по уровню доверия."""
import pytest

from code_scout.classifier import (
    INLINE_RATIONALE,
    LOCAL_RATIONALE,
    NO_RESOURCES_RATIONALE,
    SAFE_RATIONALE,
    classify,
    classify_all,
    derive_origin,
    no_resources_entry,
)
from code_scout.models import ResourceKind, ResourceReference, TrustCategory
from code_scout.parser.html_parser import extract_resources



def script(locator: str) -> ResourceReference:
    return ResourceReference(ResourceKind.EXTERNAL_SCRIPT, locator)


def stylesheet(locator: str) -> ResourceReference:
    return ResourceReference(ResourceKind.EXTERNAL_STYLESHEET, locator)


@pytest.mark.parametrize(
    "locator,expected",
    [
        ("https://ajax.googleapis.com/jquery.js", "ajax.googleapis.com"),
        ("http://cdn.example.com:8080/a.js", "cdn.example.com"),
        ("https://CDN.Example.com/a.js", "cdn.example.com"),
        ("/assets/app.js", None),
        ("assets/app.js", None),
        ("//cdn.example.com/a.js", None),
        ("data:text/javascript,alert(1)", None),
        ("http://[::1", None),
        ("http://[::1]:8080/a.js", "::1"),
        ("https://evil.com:abc/x.js", None),
        ("https://evil.com:99999/x.js", None),
        ("https://exa mple.com/x.js", None),
        ("https://exa<mple.com/x.js", None),
        ("https://ex^am|ple.com/x.js", None),
        ("https://cdn.example.com:443/x.js", "cdn.example.com"),
        ("", None),
        ("https://", None),
    ],
)
def test_derive_origin(locator, expected):
    assert derive_origin(locator) == expected


@pytest.mark.parametrize("trusted", [frozenset(), frozenset({"code.jquery.com"}), {"x"}])
def test_inline_always_review(trusted):
    ref = ResourceReference(ResourceKind.INLINE_SCRIPT, "Inline Script #1: go()", 1, "go()")
    entry = classify(ref, trusted)
    assert entry.category is TrustCategory.INLINE_REVIEW
    assert entry.rationale == INLINE_RATIONALE
    assert entry.origin is None


@pytest.mark.parametrize("locator", ["/assets/app.js", "style.css", "../x.js", "not a url"])
def test_relative_is_local(locator, trusted_origins):
    for ref in (script(locator), stylesheet(locator)):
        entry = classify(ref, trusted_origins)
        assert entry.category is TrustCategory.LOCAL
        assert entry.rationale == LOCAL_RATIONALE


@pytest.mark.parametrize(
    "locator",
    ["https://evil.com:abc/x.js", "https://evil.com:99999/x.js", "https://exa mple.com/x.js"],
)
def test_invalid_url_is_local_not_unknown(locator):
    entry = classify(script(locator), set())
    assert entry.category is TrustCategory.LOCAL
    assert entry.origin is None


def test_trusted_origin_is_safe(trusted_origins):
    entry = classify(script("https://ajax.googleapis.com/jquery.js"), trusted_origins)
    assert entry.category is TrustCategory.SAFE
    assert entry.origin == "ajax.googleapis.com"
    assert entry.rationale == SAFE_RATIONALE


def test_unknown_origin_mentions_host(trusted_origins):
    entry = classify(stylesheet("https://evil.example.com/x.css"), trusted_origins)
    assert entry.category is TrustCategory.UNKNOWN
    assert "evil.example.com" in entry.rationale
    assert entry.origin == "evil.example.com"


@pytest.mark.parametrize(
    "locator",
    [
        "https://sub.code.jquery.com/x.js",  # no suffix matching
        "https://jquery.com/x.js",
        "https://code.jquery.com.evil.io/x.js",
    ],
)
def test_exact_hostname_match_only(locator, trusted_origins):
    assert classify(script(locator), trusted_origins).category is TrustCategory.UNKNOWN


def test_membership_is_case_sensitive():
    entry = classify(script("https://code.jquery.com/x.js"), {"Code.jQuery.com"})
    assert entry.category is TrustCategory.UNKNOWN


def test_jquery_scenario_categories(jquery_fragment, trusted_origins):
    entries = classify_all(extract_resources(jquery_fragment), trusted_origins)
    assert [e.category for e in entries] == [
        TrustCategory.SAFE,
        TrustCategory.LOCAL,
        TrustCategory.INLINE_REVIEW,
    ]


def test_empty_input_gives_sentinel(trusted_origins):
    entries = classify_all(extract_resources(""), trusted_origins)
    assert entries == [no_resources_entry()]
    assert entries[0].is_sentinel
    assert entries[0].reference is None
    assert entries[0].rationale == NO_RESOURCES_RATIONALE


def test_classification_independent_of_order(jquery_fragment, trusted_origins):
    refs = extract_resources(jquery_fragment)
    forward = classify_all(refs, trusted_origins)
    backward = classify_all(list(reversed(refs)), trusted_origins)
    assert forward == list(reversed(backward))
