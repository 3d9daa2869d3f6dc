# === FILE: code_scout/parser/html_parser.py ===
"""Resource extraction from custom code fragments.

:func:`extract_resources` turns a raw HTML fragment (the custom code pasted
into a page's head or body) into an ordered list of
:class:`~code_scout.models.ResourceReference`:

* external scripts — ``<script src="…">``;
* external stylesheets — ``<link rel="stylesheet" href="…">``;
* inline scripts — ``<script>`` without ``src`` and with a non-blank body.

Groups always come in that order, each one in document order, so two runs
over the same fragment give the same list.  Locators are kept exactly as
written; nothing is resolved against a base URL and nothing is fetched.

The fragment is user input and may be broken in any way.  Parsing never
raises: problems are logged and whatever was recovered is returned.
"""
from __future__ import annotations

import re
from collections.abc import Iterator, Sequence
from typing import Final, Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

from code_scout.logger import logger
from code_scout.models import ResourceKind, ResourceReference

__all__: Sequence[str] = ("PREVIEW_LENGTH", "ELLIPSIS", "extract_resources", "inline_label")

PREVIEW_LENGTH: Final[int] = 100
ELLIPSIS: Final[str] = "..."

_SCRIPT_END: Final[re.Pattern[str]] = re.compile(r"</script\s*>", re.IGNORECASE)

# <script type="…"> values a browser executes; anything else is a data block
_SCRIPT_TYPES: Final[frozenset[str]] = frozenset(
    {
        "",
        "module",
        "application/ecmascript",
        "application/javascript",
        "application/x-ecmascript",
        "application/x-javascript",
        "text/ecmascript",
        "text/javascript",
        "text/javascript1.0",
        "text/javascript1.1",
        "text/javascript1.2",
        "text/javascript1.3",
        "text/javascript1.4",
        "text/javascript1.5",
        "text/jscript",
        "text/livescript",
        "text/x-ecmascript",
        "text/x-javascript",
    }
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _attr(tag: Tag, name: str) -> Optional[str]:
    value = tag.get(name)
    if value is None:
        return None
    if isinstance(value, list):
        return " ".join(value)
    return str(value)


def _is_executable(tag: Tag) -> bool:
    script_type = _attr(tag, "type")
    if script_type is None:
        return True
    return script_type.split(";", 1)[0].strip().lower() in _SCRIPT_TYPES


def _scripts(soup: BeautifulSoup) -> Iterator[Tag]:
    for tag in soup.find_all("script"):
        if isinstance(tag, Tag) and _is_executable(tag):
            yield tag


def _is_stylesheet(tag: Tag) -> bool:
    rel = tag.get("rel")
    if isinstance(rel, list):
        return rel == ["stylesheet"]
    return rel == "stylesheet"


def inline_label(index: int, preview: str) -> str:
    """Synthetic locator of the *index*-th inline script."""
    return f"Inline Script #{index}: {preview}"


def _preview(body: str) -> str:
    if len(body) > PREVIEW_LENGTH:
        return body[:PREVIEW_LENGTH] + ELLIPSIS
    return body


# ---------------------------------------------------------------------------
# Extraction passes
# ---------------------------------------------------------------------------


def _external_scripts(soup: BeautifulSoup) -> list[ResourceReference]:
    refs: list[ResourceReference] = []
    for tag in _scripts(soup):
        src = _attr(tag, "src")
        if src and src.strip():
            refs.append(ResourceReference(ResourceKind.EXTERNAL_SCRIPT, src))
    return refs


def _stylesheets(soup: BeautifulSoup) -> list[ResourceReference]:
    refs: list[ResourceReference] = []
    for tag in soup.find_all("link"):
        if not isinstance(tag, Tag) or not _is_stylesheet(tag):
            continue
        href = _attr(tag, "href")
        if href and href.strip():
            refs.append(ResourceReference(ResourceKind.EXTERNAL_STYLESHEET, href))
    return refs


def _unclosed_script_body(html: str) -> str:
    """Text after a trailing <script> start tag that is never closed.

    A browser runs it up to the end of input, while ``html.parser`` may drop it.
    """
    start = html.lower().rfind("<script")
    if start < 0:
        return ""
    end = html.find(">", start)
    if end < 0:
        return ""
    rest = html[end + 1:]
    return "" if _SCRIPT_END.search(rest) else rest


def _inline_scripts(soup: BeautifulSoup, html: str = "") -> list[ResourceReference]:
    refs: list[ResourceReference] = []
    all_scripts = soup.find_all("script")
    last_script = all_scripts[-1] if all_scripts else None
    for tag in _scripts(soup):
        if tag.has_attr("src"):
            continue
        body = (tag.string or "").strip()
        if not body and tag is last_script:
            body = _unclosed_script_body(html).strip()
        if not body:
            # blank bodies never get an index
            continue
        index = len(refs) + 1
        preview = _preview(body)
        refs.append(
            ResourceReference(
                ResourceKind.INLINE_SCRIPT,
                inline_label(index, preview),
                index=index,
                preview=preview,
            )
        )
    return refs


# ---------------------------------------------------------------------------
# Public function
# ---------------------------------------------------------------------------


def extract_resources(html: str) -> list[ResourceReference]:
    """Return every script, stylesheet and inline script reference in *html*.

    Parameters
    ----------
    html
        Raw markup fragment.  ``""`` (no custom code) gives ``[]``.

    Returns
    -------
    list[ResourceReference]
        External scripts, then stylesheets, then inline scripts.
    """
    if not html:
        return []

    try:
        soup = BeautifulSoup(html, "html.parser")
    except Exception as exc:
        logger.warning("Could not parse custom code fragment: %s", exc)
        return []

    refs: list[ResourceReference] = []
    passes = (
        ("external scripts", lambda: _external_scripts(soup)),
        ("stylesheets", lambda: _stylesheets(soup)),
        ("inline scripts", lambda: _inline_scripts(soup, html)),
    )
    for name, extract in passes:
        try:
            refs.extend(extract())
        except Exception as exc:
            logger.warning("Partial extraction, %s failed: %s", name, exc)
    logger.debug("Extracted %d resource reference(s)", len(refs))
    return refs
