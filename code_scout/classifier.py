# File: code_scout/classifier.py
"""code_scout.classifier: Trust classification of extracted resource references.

The verdict depends only on the reference itself and the trusted origins;
it never looks at other references or at the order they came in.
"""

from __future__ import annotations

import re
from collections.abc import Collection, Iterable
from typing import Final, Optional
from urllib.parse import urlparse

from code_scout.models import ClassifiedEntry, ResourceKind, ResourceReference, TrustCategory

__all__ = (
    "INLINE_RATIONALE",
    "LOCAL_RATIONALE",
    "SAFE_RATIONALE",
    "NO_RESOURCES_RATIONALE",
    "derive_origin",
    "classify",
    "classify_all",
    "no_resources_entry",
)

INLINE_RATIONALE: Final[str] = (
    "Inline code must be manually reviewed for malicious intent or performance impact."
)
LOCAL_RATIONALE: Final[str] = (
    "Locator appears to be a relative path or a malformed URL; "
    "verify it resolves to an intended resource."
)
SAFE_RATIONALE: Final[str] = "Origin is a recognized, pre-approved domain."
_UNKNOWN_RATIONALE: Final[str] = (
    "{origin} is not in the trusted origins list and warrants a security review."
)
NO_RESOURCES_RATIONALE: Final[str] = (
    "No external scripts, stylesheets or inline scripts found."
)

# characters a URL host may not contain (brackets only wrap IPv6 literals)
_FORBIDDEN_HOST_CHARS: Final[re.Pattern[str]] = re.compile(r"[\x00-\x20\x7f#%/<>?@\\^|\[\]]")


def derive_origin(locator: str) -> Optional[str]:
    """Hostname of *locator* when it is an absolute URL, otherwise ``None``.

    Relative paths, protocol-relative locators (``//cdn…``), host-less
    schemes (``data:``) and invalid URLs (bad port, forbidden host
    characters) all give ``None``.
    """
    try:
        parsed = urlparse(locator.strip())
        hostname = parsed.hostname
        parsed.port  # ValueError for a non-numeric or out-of-range port
    except ValueError:
        return None
    if not parsed.scheme or not parsed.netloc or not hostname:
        return None
    if _FORBIDDEN_HOST_CHARS.search(hostname):
        return None
    return hostname


def classify(reference: ResourceReference, trusted_origins: Collection[str]) -> ClassifiedEntry:
    """Assign a :class:`TrustCategory` and rationale to *reference*.

    Checks, first match wins: inline code, no derivable origin, trusted
    origin (exact hostname match), anything else.
    """
    if reference.kind is ResourceKind.INLINE_SCRIPT:
        return ClassifiedEntry(reference, TrustCategory.INLINE_REVIEW, INLINE_RATIONALE)

    origin = derive_origin(reference.locator)
    if origin is None:
        return ClassifiedEntry(reference, TrustCategory.LOCAL, LOCAL_RATIONALE)
    if origin in trusted_origins:
        return ClassifiedEntry(reference, TrustCategory.SAFE, SAFE_RATIONALE, origin)
    return ClassifiedEntry(
        reference,
        TrustCategory.UNKNOWN,
        _UNKNOWN_RATIONALE.format(origin=origin),
        origin,
    )


def no_resources_entry() -> ClassifiedEntry:
    """Sentinel entry standing in for a fragment with nothing to classify."""
    return ClassifiedEntry(None, TrustCategory.NO_RESOURCES, NO_RESOURCES_RATIONALE)


def classify_all(
    references: Iterable[ResourceReference], trusted_origins: Collection[str]
) -> list[ClassifiedEntry]:
    """Classify *references* in order; an empty input gives ``[no_resources_entry()]``."""
    entries = [classify(ref, trusted_origins) for ref in references]
    return entries or [no_resources_entry()]
