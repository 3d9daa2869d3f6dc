# File: code_scout/exceptions.py
"""code_scout.exceptions: Error taxonomy for audit runs.

Markup problems are not part of it: the extractor degrades to a partial
result instead of raising.
"""
from __future__ import annotations


class CodeScoutError(Exception):
    """Base exception for project-level errors."""


class DataUnavailable(CodeScoutError):
    """No current page could be found in the page listing."""

    def __init__(self, message: str = "No active page found. Please select a page.") -> None:
        super().__init__(message)


class FetchFailed(CodeScoutError):
    """The page data source could not deliver the listing."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Could not fetch page data from {source}: {reason}")


__all__ = ["CodeScoutError", "DataUnavailable", "FetchFailed"]
