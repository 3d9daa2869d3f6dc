# File: code_scout/parser/__init__.py
"""code_scout.parser: Markup parsing for custom code fragments."""

from code_scout.parser.html_parser import PREVIEW_LENGTH, extract_resources

__all__ = ["PREVIEW_LENGTH", "extract_resources"]
