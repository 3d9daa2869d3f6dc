# code_scout/__init__.py
"""
CodeScout package initializer.
Defines package version and exposes the core audit API and CLI.
"""
__version__ = "0.1.0"

from code_scout.classifier import classify, classify_all, derive_origin, no_resources_entry
from code_scout.models import ClassifiedEntry, ResourceKind, ResourceReference, TrustCategory
from code_scout.parser.html_parser import extract_resources

# Expose CLI entry point
from .cli import cli  # экспорт для pytest
