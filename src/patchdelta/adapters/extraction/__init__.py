"""Model-extracted changelog adapter."""

from __future__ import annotations

from .schema import ExtractionDocument
from .source import ExtractionFileSource, parse_extraction
from .translator import declared_polarity, kind_hint, translate_document, translate_entry

__all__ = [
    "ExtractionDocument",
    "ExtractionFileSource",
    "declared_polarity",
    "kind_hint",
    "parse_extraction",
    "translate_document",
    "translate_entry",
]
