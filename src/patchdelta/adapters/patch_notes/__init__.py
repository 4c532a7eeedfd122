"""Release-notes changelog adapter."""

from __future__ import annotations

from .client import PatchNotesSource, known_names_from
from .scraper import parse_patch_notes

__all__ = [
    "PatchNotesSource",
    "known_names_from",
    "parse_patch_notes",
]
