"""Data Dragon snapshot adapter."""

from __future__ import annotations

from .client import DATA_FILES, DataDragonAPIError, DataDragonSource
from .translator import (
    alias_map,
    translate_champions,
    translate_items,
    translate_runes,
    translate_summoners,
)

__all__ = [
    "DATA_FILES",
    "DataDragonAPIError",
    "DataDragonSource",
    "alias_map",
    "translate_champions",
    "translate_items",
    "translate_runes",
    "translate_summoners",
]
