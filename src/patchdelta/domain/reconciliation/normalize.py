"""Name normalization shared by every identity lookup.

Responsibilities of this stage:
- fold casing, diacritics and punctuation so names from different sources
  compare equal
- stay deterministic and side-effect free

The same function is used to build the alias table and to query it, which is
what makes ``resolve(normalize_name(x)) == resolve(x)`` hold.
"""

from __future__ import annotations

import re
import unicodedata

_NON_ALNUM = re.compile(r"[^a-z0-9]")
_WHITESPACE = re.compile(r"\s+")


def strip_diacritics(value: str) -> str:
    decomposed = unicodedata.normalize("NFD", value)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize_name(value: str | None) -> str:
    """Lower-case, strip diacritics and drop every non-alphanumeric character."""

    if not value:
        return ""
    folded = strip_diacritics(unicodedata.normalize("NFKC", value)).casefold()
    return _NON_ALNUM.sub("", folded)


def loose_name(value: str | None) -> str:
    """Lower-case, accent-free form that keeps word boundaries.

    Used where containment of whole words matters (keywords, blacklists).
    """

    if not value:
        return ""
    folded = strip_diacritics(unicodedata.normalize("NFKC", value)).casefold()
    return _WHITESPACE.sub(" ", folded).strip()
