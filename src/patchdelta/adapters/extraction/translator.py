"""Translate extraction entries into changelog blocks.

Arrow parts naming an ability (``Q``, ``W``, ``E``, ``R``, ``P``/``Pasiva``)
are grouped under a heading line for that slot so the segmenter files them
in the right place. Other arrow parts and plain commentary stay ahead of
any heading and end up as free context.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from patchdelta.domain.model import ABILITY_SLOTS, ChangelogBlock, EntityKind, Polarity

if TYPE_CHECKING:
    from .schema import EntryPayload, ExtractionDocument

PASSIVE_KEY = "P"
PASSIVE_HEADING = "**Pasiva**"
FALLBACK_ATTRIBUTE = "Ajuste"
MAX_ATTRIBUTE_LENGTH = 25

_ARROW_PART = re.compile(r"(?P<stat>.*?):\s*(?P<old>.*?)\s*->\s*(?P<new>.*)")
_SPELL_KEY = re.compile(r"\b(?P<key>[QWER]|Pasiva|P)\b", re.IGNORECASE)
_SPELL_PREFIX = re.compile(r"^(?:(?:[QWER]|Pasiva|P)\b\s*[-–—:]?\s*)", re.IGNORECASE)
_OF_SPELL = re.compile(r"\s+de\s+la\s+(?:[QWER]|Pasiva)\b", re.IGNORECASE)

_TYPE_KINDS: tuple[tuple[str, EntityKind], ...] = (
    ("CHAMPION", EntityKind.CHAMPION),
    ("ITEM", EntityKind.ITEM),
    ("RUNE", EntityKind.RUNE),
    ("SUMMONER", EntityKind.SUMMONER),
)


def declared_polarity(entry_type: str) -> Polarity | None:
    upper = entry_type.upper()
    if "BUFF" in upper:
        return Polarity.BUFF
    if "NERF" in upper:
        return Polarity.NERF
    if "ADJUST" in upper:
        return Polarity.ADJUSTMENT
    return None


def kind_hint(entry_type: str) -> EntityKind | None:
    """Kind named by the entry type; ``SYSTEM`` and unknown types give no hint."""

    upper = entry_type.upper()
    for marker, kind in _TYPE_KINDS:
        if marker in upper:
            return kind
    return None


def translate_document(document: ExtractionDocument) -> list[ChangelogBlock]:
    return [translate_entry(entry) for entry in document.entries()]


def translate_entry(entry: EntryPayload) -> ChangelogBlock:
    loose: list[str] = []
    by_slot: dict[str, list[str]] = {}
    commentary: list[str] = []

    triples = [(stat.stat, stat.old, stat.new) for stat in entry.stats]
    for part in entry.parts():
        match = _ARROW_PART.match(part)
        if match is None:
            commentary.append(part)
            continue
        triples.append((match.group("stat"), match.group("old"), match.group("new")))

    for stat, old, new in triples:
        stat = stat.strip()
        spell = _SPELL_KEY.search(stat)
        if spell is None:
            loose.append(f"{stat}: {old.strip()} -> {new.strip()}")
            continue
        key = spell.group("key").upper()
        slot = PASSIVE_KEY if key in {"P", "PASIVA"} else key
        label = _attribute_label(stat, entry.name)
        by_slot.setdefault(slot, []).append(f"{label}: {old.strip()} -> {new.strip()}")

    lines = list(loose)
    for slot in (*(str(slot) for slot in ABILITY_SLOTS), PASSIVE_KEY):
        slot_lines = by_slot.get(slot)
        if not slot_lines:
            continue
        lines.append(PASSIVE_HEADING if slot == PASSIVE_KEY else f"**{slot}**")
        lines.extend(slot_lines)

    # Entries with nothing but commentary keep it as lines, not just context.
    context_parts = commentary if triples else []
    if not triples:
        lines.extend(commentary)

    return ChangelogBlock(
        entity_name_raw=entry.name.strip(),
        lines=tuple(lines),
        kind_hint=kind_hint(entry.type),
        context=". ".join(context_parts),
        declared_polarity=declared_polarity(entry.type),
    )


def _attribute_label(stat: str, entity_name: str) -> str:
    label = stat
    if entity_name and label.casefold().startswith(entity_name.casefold()):
        label = label[len(entity_name) :].lstrip(" :-")
    label = _SPELL_PREFIX.sub("", label.strip())
    label = _OF_SPELL.sub("", label).strip(" :-")
    if not label or len(label) > MAX_ATTRIBUTE_LENGTH:
        return FALLBACK_ATTRIBUTE
    return label
