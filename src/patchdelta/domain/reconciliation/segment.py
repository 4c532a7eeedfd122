"""Changelog segmentation.

Responsibilities of this stage:
- split a flat, heading-delimited document into per-entity ``ChangelogBlock``s
- split one entity's lines into sections (stats, passive, Q/W/E/R, commentary)
- hand ability lines to the line parser and keep everything else verbatim

Every non-blank, non-heading input line ends up in exactly one place: a
structured record, the joined passive text, or free context.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from patchdelta.domain.model import (
    AbilitySlot,
    ChangelogBlock,
    ChangeOrigin,
    ChangeRecord,
    EntityChangeSet,
    EntityKind,
    Polarity,
)

from .normalize import loose_name
from .parse import parse_line, strip_bullet

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from patchdelta.domain.model import EntityId

    from .resolve import IdentityResolver

log = logging.getLogger(__name__)

NOTE_ATTRIBUTE = "note"
PASSIVE_ATTRIBUTE = "description"


class Section(StrEnum):
    NONE = "none"
    STATS = "stats"
    PASSIVE = "passive"
    Q = "Q"
    W = "W"
    E = "E"
    R = "R"


_STATS_HEADING = re.compile(
    r"^[\W_]*(?:estad[ií]sticas(?:\s+b[aá]sicas)?|base\s+stats|stats)[\W_]*$",
    re.IGNORECASE,
)
_PASSIVE_HEADING = re.compile(r"^[\W_]*(?:pasiva|passive)(?:\s*[-–—:]|\*\*|\s*$)", re.IGNORECASE)
_SLOT_HEADING = re.compile(r"^[\W_]*(?P<slot>[QWER])[\])]?(?:\s*[-–—:]|\*\*|\s*$)")
_MARKDOWN_HEADING = re.compile(r"^\s*#{1,6}\s*(?P<title>.+?)\s*#*\s*$")
_MARKDOWN_DECORATION = re.compile(r"[*_`]+")

CATEGORY_KEYWORDS: tuple[tuple[EntityKind, tuple[str, ...]], ...] = (
    (EntityKind.SUMMONER, ("hechizos de invocador", "summoner spells", "hechizo", "summoner")),
    (EntityKind.CHAMPION, ("campeones", "champions", "campeon", "champion")),
    (EntityKind.ITEM, ("objetos", "items", "objeto", "item")),
    (EntityKind.RUNE, ("runas", "runes", "runa", "rune")),
)


def kind_for_heading(text: str) -> EntityKind | None:
    """Entity kind announced by a section heading such as ``Campeones``."""

    name = loose_name(text)
    for kind, keywords in CATEGORY_KEYWORDS:
        if any(keyword in name for keyword in keywords):
            return kind
    return None


def detect_heading(line: str) -> Section | None:
    if _STATS_HEADING.match(line):
        return Section.STATS
    if _PASSIVE_HEADING.match(line):
        return Section.PASSIVE
    match = _SLOT_HEADING.match(line)
    if match:
        return Section(match.group("slot"))
    return None


@dataclass(slots=True)
class SegmentedLines:
    """Sectioned content of one entity's changelog lines."""

    free_context: list[str] = field(default_factory=list[str])
    passive: ChangeRecord | None = None
    abilities: dict[AbilitySlot, list[ChangeRecord]] = field(
        default_factory=dict[AbilitySlot, "list[ChangeRecord]"]
    )


@dataclass(slots=True)
class _Segmenter:
    result: SegmentedLines = field(default_factory=SegmentedLines)
    state: Section = Section.NONE
    pending: list[str] = field(default_factory=list[str])

    def feed(self, line: str) -> None:
        if not strip_bullet(line):
            return
        heading = detect_heading(line)
        if heading is None:
            self.pending.append(line.strip())
            return
        self.flush()
        self.state = heading
        if heading is Section.STATS:
            self.result.free_context.append(line.strip())

    def flush(self) -> None:
        lines, self.pending = self.pending, []
        if not lines:
            return
        match self.state:
            case Section.PASSIVE:
                self._flush_passive(lines)
            case Section.Q | Section.W | Section.E | Section.R:
                slot = AbilitySlot(self.state.value)
                records = self.result.abilities.setdefault(slot, [])
                records.extend(_ability_record(line) for line in lines)
            case _:
                self.result.free_context.extend(lines)

    def _flush_passive(self, lines: list[str]) -> None:
        text = "\n".join(strip_bullet(line) for line in lines)
        previous = self.result.passive
        if previous is not None:
            text = f"{previous.new}\n{text}"
        self.result.passive = ChangeRecord(
            attribute=PASSIVE_ATTRIBUTE,
            old="",
            new=text,
            polarity=Polarity.ADJUSTMENT,
            origin=ChangeOrigin.CHANGELOG,
        )


def _ability_record(line: str) -> ChangeRecord:
    parsed = parse_line(line)
    if isinstance(parsed, ChangeRecord):
        return parsed
    return ChangeRecord(
        attribute=NOTE_ATTRIBUTE,
        old="",
        new=parsed,
        polarity=Polarity.ADJUSTMENT,
        origin=ChangeOrigin.CHANGELOG,
    )


def segment_lines(lines: Iterable[str]) -> SegmentedLines:
    """Run the section state machine over one entity's lines."""

    segmenter = _Segmenter()
    for line in lines:
        segmenter.feed(line)
    segmenter.flush()
    return segmenter.result


def segment_block(block: ChangelogBlock, entity_id: EntityId, name: str) -> EntityChangeSet:
    """Changelog-side change set for a block already resolved to ``entity_id``."""

    segmented = segment_lines(block.lines)
    change_set = EntityChangeSet(
        entity_id=entity_id,
        name=name,
        passive_change=segmented.passive,
        free_context=segmented.free_context,
        summary=block.summary,
        context=block.context,
        declared_polarity=block.declared_polarity,
    )
    for slot, records in segmented.abilities.items():
        for record in records:
            change_set.add_ability_change(slot, record)
    return change_set


def group_by_heading(
    lines: Sequence[str],
    resolver: IdentityResolver,
    *,
    hint: EntityKind | None = None,
) -> tuple[list[ChangelogBlock], list[str]]:
    """Split a flat document into entity blocks.

    A line opens a new block when it is a markdown heading or when the whole
    line resolves to a known entity. Markdown headings naming a category
    (``## Objetos``) only change the kind hint. Lines before the first
    entity heading are returned separately as preamble.
    """

    blocks: list[ChangelogBlock] = []
    preamble: list[str] = []
    current_name: str | None = None
    current_hint = hint
    current_lines: list[str] = []

    def close() -> None:
        if current_name is not None:
            blocks.append(
                ChangelogBlock(
                    entity_name_raw=current_name,
                    lines=tuple(current_lines),
                    kind_hint=current_hint,
                )
            )

    for line in lines:
        if not line.strip():
            continue
        title = _entity_heading(line, resolver, current_hint)
        if title is None:
            (current_lines if current_name is not None else preamble).append(line)
            continue
        if _MARKDOWN_HEADING.match(line) and resolver.resolve(title, current_hint) is None:
            kind = kind_for_heading(title)
            if kind is not None:
                close()
                current_name, current_lines, current_hint = None, [], kind
                continue
        close()
        current_name, current_lines = title, []

    close()
    log.debug("Grouped %s lines into %s blocks (%s preamble)", len(lines), len(blocks), len(preamble))
    return blocks, preamble


def _entity_heading(
    line: str,
    resolver: IdentityResolver,
    hint: EntityKind | None,
) -> str | None:
    if detect_heading(line) is not None:
        return None
    markdown = _MARKDOWN_HEADING.match(line)
    if markdown:
        return _MARKDOWN_DECORATION.sub("", markdown.group("title")).strip() or None
    # Bare lines open a block only on an exact alias match.
    title = _MARKDOWN_DECORATION.sub("", line).strip().rstrip(":")
    if title and resolver.table.lookup(title, hint) is not None:
        return title
    return None
