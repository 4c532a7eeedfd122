"""Extract per-entity changelog blocks from a release-notes HTML page.

The page is a flat run of headings: ``h2`` opens a category section
(champions, items, ...), ``h3`` names one entity, ``h4`` names an ability
inside a champion block or a new item inside a "new items" section. Content
between an entity heading and the next heading of the same or higher rank
belongs to that entity.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from bs4 import BeautifulSoup, Tag

from patchdelta.domain.model import ChangelogBlock, EntityKind
from patchdelta.domain.reconciliation.normalize import loose_name
from patchdelta.domain.reconciliation.segment import kind_for_heading

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

log = logging.getLogger(__name__)

HEADING_TAGS = ["h2", "h3", "h4"]
NEW_ITEM_SECTION_MARKERS = ("nuevo", "renovado", "regresan", "new")
SUMMARY_MIN_LENGTH = 10
NESTED_SUMMARY_MIN_LENGTH = 20
DETAIL_TITLE_CLASS = "change-detail-title"

_INLINE_SPACE = re.compile(r"[ \t]+")
_WHITESPACE = re.compile(r"\s+")


@dataclass(slots=True)
class _EntryContent:
    lines: list[str] = field(default_factory=list[str])
    summary: list[str] = field(default_factory=list[str])
    context: list[str] = field(default_factory=list[str])

    def is_empty(self) -> bool:
        return not (self.lines or self.summary or self.context)

    def add_heading(self, tag: Tag) -> None:
        text = tag.get_text().strip()
        if text:
            self.lines.append(f"**{text}**")

    def add_list_item(self, tag: Tag) -> None:
        for br in tag.find_all("br"):
            br.replace_with("\n")
        for part in tag.get_text().split("\n"):
            text = _INLINE_SPACE.sub(" ", part).strip()
            if text:
                self.lines.append(text)

    def add_context(self, tag: Tag) -> None:
        for br in tag.find_all("br"):
            br.replace_with("\n")
        text = tag.get_text().strip()
        if text:
            self.context.append(text)

    def add_summary(self, tag: Tag, *, min_length: int) -> None:
        text = tag.get_text().strip()
        if len(text) > min_length and text not in self.summary:
            self.summary.append(text)


@dataclass(slots=True)
class _ScanState:
    category: EntityKind | None = None
    section_title: str = ""

    def in_new_item_section(self) -> bool:
        title = loose_name(self.section_title)
        return self.category is EntityKind.ITEM and any(
            marker in title for marker in NEW_ITEM_SECTION_MARKERS
        )


def parse_patch_notes(
    html: str,
    *,
    known_names: Mapping[EntityKind, Iterable[str]] | None = None,
) -> list[ChangelogBlock]:
    """Return one block per entity heading that has any content."""

    soup = BeautifulSoup(html, "html.parser")
    known = {
        kind: frozenset(_collapse(name).casefold() for name in names)
        for kind, names in (known_names or {}).items()
    }
    state = _ScanState()
    blocks: list[ChangelogBlock] = []

    for heading in soup.find_all(HEADING_TAGS):
        if not isinstance(heading, Tag):
            continue
        text = _collapse(heading.get_text())
        if not text:
            continue

        if heading.name == "h2":
            state.section_title = text
            state.category = kind_for_heading(text) or state.category
            continue

        known_kind = _known_kind(text, heading.name, known)
        if known_kind is not None:
            state.category = known_kind

        if heading.name == "h4" and not state.in_new_item_section():
            continue

        if known_kind is None:
            announced = kind_for_heading(text)
            if announced is not None:
                state.category = announced
                state.section_title = text
                continue
        if state.category is None:
            state.category = EntityKind.CHAMPION

        name = _entity_name(heading)
        if not name:
            continue
        content = _collect_content(heading)
        if content.is_empty():
            log.debug("Skipping empty patch-notes entry %r", name)
            continue
        blocks.append(
            ChangelogBlock(
                entity_name_raw=name,
                lines=tuple(content.lines),
                kind_hint=state.category,
                summary=" ".join(content.summary),
                context=" ".join(content.context),
                section=state.section_title or None,
            )
        )

    log.debug("Parsed %s patch-notes blocks", len(blocks))
    return blocks


def _collapse(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def _known_kind(
    text: str,
    tag_name: str,
    known: Mapping[EntityKind, frozenset[str]],
) -> EntityKind | None:
    key = text.casefold()
    if tag_name == "h3" and key in known.get(EntityKind.CHAMPION, frozenset()):
        return EntityKind.CHAMPION
    if key in known.get(EntityKind.ITEM, frozenset()):
        return EntityKind.ITEM
    return None


def _entity_name(heading: Tag) -> str:
    link = heading.find("a")
    source = link if isinstance(link, Tag) else heading
    return _collapse(source.get_text())


def _contains(tag: Tag, names: list[str]) -> bool:
    return tag.find(names) is not None


def _collect_content(heading: Tag) -> _EntryContent:
    content = _EntryContent()
    stops_at_h4 = heading.name == "h4"
    for sibling in heading.find_next_siblings():
        if not isinstance(sibling, Tag):
            continue
        tag = sibling.name
        if tag in ("h2", "h3") or _contains(sibling, ["h2", "h3"]):
            break
        if stops_at_h4 and (tag == "h4" or _contains(sibling, ["h4"])):
            break

        match tag:
            case "blockquote":
                content.add_context(sibling)
            case "h4":
                content.add_heading(sibling)
            case "ul" | "ol":
                for item in sibling.find_all("li", recursive=False):
                    if isinstance(item, Tag):
                        content.add_list_item(item)
            case "p":
                if DETAIL_TITLE_CLASS not in (sibling.get("class") or ()):
                    content.add_summary(sibling, min_length=SUMMARY_MIN_LENGTH)
            case "div":
                _collect_nested(sibling, content)
            case _:
                pass
    return content


def _collect_nested(container: Tag, content: _EntryContent) -> None:
    for node in container.find_all(["h4", "li", "blockquote", "p"]):
        if not isinstance(node, Tag):
            continue
        match node.name:
            case "h4":
                content.add_heading(node)
            case "li":
                if node.find_parent("li") is None:
                    content.add_list_item(node)
            case "blockquote":
                content.add_context(node)
            case _:
                if node.find_parent(["li", "blockquote"]) is None:
                    content.add_summary(node, min_length=NESTED_SUMMARY_MIN_LENGTH)
