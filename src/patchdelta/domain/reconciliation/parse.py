"""Changelog line parsing.

A line becomes either a structured ``ChangeRecord`` or plain commentary.
Rules are tried in order; the first one that produces a record wins and a
line no rule accepts is returned unchanged (minus its bullet).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Protocol

from patchdelta.domain.model import ChangeOrigin, ChangeRecord, Polarity

_BULLET = re.compile(r"^\s*(?:[•·●▪◦]\s*|[-*–]\s+)")
_BOLD = re.compile(r"\*\*")
_PARENTHETICAL = re.compile(r"\s*\(.*?\)")

BUG_FIX_PHRASES: tuple[str, ...] = ("Corrección de error", "Correccion de error", "Bug fix", "Bugfix")
ARROWS = r"(?:=+>|-+>|&rArr;|⇒|→|➤|(?<=\s)[-–—]{1,3}(?=\s))"


class LineRule(Protocol):
    name: str

    def apply(self, text: str) -> ChangeRecord | None: ...


@dataclass(frozen=True, slots=True)
class BugFixRule:
    """``Corrección de error: <text>`` -> record with empty ``old``."""

    name: str = "bug_fix"
    phrases: tuple[str, ...] = BUG_FIX_PHRASES
    _pattern: re.Pattern[str] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        alternatives = "|".join(re.escape(phrase) for phrase in self.phrases)
        pattern = re.compile(rf"^(?P<phrase>{alternatives})\s*[:：]\s*(?P<rest>.+)$", re.IGNORECASE)
        object.__setattr__(self, "_pattern", pattern)

    def apply(self, text: str) -> ChangeRecord | None:
        match = self._pattern.match(_BOLD.sub("", text).strip())
        if match is None:
            return None
        return ChangeRecord(
            attribute=match.group("phrase"),
            old="",
            new=match.group("rest").strip(),
            polarity=Polarity.ADJUSTMENT,
            origin=ChangeOrigin.CHANGELOG,
        )


@dataclass(frozen=True, slots=True)
class ArrowRule:
    """``label: old -> new`` with colon/arrow spelling variants."""

    name: str = "arrow"
    _pattern: re.Pattern[str] = field(
        init=False,
        repr=False,
        default=re.compile(
            rf"^(?P<label>[^:：]+?)\s*[:：]\s*(?P<old>.+?)\s*{ARROWS}\s*(?P<new>.+?)\s*\.?$"
        ),
    )

    def apply(self, text: str) -> ChangeRecord | None:
        match = self._pattern.match(_BOLD.sub("", text).strip())
        if match is None:
            return None
        label = _PARENTHETICAL.sub("", match.group("label")).strip(" *")
        old, new = match.group("old").strip(), match.group("new").strip()
        if not label or not old or not new or old == new:
            return None
        return ChangeRecord(
            attribute=label,
            old=old,
            new=new,
            polarity=Polarity.ADJUSTMENT,
            origin=ChangeOrigin.CHANGELOG,
        )


LINE_RULES: tuple[LineRule, ...] = (BugFixRule(), ArrowRule())


def strip_bullet(line: str) -> str:
    return _BULLET.sub("", line, count=1).strip()


def parse_line(line: str, rules: tuple[LineRule, ...] = LINE_RULES) -> ChangeRecord | str:
    text = strip_bullet(line)
    for rule in rules:
        record = rule.apply(text)
        if record is not None:
            return record
    return text
